from unittest import mock

from sqlalchemy.exc import SQLAlchemyError

from tests.base import ConstructionTestBase

from app.models.site import Park, Road, Site
from app.schemas.enums import SiteType
from app.services.sites import SITE_SUBTYPES
from app.services.subtypes import SubtypeRegistry


class SiteSubtypeTests(ConstructionTestBase):
    def setUp(self):
        super().setUp()
        department = self._department()
        self.area = self._area(department.id)
        self.customer = self._client()

    def _form(self, **extra):
        data = {
            "name": "Ring road",
            "area_id": str(self.area.id),
            "client_id": str(self.customer.id),
            "location": "North bypass",
            "risk_level": "medium",
            "description": "",
        }
        data.update(extra)
        return data

    def _road_form(self, **extra):
        return self._form(**{"type": "road", "length": "12.5", "lanes": "4", "surface": "asphalt", **extra})

    def _park_form(self, **extra):
        return self._form(**{"type": "park", "area": "2.5", "has_playground": "true", **extra})

    def _only_site(self):
        with self.SessionLocal() as db:
            return db.query(Site).one()

    def test_create_road_writes_base_row_and_one_satellite(self):
        response = self.client.post("/api/sites", data=self._road_form())
        self.assertNotification(response, "success", "Ring road")

        site = self._only_site()
        self.assertEqual(site.type, "road")
        self.assertIsNone(site.description)
        with self.SessionLocal() as db:
            road = db.get(Road, site.id)
            self.assertEqual(road.lanes, 4)
            self.assertEqual(road.surface, "asphalt")
            self.assertEqual(SITE_SUBTYPES.count_satellites(db, site.id), 1)
        self.assertIn(f'data-redirect="/sites/{site.id}"', response.text)

    def test_changing_road_to_park_replaces_the_satellite(self):
        self.client.post("/api/sites", data=self._road_form())
        site = self._only_site()

        response = self.client.put(f"/api/sites/{site.id}", data=self._park_form())
        self.assertNotification(response, "success")

        with self.SessionLocal() as db:
            self.assertEqual(db.get(Site, site.id).type, "park")
            self.assertIsNone(db.get(Road, site.id))
            park = db.get(Park, site.id)
            self.assertEqual(park.area, 2.5)
            self.assertTrue(park.has_playground)
            self.assertFalse(park.has_lighting)
            self.assertEqual(SITE_SUBTYPES.count_satellites(db, site.id), 1)

    def test_update_with_same_type_edits_satellite_in_place(self):
        self.client.post("/api/sites", data=self._road_form())
        site = self._only_site()

        response = self.client.put(f"/api/sites/{site.id}", data=self._road_form(lanes="6"))
        self.assertNotification(response, "success")
        with self.SessionLocal() as db:
            self.assertEqual(db.get(Road, site.id).lanes, 6)
            self.assertEqual(SITE_SUBTYPES.count_satellites(db, site.id), 1)

    def test_failed_satellite_insert_rolls_back_the_base_row(self):
        with mock.patch.object(SITE_SUBTYPES, "insert", side_effect=SQLAlchemyError("satellite write failed")):
            response = self.client.post("/api/sites", data=self._road_form())

        self.assertNotification(response, "error", "satellite write failed", redirect="/sites/new")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(Site).count(), 0)
            self.assertEqual(db.query(Road).count(), 0)

    def test_failed_type_change_leaves_site_untouched(self):
        self.client.post("/api/sites", data=self._road_form())
        site = self._only_site()

        with mock.patch.object(SITE_SUBTYPES, "insert", side_effect=SQLAlchemyError("satellite write failed")):
            response = self.client.put(f"/api/sites/{site.id}", data=self._park_form(name="Renamed"))

        self.assertNotification(response, "error", "Failed to update site")
        with self.SessionLocal() as db:
            unchanged = db.get(Site, site.id)
            self.assertEqual(unchanged.type, "road")
            self.assertEqual(unchanged.name, "Ring road")
            self.assertIsNotNone(db.get(Road, site.id))
            self.assertIsNone(db.get(Park, site.id))

    def test_missing_type_specific_field_is_rejected(self):
        data = self._road_form()
        data["lanes"] = ""
        response = self.client.post("/api/sites", data=data)
        self.assertNotification(response, "error", "Invalid input")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(Site).count(), 0)

    def test_unknown_area_is_refused_before_writing(self):
        response = self.client.post("/api/sites", data=self._road_form(area_id="999"))
        self.assertNotification(response, "error", "Area with ID 999 does not exist")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(Site).count(), 0)

    def test_delete_removes_satellite(self):
        self.client.post("/api/sites", data=self._road_form())
        site = self._only_site()
        response = self.client.delete(f"/api/sites/{site.id}")
        self.assertNotification(response, "success", redirect="/sites")
        with self.SessionLocal() as db:
            self.assertIsNone(db.get(Site, site.id))
            self.assertEqual(SITE_SUBTYPES.count_satellites(db, site.id), 0)

    def test_delete_with_tasks_is_refused(self):
        site = self._site(self.area.id, self.customer.id)
        self._task(site.id)
        self._task(site.id, name="Second")
        response = self.client.delete(f"/api/sites/{site.id}")
        self.assertNotification(response, "error", "2 tasks", redirect="/sites")
        with self.SessionLocal() as db:
            self.assertIsNotNone(db.get(Site, site.id))

    def test_details_show_type_specific_values(self):
        site = self._site(self.area.id, self.customer.id, name="Central park", site_type="park")
        response = self.client.get(f"/api/sites/{site.id}")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Central park", response.text)
        self.assertIn("Has playground", response.text)

    def test_type_fields_fragment_follows_selected_type(self):
        response = self.client.get("/api/sites/type-fields?type=bridge")
        self.assertEqual(response.status_code, 200)
        self.assertIn('name="max_load"', response.text)
        self.assertNotIn('name="lanes"', response.text)

    def test_registry_must_cover_every_variant(self):
        with self.assertRaises(RuntimeError):
            SubtypeRegistry(SiteType, "type", {SiteType.ROAD: Road})
