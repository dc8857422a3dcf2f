from tests.base import ConstructionTestBase

from app.models.area import Area
from app.models.technical_personnel import TechnicalPersonnel


class AreaTests(ConstructionTestBase):
    def setUp(self):
        super().setUp()
        self.department = self._department()

    def test_delete_area_with_sites_is_refused_and_area_survives(self):
        area = self._area(self.department.id)
        customer = self._client()
        for i in range(3):
            self._site(area.id, customer.id, name=f"Site {i}")

        response = self.client.delete(f"/api/areas/{area.id}")

        self.assertNotification(response, "error", "3 sites", redirect="/areas")
        self.assertIn("Cannot delete area", response.text)
        with self.SessionLocal() as db:
            self.assertIsNotNone(db.get(Area, area.id))

    def test_delete_empty_area_detaches_personnel(self):
        area = self._area(self.department.id)
        person = self._personnel(area_id=area.id)

        response = self.client.delete(f"/api/areas/{area.id}")

        self.assertNotification(response, "success", "Area successfully deleted", redirect="/areas")
        with self.SessionLocal() as db:
            self.assertIsNone(db.get(Area, area.id))
            self.assertIsNone(db.get(TechnicalPersonnel, person.id).area_id)

    def test_delete_missing_area_reports_not_found(self):
        response = self.client.delete("/api/areas/404")
        self.assertNotification(response, "error", "Area with ID 404 not found")

    def test_create_requires_existing_department(self):
        response = self.client.post("/api/areas", data={"name": "East", "department_id": "77"})
        self.assertNotification(response, "error", "Department with ID 77 does not exist", redirect="/areas/new")
        with self.SessionLocal() as db:
            self.assertEqual(db.query(Area).count(), 0)

    def test_create_and_update_area(self):
        supervisor = self._personnel()
        response = self.client.post(
            "/api/areas",
            data={"name": "East", "department_id": str(self.department.id), "supervisor_id": ""},
        )
        self.assertNotification(response, "success", "Area East created successfully")
        with self.SessionLocal() as db:
            area = db.query(Area).one()
            self.assertIsNone(area.supervisor_id)

        response = self.client.put(
            f"/api/areas/{area.id}",
            data={"name": "East 2", "department_id": str(self.department.id), "supervisor_id": str(supervisor.id)},
        )
        self.assertNotification(response, "success", redirect=f"/areas/{area.id}")
        with self.SessionLocal() as db:
            updated = db.get(Area, area.id)
            self.assertEqual(updated.name, "East 2")
            self.assertEqual(updated.supervisor_id, supervisor.id)

    def test_list_with_blank_department_filter_shows_everything(self):
        other = self._department(name="South")
        self._area(self.department.id, name="North 1")
        self._area(other.id, name="South 1")

        blank = self.client.get("/api/areas?department_id=")
        narrowed = self.client.get(f"/api/areas?department_id={other.id}")

        self.assertIn("North 1", blank.text)
        self.assertIn("South 1", blank.text)
        self.assertIn("South 1", narrowed.text)
        self.assertNotIn("North 1", narrowed.text)

    def test_details_and_tabs_render(self):
        area = self._area(self.department.id, name="Riverside")
        customer = self._client()
        self._site(area.id, customer.id, name="Embankment")

        details = self.client.get(f"/api/areas/{area.id}")
        sites = self.client.get(f"/api/areas/{area.id}/sites")

        self.assertIn("Riverside", details.text)
        self.assertIn("Embankment", sites.text)

    def test_page_for_missing_area_renders_not_found(self):
        response = self.client.get("/areas/12345")
        self.assertEqual(response.status_code, 404)
        self.assertIn("Area with ID 12345 not found", response.text)
