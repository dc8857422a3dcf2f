from tests.base import ConstructionTestBase

from app.main import RESOURCES
from app.models.material import Expenditure


class PageRenderingTests(ConstructionTestBase):
    def setUp(self):
        super().setUp()
        self.department = self._department()
        self.area = self._area(self.department.id)
        self.customer = self._client()
        self.site = self._site(self.area.id, self.customer.id)
        self.brigade = self._brigade()
        self.worker = self._worker("Member", brigade_id=self.brigade.id)
        self.person = self._personnel(area_id=self.area.id)
        self.equipment = self._equipment()
        self.material = self._material()
        self.task = self._task(self.site.id, brigade_id=self.brigade.id)
        self._add(Expenditure(task_id=self.task.id, material_id=self.material.id, expected_amount=1.0))
        self.ids = {
            "departments": self.department.id,
            "areas": self.area.id,
            "clients": self.customer.id,
            "sites": self.site.id,
            "brigades": self.brigade.id,
            "workers": self.worker.id,
            "technical-personnel": self.person.id,
            "equipment": self.equipment.id,
            "materials": self.material.id,
            "tasks": self.task.id,
        }

    def _ok(self, path):
        response = self.client.get(path)
        self.assertEqual(response.status_code, 200, f"{path}: {response.text[:300]}")
        self.assertNotIn("Error rendering template", response.text, path)
        return response

    def test_every_resource_page_renders(self):
        for name, _ in RESOURCES:
            entity_id = self.ids[name]
            with self.subTest(resource=name):
                self._ok(f"/{name}")
                self._ok(f"/{name}/new")
                self._ok(f"/{name}/{entity_id}")
                self._ok(f"/{name}/{entity_id}/edit")
                self._ok(f"/api/{name}")
                self._ok(f"/api/{name}/{entity_id}")

    def test_every_sort_key_is_accepted(self):
        for name, module in RESOURCES:
            for column in module.LIST_COLUMNS:
                if column.sort:
                    with self.subTest(resource=name, sort=column.sort):
                        self._ok(f"/api/{name}?sort_by={column.sort}&sort_direction=desc")

    def test_every_details_tab_renders(self):
        tabs = {
            "departments": ["areas", "equipment", "sites", "personnel"],
            "areas": ["sites", "personnel"],
            "sites": ["schedule", "materials", "equipment", "brigades", "reports"],
            "brigades": ["workers", "tasks", "current"],
            "tasks": ["materials", "progress"],
        }
        for name, names in tabs.items():
            for tab in names:
                with self.subTest(resource=name, tab=tab):
                    self._ok(f"/api/{name}/{self.ids[name]}?tab={tab}")
                    self._ok(f"/api/{name}/{self.ids[name]}/{tab}")

    def test_extra_fragments_render(self):
        self._ok(f"/api/equipment/{self.equipment.id}/allocations")
        self._ok(f"/api/equipment/{self.equipment.id}/allocations/new")
        self._ok(f"/api/materials/{self.material.id}/usage")
        self._ok("/api/workers/profession-fields?profession=driver")
        self._ok("/api/technical-personnel/qualification-fields?qualification=technologist")
        for selector in (
            "departments",
            "areas",
            "clients",
            "technical-personnel",
            "workers",
            "brigades",
            "sites",
            "equipment",
            "materials",
            "tasks",
        ):
            with self.subTest(selector=selector):
                self._ok(f"/api/selectors/{selector}")

    def test_index_lists_every_section(self):
        response = self._ok("/")
        for name, _ in RESOURCES:
            self.assertIn(f'href="/{name}"', response.text)

    def test_health_checks_the_database(self):
        self.assertEqual(self._ok("/health").json(), {"status": "ok"})

    def test_task_progress_reports_materials(self):
        response = self._ok(f"/api/tasks/{self.task.id}/progress")
        self.assertIn("Materials reported: 0 of 1", response.text)
