from tests.base import ConstructionTestBase


class SelectorTests(ConstructionTestBase):
    def test_departments_are_options_sorted_by_name(self):
        self._department(name="Zeta")
        alpha = self._department(name="Alpha")
        response = self.client.get(f"/api/selectors/departments?selected={alpha.id}")
        self.assertEqual(response.status_code, 200)
        text = response.text
        self.assertIn('<option value="">---</option>', text)
        self.assertIn(f'<option value="{alpha.id}" selected>Alpha</option>', text)
        self.assertLess(text.index("Alpha"), text.index("Zeta"))

    def test_blank_selected_and_name_are_ignored(self):
        self._department(name="North")
        response = self.client.get("/api/selectors/departments?selected=&name=")
        self.assertIn("North", response.text)
        self.assertNotIn(" selected", response.text)

    def test_areas_filter_by_department(self):
        north = self._department(name="North")
        south = self._department(name="South")
        self._area(north.id, name="Hill")
        self._area(south.id, name="Bay")
        response = self.client.get(f"/api/selectors/areas?department_id={south.id}")
        self.assertIn("Bay", response.text)
        self.assertNotIn("Hill", response.text)

    def test_sites_show_their_type_as_hint(self):
        area = self._area(self._department().id)
        self._site(area.id, self._client().id, name="Green", site_type="park")
        response = self.client.get("/api/selectors/sites?type=park")
        self.assertIn("Green (Park)", response.text)

    def test_unassigned_workers_only(self):
        brigade = self._brigade("Leader")
        self._worker("Member", brigade_id=brigade.id)
        self._worker("Loner")
        response = self.client.get("/api/selectors/workers?unassigned=true")
        self.assertIn("Loner", response.text)
        self.assertNotIn("Member", response.text)
        self.assertNotIn("Leader", response.text)

    def test_brigadiers_only(self):
        self._brigade("Leader")
        self._worker("Loner")
        response = self.client.get("/api/selectors/workers?is_brigadier=true")
        self.assertIn("Leader", response.text)
        self.assertNotIn("Loner", response.text)

    def test_brigades_are_named_after_their_brigadier(self):
        brigade = self._brigade("Leader")
        response = self.client.get("/api/selectors/brigades?brigadier_name=lead")
        self.assertIn(f'value="{brigade.id}"', response.text)
        self.assertIn("Leader Ivan", response.text)

    def test_equipment_available_only(self):
        self._equipment(name="Crane", amount=0)
        self._equipment(name="Drill", amount=2)
        response = self.client.get("/api/selectors/equipment?available=true")
        self.assertIn("Drill", response.text)
        self.assertNotIn("Crane", response.text)

    def test_invalid_selector_parameter_is_rejected(self):
        response = self.client.get("/api/selectors/sites?type=castle")
        self.assertEqual(response.status_code, 422)
        self.assertIn("Invalid input", response.text)
