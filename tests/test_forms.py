import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

from pydantic import ValidationError

from app.schemas.common import split_list, strip_blanks
from app.schemas.enums import SiteType, label_for
from app.schemas.equipment import AllocationForm
from app.schemas.sites import ParkDetails, RoadDetails, SiteForm
from app.schemas.technical_personnel import EngineerDetails, PersonnelForm
from app.schemas.workers import WorkerForm


class FormDecodingTests(unittest.TestCase):
    def test_strip_blanks_drops_empty_strings_and_empty_lists(self):
        cleaned = strip_blanks({"a": "", "b": "  ", "c": "x", "d": ["", " "], "e": ["", "y"], "f": 0})
        self.assertEqual(cleaned, {"c": "x", "e": ["y"], "f": 0})

    def test_split_list_accepts_repeated_and_comma_separated_values(self):
        self.assertEqual(split_list("a, b,,c"), ["a", "b", "c"])
        self.assertEqual(split_list(["a,b", "c"]), ["a", "b", "c"])
        self.assertEqual(split_list(None), [])

    def test_site_form_nests_flat_fields_into_the_selected_variant(self):
        form = SiteForm.model_validate(
            {
                "name": "Bypass",
                "area_id": "1",
                "client_id": "2",
                "type": "road",
                "location": "km 3",
                "risk_level": "high",
                "description": " ",
                "length": "3.5",
                "lanes": "2",
                "surface": "gravel",
                "has_playground": "true",
            }
        )
        self.assertEqual(form.type, SiteType.ROAD)
        self.assertIsNone(form.description)
        self.assertIsInstance(form.details, RoadDetails)
        self.assertEqual(form.details.lanes, 2)

    def test_site_form_fills_boolean_defaults_for_unchecked_boxes(self):
        form = SiteForm.model_validate(
            {
                "name": "Green",
                "area_id": "1",
                "client_id": "2",
                "type": "park",
                "location": "center",
                "risk_level": "low",
                "area": "1.5",
            }
        )
        self.assertIsInstance(form.details, ParkDetails)
        self.assertFalse(form.details.has_playground)
        self.assertFalse(form.details.has_lighting)

    def test_unknown_site_type_is_rejected(self):
        with self.assertRaises(ValidationError):
            SiteForm.model_validate(
                {"name": "X", "area_id": "1", "client_id": "1", "type": "castle", "location": "x", "risk_level": "low"}
            )

    def test_worker_form_requires_profession_fields(self):
        base = {
            "first_name": "Oleg",
            "last_name": "Popov",
            "gender": "male",
            "phone_number": "1",
            "salary": "100",
            "profession": "electrician",
        }
        with self.assertRaises(ValidationError):
            WorkerForm.model_validate(base)
        form = WorkerForm.model_validate(dict(base, voltage_specialization="10kV", brigade_id=""))
        self.assertIsNone(form.brigade_id)
        self.assertEqual(form.details.voltage_specialization, "10kV")

    def test_personnel_form_builds_engineer_details(self):
        form = PersonnelForm.model_validate(
            {
                "first_name": "Olga",
                "last_name": "Orlova",
                "gender": "female",
                "phone_number": "2",
                "salary": "300",
                "qualification": "engineer",
                "education_level": "PhD",
                "pe_license_id": "7781",
                "position": "",
            }
        )
        self.assertIsInstance(form.details, EngineerDetails)
        self.assertIsNone(form.position)
        self.assertEqual(form.software_skills, [])

    def test_allocation_period_must_be_ordered(self):
        with self.assertRaises(ValidationError):
            AllocationForm.model_validate(
                {"department_id": "1", "amount": "1", "period_start": "2024-05-02", "period_end": "2024-05-01"}
            )
        form = AllocationForm.model_validate({"department_id": "1", "amount": "1", "period_start": "2024-05-02"})
        self.assertIsNone(form.period_end)

    def test_labels(self):
        self.assertEqual(label_for("power_plant"), "Power Plant")
        self.assertEqual(label_for(SiteType.HOUSING), "Housing")
        self.assertEqual(SiteType.BRIDGE.label, "Bridge")
        self.assertEqual(label_for(None), "")
