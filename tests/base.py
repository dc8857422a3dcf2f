import os
import unittest
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

from app.db.session import Base, get_db
from app.main import app
from app.models.area import Area
from app.models.brigade import Assignment, Brigade
from app.models.client import Client
from app.models.department import Department
from app.models.employee import EMPLOYEE_CLASS_TECHNICAL_PERSONNEL, EMPLOYEE_CLASS_WORKER, Employee
from app.models.equipment import Equipment, EquipmentAllocation
from app.models.material import Expenditure, Material
from app.models.site import Bridge, Housing, Park, PowerPlant, Road, Site
from app.models.task import Task
from app.models.technical_personnel import Engineer, TechnicalPersonnel, Technician, Technologist
from app.models.worker import Driver, Electrician, Mason, Plumber, Welder, Worker

MODELS = [
    Employee,
    Department,
    Area,
    TechnicalPersonnel,
    Technician,
    Technologist,
    Engineer,
    Client,
    Site,
    PowerPlant,
    Road,
    Housing,
    Bridge,
    Park,
    Worker,
    Electrician,
    Plumber,
    Welder,
    Driver,
    Mason,
    Brigade,
    Assignment,
    Equipment,
    EquipmentAllocation,
    Task,
    Material,
    Expenditure,
]


class ConstructionTestBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(bind=cls.engine, tables=[model.__table__ for model in MODELS])

    @classmethod
    def tearDownClass(cls):
        Base.metadata.drop_all(bind=cls.engine, tables=[model.__table__ for model in MODELS])
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            for model in reversed(MODELS):
                db.execute(delete(model))
            db.commit()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    def _add(self, row):
        with self.SessionLocal() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
        return row

    def _department(self, name="North", supervisor_id=None) -> Department:
        return self._add(Department(name=name, supervisor_id=supervisor_id))

    def _area(self, department_id: int, name="Area 1", supervisor_id=None) -> Area:
        return self._add(Area(name=name, department_id=department_id, supervisor_id=supervisor_id))

    def _client(self, name="Acme", is_vip=False) -> Client:
        return self._add(
            Client(
                name=name,
                inn=7701234567,
                address="1 Main st",
                contact_person_email="boss@acme.test",
                contact_person_name="Boss",
                is_vip=is_vip,
            )
        )

    def _site(self, area_id: int, client_id: int, name="Site", site_type="road") -> Site:
        site = self._add(
            Site(name=name, type=site_type, area_id=area_id, client_id=client_id, location="km 12", risk_level="low")
        )
        if site_type == "road":
            self._add(Road(id=site.id, length=10.0, lanes=2, surface="asphalt"))
        elif site_type == "park":
            self._add(Park(id=site.id, area=3.5, has_playground=True, has_lighting=False))
        return site

    def _employee(self, employee_class: str, last_name: str, first_name="Ivan") -> Employee:
        return self._add(
            Employee(
                employee_class=employee_class,
                first_name=first_name,
                last_name=last_name,
                gender="male",
                phone_number="+70000000000",
                salary=1000,
            )
        )

    def _worker(self, last_name="Petrov", brigade_id=None) -> Worker:
        employee = self._employee(EMPLOYEE_CLASS_WORKER, last_name)
        worker = self._add(Worker(id=employee.id, profession="welder"))
        self._add(Welder(id=employee.id, welding_machine="MIG-250"))
        if brigade_id is not None:
            self._add(Assignment(worker_id=worker.id, brigade_id=brigade_id))
        return worker

    def _brigade(self, brigadier_last_name="Sidorov") -> Brigade:
        brigadier = self._worker(brigadier_last_name)
        brigade = self._add(Brigade(brigadier_id=brigadier.id))
        self._add(Assignment(worker_id=brigadier.id, brigade_id=brigade.id))
        return brigade

    def _personnel(self, last_name="Smirnov", area_id=None) -> TechnicalPersonnel:
        employee = self._employee(EMPLOYEE_CLASS_TECHNICAL_PERSONNEL, last_name)
        person = self._add(
            TechnicalPersonnel(
                id=employee.id,
                qualification="engineer",
                education_level="MSc",
                software_skills=["AutoCAD"],
                area_id=area_id,
            )
        )
        self._add(Engineer(id=employee.id, pe_license_id=42))
        return person

    def _task(self, site_id: int, name="Task", brigade_id=None, start=date(2024, 1, 1), end=date(2024, 2, 1), done=None):
        return self._add(
            Task(
                name=name,
                site_id=site_id,
                brigade_id=brigade_id,
                period_start=start,
                expected_period_end=end,
                actual_period_end=done,
            )
        )

    def _material(self, name="Cement", cost=10.0, units="kg") -> Material:
        return self._add(Material(name=name, cost=cost, units=units))

    def _equipment(self, name="Excavator", amount=3) -> Equipment:
        return self._add(Equipment(name=name, amount=amount, purchase_date=date(2020, 5, 1), purchase_cost=1000.0))

    def assertNotification(self, response, result: str, message_part: str | None = None, redirect: str | None = None):
        self.assertEqual(response.status_code, 200, response.text)
        self.assertIn(f'data-result="{result}"', response.text)
        if message_part is not None:
            self.assertIn(message_part, response.text)
        if redirect is not None:
            self.assertIn(f'data-redirect="{redirect}"', response.text)
