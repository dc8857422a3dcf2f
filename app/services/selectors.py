"""Short id/name option lists feeding the dropdowns of every form."""
from sqlalchemy import exists
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.area import Area
from app.models.brigade import Assignment, Brigade
from app.models.client import Client
from app.models.department import Department
from app.models.employee import Employee
from app.models.equipment import Equipment
from app.models.material import Material
from app.models.site import Site
from app.models.task import Task
from app.models.technical_personnel import TechnicalPersonnel
from app.models.worker import Worker
from app.schemas import selectors as q
from app.services.common import full_name, today
from app.services.derived import available_amount_expr, task_status_predicate
from app.services.list_query import FilterSet
from app.services.workers import is_brigadier_expr


def _options(query, filters: FilterSet, order_by) -> list:
    return filters.apply(query).order_by(order_by).limit(settings.SELECTOR_LIMIT).all()


def departments(db: Session, f: q.NameQuery) -> list:
    return _options(
        db.query(Department.id, Department.name),
        FilterSet().add(Department.name, "~", f.name),
        Department.name,
    )


def areas(db: Session, f: q.AreaSelectorQuery) -> list:
    return _options(
        db.query(Area.id, Area.name),
        FilterSet().add(Area.department_id, "=", f.department_id).add(Area.name, "~", f.name),
        Area.name,
    )


def clients(db: Session, f: q.NameQuery) -> list:
    return _options(db.query(Client.id, Client.name), FilterSet().add(Client.name, "~", f.name), Client.name)


def technical_personnel(db: Session, f: q.PersonnelSelectorQuery) -> list:
    name = full_name(Employee)
    query = (
        db.query(TechnicalPersonnel.id, name.label("name"), TechnicalPersonnel.qualification.label("hint"))
        .join(Employee, Employee.id == TechnicalPersonnel.id)
        .outerjoin(Area, Area.id == TechnicalPersonnel.area_id)
    )
    filters = (
        FilterSet()
        .add(TechnicalPersonnel.qualification, "=", f.qualification)
        .add(TechnicalPersonnel.position, "=", f.position)
        .add(Area.department_id, "=", f.department_id)
        .add(TechnicalPersonnel.area_id, "=", f.area_id)
        .add(name, "~", f.name)
    )
    return _options(query, filters, name)


def workers(db: Session, f: q.WorkerSelectorQuery) -> list:
    name = full_name(Employee)
    query = (
        db.query(Worker.id, name.label("name"), Worker.profession.label("hint"))
        .join(Employee, Employee.id == Worker.id)
        .outerjoin(Assignment, Assignment.worker_id == Worker.id)
    )
    filters = (
        FilterSet()
        .add(Worker.profession, "=", f.profession)
        .add(Assignment.brigade_id, "=", f.brigade_id)
        .add(is_brigadier_expr(), "flag", f.is_brigadier)
        .add(Assignment.worker_id.is_(None), "flag", f.unassigned)
        .add(name, "~", f.name)
    )
    return _options(query, filters, name)


def brigades(db: Session, f: q.BrigadeSelectorQuery) -> list:
    name = full_name(Employee)
    query = db.query(Brigade.id, name.label("name")).join(Employee, Employee.id == Brigade.brigadier_id)
    busy = exists().where(Task.brigade_id == Brigade.id, Task.actual_period_end.is_(None))
    filters = (
        FilterSet()
        .add(name, "~", f.brigadier_name)
        .when(f.site_id, lambda v: exists().where(Task.brigade_id == Brigade.id, Task.site_id == v))
        .add(busy, "flag", None if f.available is None else not f.available)
    )
    return _options(query, filters, name)


def sites(db: Session, f: q.SiteSelectorQuery) -> list:
    query = db.query(Site.id, Site.name, Site.type.label("hint")).join(Area, Area.id == Site.area_id)
    filters = (
        FilterSet()
        .add(Site.area_id, "=", f.area_id)
        .add(Area.department_id, "=", f.department_id)
        .add(Site.client_id, "=", f.client_id)
        .add(Site.type, "=", f.type)
        .add(Site.name, "~", f.name)
    )
    return _options(query, filters, Site.name)


def equipment(db: Session, f: q.EquipmentSelectorQuery) -> list:
    available = available_amount_expr(today())
    query = db.query(Equipment.id, Equipment.name, available.label("hint"))
    filters = FilterSet().add(Equipment.name, "~", f.name).add(available > 0, "flag", f.available)
    return _options(query, filters, Equipment.name)


def materials(db: Session, f: q.NameQuery) -> list:
    query = db.query(Material.id, Material.name, Material.units.label("hint"))
    return _options(query, FilterSet().add(Material.name, "~", f.name), Material.name)


def tasks(db: Session, f: q.TaskSelectorQuery) -> list:
    now = today()
    query = db.query(Task.id, Task.name)
    filters = (
        FilterSet()
        .add(Task.site_id, "=", f.site_id)
        .add(Task.brigade_id, "=", f.brigade_id)
        .when(f.status, lambda v: task_status_predicate(v, now))
        .add(Task.name, "~", f.name)
    )
    return _options(query, filters, Task.name)
