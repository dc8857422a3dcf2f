import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.area import Area
from app.models.brigade import Brigade
from app.models.client import Client
from app.models.employee import Employee
from app.models.equipment import Equipment, EquipmentAllocation
from app.models.material import Expenditure, Material
from app.models.site import Bridge, Housing, Park, PowerPlant, Road, Site
from app.models.task import Task
from app.schemas.common import Page, Pagination
from app.schemas.enums import SiteType
from app.schemas.notification import Notification
from app.schemas.sites import SiteFilter, SiteForm
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists, today
from app.services.derived import (
    allocation_is_current,
    deadline_exceeded_expr,
    site_status_expr,
    site_status_predicate,
    task_status_expr,
)
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query
from app.services.subtypes import SubtypeRegistry

_LOG = logging.getLogger("app.services.sites")

SITE_SUBTYPES = SubtypeRegistry(
    SiteType,
    "type",
    {
        SiteType.POWER_PLANT: PowerPlant,
        SiteType.ROAD: Road,
        SiteType.HOUSING: Housing,
        SiteType.BRIDGE: Bridge,
        SiteType.PARK: Park,
    },
)

SORT = SortSpec(
    allowed={
        "name": Site.name,
        "type": Site.type,
        "area_name": Area.name,
        "client_name": Client.name,
        "status": site_status_expr(),
    },
    default=Site.id,
)


def _base_query(db: Session):
    return (
        db.query(
            Site.id,
            Site.name,
            Site.type,
            Site.area_id,
            Area.name.label("area_name"),
            Area.department_id,
            Site.client_id,
            Client.name.label("client_name"),
            Site.location,
            Site.risk_level,
            Site.description,
            site_status_expr().label("status"),
        )
        .join(Area, Area.id == Site.area_id)
        .join(Client, Client.id == Site.client_id)
    )


def list_sites(db: Session, f: SiteFilter) -> Page:
    filters = (
        FilterSet()
        .add(Site.area_id, "=", f.area_id)
        .add(Area.department_id, "=", f.department_id)
        .add(Site.client_id, "=", f.client_id)
        .add(Site.type, "=", f.type)
        .add(Site.name, "~", f.name)
        .when(f.status, site_status_predicate)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_site(db: Session, site_id: int) -> dict:
    site = first_or_404(_base_query(db).filter(Site.id == site_id), "Site", site_id)
    details = SITE_SUBTYPES.values(db, site.type, site_id)
    return {"site": site, "details": details}


def site_schedule(db: Session, site_id: int, pagination: Pagination) -> Page:
    now = today()
    q = (
        db.query(
            Task.id,
            Task.name,
            Task.brigade_id,
            full_name(Employee).label("brigadier_name"),
            Task.period_start,
            Task.expected_period_end,
            Task.actual_period_end,
            task_status_expr(now).label("status"),
            deadline_exceeded_expr(now).label("deadline_exceeded"),
        )
        .outerjoin(Brigade, Brigade.id == Task.brigade_id)
        .outerjoin(Employee, Employee.id == Brigade.brigadier_id)
        .filter(Task.site_id == site_id)
    )
    return paginate_query(q, pagination, Task.period_start, Task.id)


def site_materials(db: Session, site_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            Material.id,
            Material.name,
            Material.units,
            Material.cost,
            func.sum(Expenditure.expected_amount).label("expected_amount"),
            func.sum(func.coalesce(Expenditure.actual_amount, 0.0)).label("actual_amount"),
        )
        .join(Expenditure, Expenditure.material_id == Material.id)
        .join(Task, Task.id == Expenditure.task_id)
        .filter(Task.site_id == site_id)
        .group_by(Material.id, Material.name, Material.units, Material.cost)
    )
    return paginate_query(q, pagination, Material.id)


def site_equipment(db: Session, site_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            EquipmentAllocation.id,
            EquipmentAllocation.equipment_id,
            Equipment.name,
            EquipmentAllocation.amount,
            EquipmentAllocation.period_start,
            EquipmentAllocation.period_end,
        )
        .join(Equipment, Equipment.id == EquipmentAllocation.equipment_id)
        .filter(EquipmentAllocation.site_id == site_id, allocation_is_current(today()))
    )
    return paginate_query(q, pagination, EquipmentAllocation.id)


def site_brigades(db: Session, site_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            Brigade.id,
            Brigade.brigadier_id,
            full_name(Employee).label("brigadier_name"),
            func.count(Task.id).label("task_count"),
        )
        .join(Task, Task.brigade_id == Brigade.id)
        .join(Employee, Employee.id == Brigade.brigadier_id)
        .filter(Task.site_id == site_id)
        .group_by(Brigade.id, Brigade.brigadier_id, Employee.last_name, Employee.first_name)
    )
    return paginate_query(q, pagination, Brigade.id)


def site_report(db: Session, site_id: int) -> dict:
    """Deadline and spending summary of one site."""
    now = today()
    tasks = db.query(Task).filter(Task.site_id == site_id).order_by(Task.period_start, Task.id).all()
    delayed = []
    for task in tasks:
        end = task.actual_period_end or now
        delay = (end - task.expected_period_end).days
        if delay > 0:
            delayed.append({"id": task.id, "name": task.name, "delay_days": delay, "open": task.actual_period_end is None})
    estimated, actual = (
        db.query(
            func.coalesce(func.sum(Expenditure.expected_amount * Material.cost), 0.0),
            func.coalesce(func.sum(func.coalesce(Expenditure.actual_amount, 0.0) * Material.cost), 0.0),
        )
        .select_from(Expenditure)
        .join(Material, Material.id == Expenditure.material_id)
        .join(Task, Task.id == Expenditure.task_id)
        .filter(Task.site_id == site_id)
        .one()
    )
    return {
        "total_tasks": len(tasks),
        "completed_tasks": sum(1 for t in tasks if t.actual_period_end is not None),
        "delayed": delayed,
        "estimated_spendings": float(estimated or 0),
        "actual_spendings": float(actual or 0),
    }


def _check_references(db: Session, form: SiteForm, redirect: str) -> Notification | None:
    if not row_exists(db, Area, form.area_id):
        return refused(_LOG, f"Area with ID {form.area_id} does not exist", redirect)
    if not row_exists(db, Client, form.client_id):
        return refused(_LOG, f"Client with ID {form.client_id} does not exist", redirect)
    return None


def _apply_common(site: Site, form: SiteForm) -> None:
    site.name = form.name
    site.area_id = form.area_id
    site.client_id = form.client_id
    site.type = form.type.value
    site.location = form.location
    site.risk_level = form.risk_level.value
    site.description = form.description


def create_site(db: Session, form: SiteForm) -> Notification:
    problem = _check_references(db, form, "/sites/new")
    if problem:
        return problem
    site = Site()
    _apply_common(site, form)
    try:
        db.add(site)
        db.flush()
        SITE_SUBTYPES.insert(db, site.id, form.details)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create site", "/sites/new")
    _LOG.info("site %s created as %s", site.id, site.type)
    return Notification.success(f"Site {form.name} created successfully", f"/sites/{site.id}")


def update_site(db: Session, site_id: int, form: SiteForm) -> Notification:
    site = load_or_404(db, Site, site_id, "Site")
    problem = _check_references(db, form, f"/sites/{site_id}/edit")
    if problem:
        return problem
    old_type = site.type
    try:
        _apply_common(site, form)
        db.flush()
        SITE_SUBTYPES.sync(db, site_id, old_type, form.details)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update site", f"/sites/{site_id}/edit")
    return Notification.success(f"Site {form.name} updated successfully", f"/sites/{site_id}")


def delete_site(db: Session, site_id: int) -> Notification:
    site = load_or_404(db, Site, site_id, "Site")
    tasks = db.query(Task).filter(Task.site_id == site_id).count()
    if tasks:
        return refused(_LOG, f"Cannot delete site: it has {tasks} tasks. Remove tasks first.", "/sites")
    allocations = db.query(EquipmentAllocation).filter(EquipmentAllocation.site_id == site_id).count()
    if allocations:
        return refused(
            _LOG, f"Cannot delete site: it has {allocations} equipment allocations. Remove allocations first.", "/sites"
        )
    try:
        SITE_SUBTYPES.delete(db, site.type, site_id)
        db.delete(site)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete site", "/sites")
    return Notification.success("Site successfully deleted", "/sites")
