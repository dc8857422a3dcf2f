import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from app.models.area import Area
from app.models.department import Department
from app.models.employee import Employee
from app.models.equipment import Equipment, EquipmentAllocation
from app.models.site import Site
from app.models.technical_personnel import TechnicalPersonnel
from app.schemas.common import Page, Pagination
from app.schemas.departments import DepartmentFilter, DepartmentForm
from app.schemas.notification import Notification
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists, today
from app.services.derived import allocation_is_current
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query

_LOG = logging.getLogger("app.services.departments")

Supervisor = aliased(Employee, name="supervisor")

SORT = SortSpec(
    allowed={
        "name": Department.name,
        "supervisor_name": full_name(Supervisor),
    },
    default=Department.id,
)


def _base_query(db: Session):
    return db.query(
        Department.id,
        Department.name,
        Department.supervisor_id,
        full_name(Supervisor).label("supervisor_name"),
    ).outerjoin(Supervisor, Supervisor.id == Department.supervisor_id)


def list_departments(db: Session, f: DepartmentFilter) -> Page:
    filters = (
        FilterSet()
        .add(Department.supervisor_id, "=", f.supervisor_id)
        .add(Department.name, "~", f.name)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_department(db: Session, department_id: int):
    return first_or_404(_base_query(db).filter(Department.id == department_id), "Department", department_id)


def department_areas(db: Session, department_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(Area.id, Area.name, Area.supervisor_id, full_name(Supervisor).label("supervisor_name"))
        .outerjoin(Supervisor, Supervisor.id == Area.supervisor_id)
        .filter(Area.department_id == department_id)
    )
    return paginate_query(q, pagination, Area.id)


def department_equipment(db: Session, department_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(Equipment.id, Equipment.name, func.sum(EquipmentAllocation.amount).label("amount"))
        .join(EquipmentAllocation, EquipmentAllocation.equipment_id == Equipment.id)
        .filter(EquipmentAllocation.department_id == department_id, allocation_is_current(today()))
        .group_by(Equipment.id, Equipment.name)
    )
    return paginate_query(q, pagination, Equipment.id)


def department_sites(db: Session, department_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(Site.id, Site.name, Site.type, Area.name.label("area_name"))
        .join(Area, Area.id == Site.area_id)
        .filter(Area.department_id == department_id)
    )
    return paginate_query(q, pagination, Site.id)


def department_personnel(db: Session, department_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            TechnicalPersonnel.id,
            full_name(Employee).label("name"),
            TechnicalPersonnel.qualification,
            TechnicalPersonnel.position,
            Area.name.label("area_name"),
        )
        .join(Employee, Employee.id == TechnicalPersonnel.id)
        .join(Area, Area.id == TechnicalPersonnel.area_id)
        .filter(Area.department_id == department_id)
    )
    return paginate_query(q, pagination, TechnicalPersonnel.id)


def _check_supervisor(db: Session, supervisor_id: int | None, redirect: str) -> Notification | None:
    if supervisor_id is not None and not row_exists(db, TechnicalPersonnel, supervisor_id):
        return refused(_LOG, f"Technical personnel with ID {supervisor_id} does not exist", redirect)
    return None


def create_department(db: Session, form: DepartmentForm) -> Notification:
    problem = _check_supervisor(db, form.supervisor_id, "/departments/new")
    if problem:
        return problem
    department = Department(name=form.name, supervisor_id=form.supervisor_id)
    try:
        db.add(department)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create department", "/departments/new")
    _LOG.info("department %s created", department.id)
    return Notification.success(f"Department {department.name} created successfully", f"/departments/{department.id}")


def update_department(db: Session, department_id: int, form: DepartmentForm) -> Notification:
    department = load_or_404(db, Department, department_id, "Department")
    problem = _check_supervisor(db, form.supervisor_id, f"/departments/{department_id}/edit")
    if problem:
        return problem
    department.name = form.name
    department.supervisor_id = form.supervisor_id
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update department", f"/departments/{department_id}/edit")
    return Notification.success(f"Department {form.name} updated successfully", f"/departments/{department_id}")


def delete_department(db: Session, department_id: int) -> Notification:
    department = load_or_404(db, Department, department_id, "Department")
    areas = db.query(Area).filter(Area.department_id == department_id).count()
    if areas:
        return refused(_LOG, f"Cannot delete department: it has {areas} areas. Remove areas first.", "/departments")
    allocations = db.query(EquipmentAllocation).filter(EquipmentAllocation.department_id == department_id).count()
    if allocations:
        return refused(
            _LOG,
            f"Cannot delete department: it has {allocations} equipment allocations. Remove allocations first.",
            "/departments",
        )
    try:
        db.delete(department)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete department", "/departments")
    return Notification.success("Department successfully deleted", "/departments")
