import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from app.models.area import Area
from app.models.client import Client
from app.models.department import Department
from app.models.employee import Employee
from app.models.site import Site
from app.models.technical_personnel import TechnicalPersonnel
from app.schemas.areas import AreaFilter, AreaForm
from app.schemas.common import Page, Pagination
from app.schemas.notification import Notification
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query

_LOG = logging.getLogger("app.services.areas")

Supervisor = aliased(Employee, name="supervisor")

SORT = SortSpec(
    allowed={
        "name": Area.name,
        "department_name": Department.name,
        "supervisor_name": full_name(Supervisor),
    },
    default=Area.id,
)


def _base_query(db: Session):
    return (
        db.query(
            Area.id,
            Area.name,
            Area.department_id,
            Department.name.label("department_name"),
            Area.supervisor_id,
            full_name(Supervisor).label("supervisor_name"),
        )
        .join(Department, Department.id == Area.department_id)
        .outerjoin(Supervisor, Supervisor.id == Area.supervisor_id)
    )


def list_areas(db: Session, f: AreaFilter) -> Page:
    filters = (
        FilterSet()
        .add(Area.department_id, "=", f.department_id)
        .add(Area.supervisor_id, "=", f.supervisor_id)
        .add(Area.name, "~", f.name)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_area(db: Session, area_id: int):
    return first_or_404(_base_query(db).filter(Area.id == area_id), "Area", area_id)


def area_sites(db: Session, area_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(Site.id, Site.name, Site.type, Site.client_id, Client.name.label("client_name"))
        .join(Client, Client.id == Site.client_id)
        .filter(Site.area_id == area_id)
    )
    return paginate_query(q, pagination, Site.id)


def area_personnel(db: Session, area_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            TechnicalPersonnel.id,
            full_name(Employee).label("name"),
            TechnicalPersonnel.qualification,
            TechnicalPersonnel.position,
        )
        .join(Employee, Employee.id == TechnicalPersonnel.id)
        .filter(TechnicalPersonnel.area_id == area_id)
    )
    return paginate_query(q, pagination, TechnicalPersonnel.id)


def _check_references(db: Session, form: AreaForm, redirect: str) -> Notification | None:
    if not row_exists(db, Department, form.department_id):
        return refused(_LOG, f"Department with ID {form.department_id} does not exist", redirect)
    if form.supervisor_id is not None and not row_exists(db, TechnicalPersonnel, form.supervisor_id):
        return refused(_LOG, f"Technical personnel with ID {form.supervisor_id} does not exist", redirect)
    return None


def create_area(db: Session, form: AreaForm) -> Notification:
    problem = _check_references(db, form, "/areas/new")
    if problem:
        return problem
    area = Area(name=form.name, department_id=form.department_id, supervisor_id=form.supervisor_id)
    try:
        db.add(area)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create area", "/areas/new")
    _LOG.info("area %s created", area.id)
    return Notification.success(f"Area {area.name} created successfully", f"/areas/{area.id}")


def update_area(db: Session, area_id: int, form: AreaForm) -> Notification:
    area = load_or_404(db, Area, area_id, "Area")
    problem = _check_references(db, form, f"/areas/{area_id}/edit")
    if problem:
        return problem
    area.name = form.name
    area.department_id = form.department_id
    area.supervisor_id = form.supervisor_id
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update area", f"/areas/{area_id}/edit")
    return Notification.success(f"Area {form.name} updated successfully", f"/areas/{area_id}")


def delete_area(db: Session, area_id: int) -> Notification:
    area = load_or_404(db, Area, area_id, "Area")
    sites = db.query(Site).filter(Site.area_id == area_id).count()
    if sites:
        return refused(_LOG, f"Cannot delete area: it has {sites} sites. Remove sites first.", "/areas")
    try:
        db.query(TechnicalPersonnel).filter(TechnicalPersonnel.area_id == area_id).update(
            {TechnicalPersonnel.area_id: None}, synchronize_session=False
        )
        db.delete(area)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete area", "/areas")
    return Notification.success("Area successfully deleted", "/areas")
