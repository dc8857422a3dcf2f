import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.material import Expenditure, Material
from app.models.site import Site
from app.models.task import Task
from app.schemas.common import Page, Pagination
from app.schemas.materials import MaterialFilter, MaterialForm
from app.schemas.notification import Notification
from app.services.common import db_failure, first_or_404, load_or_404, refused
from app.services.derived import actual_spendings_expr, estimated_spendings_expr, material_excess_expr
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query

_LOG = logging.getLogger("app.services.materials")

SORT = SortSpec(
    allowed={
        "name": Material.name,
        "cost": Material.cost,
        "estimated_spendings": estimated_spendings_expr(),
        "actual_spendings": actual_spendings_expr(),
    },
    default=Material.id,
)


def _base_query(db: Session):
    return db.query(
        Material.id,
        Material.name,
        Material.cost,
        Material.units,
        estimated_spendings_expr().label("estimated_spendings"),
        actual_spendings_expr().label("actual_spendings"),
        material_excess_expr().label("excess"),
    )


def list_materials(db: Session, f: MaterialFilter) -> Page:
    filters = (
        FilterSet()
        .add(Material.name, "~", f.name)
        .add(Material.cost, ">=", f.cost_min)
        .add(Material.cost, "<=", f.cost_max)
        .add(material_excess_expr(), "flag", f.excess_usage)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_material(db: Session, material_id: int):
    return first_or_404(_base_query(db).filter(Material.id == material_id), "Material", material_id)


def material_usage(db: Session, material_id: int, pagination: Pagination) -> Page:
    actual = func.coalesce(Expenditure.actual_amount, 0.0)
    q = (
        db.query(
            Task.id.label("task_id"),
            Task.name.label("task_name"),
            Task.site_id,
            Site.name.label("site_name"),
            Expenditure.expected_amount,
            Expenditure.actual_amount,
            (actual - Expenditure.expected_amount).label("excess_amount"),
            (actual * Material.cost).label("total_cost"),
        )
        .select_from(Expenditure)
        .join(Task, Task.id == Expenditure.task_id)
        .join(Site, Site.id == Task.site_id)
        .join(Material, Material.id == Expenditure.material_id)
        .filter(Expenditure.material_id == material_id)
    )
    return paginate_query(q, pagination, Task.id)


def create_material(db: Session, form: MaterialForm) -> Notification:
    material = Material(**form.model_dump())
    try:
        db.add(material)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create material", "/materials/new")
    _LOG.info("material %s created", material.id)
    return Notification.success(f"Material {form.name} created successfully", f"/materials/{material.id}")


def update_material(db: Session, material_id: int, form: MaterialForm) -> Notification:
    material = load_or_404(db, Material, material_id, "Material")
    for key, value in form.model_dump().items():
        setattr(material, key, value)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update material", f"/materials/{material_id}/edit")
    return Notification.success(f"Material {form.name} updated successfully", f"/materials/{material_id}")


def delete_material(db: Session, material_id: int) -> Notification:
    material = load_or_404(db, Material, material_id, "Material")
    used = db.query(Expenditure).filter(Expenditure.material_id == material_id).count()
    if used:
        return refused(_LOG, f"Cannot delete material: it is used by {used} tasks", "/materials")
    try:
        db.delete(material)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete material", "/materials")
    return Notification.success("Material successfully deleted", "/materials")
