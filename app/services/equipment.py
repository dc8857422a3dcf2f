import logging
from datetime import date

from sqlalchemy import exists, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.department import Department
from app.models.equipment import Equipment, EquipmentAllocation
from app.models.site import Site
from app.schemas.common import Page, Pagination
from app.schemas.equipment import AllocationForm, EquipmentFilter, EquipmentForm
from app.schemas.notification import Notification
from app.services.common import db_failure, first_or_404, load_or_404, refused, row_exists, today
from app.services.derived import allocation_is_current, available_amount_expr
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query

_LOG = logging.getLogger("app.services.equipment")


def _sort(now):
    return SortSpec(
        allowed={
            "name": Equipment.name,
            "amount": Equipment.amount,
            "available_amount": available_amount_expr(now),
            "purchase_date": Equipment.purchase_date,
            "purchase_cost": Equipment.purchase_cost,
        },
        default=Equipment.id,
    )


def _base_query(db: Session, now):
    return db.query(
        Equipment.id,
        Equipment.name,
        Equipment.amount,
        available_amount_expr(now).label("available_amount"),
        Equipment.purchase_date,
        Equipment.purchase_cost,
        Equipment.fuel_type,
    )


def _allocated_to(now, column, value):
    return exists().where(
        EquipmentAllocation.equipment_id == Equipment.id,
        column == value,
        allocation_is_current(now),
    )


def list_equipment(db: Session, f: EquipmentFilter) -> Page:
    now = today()
    filters = (
        FilterSet()
        .when(f.department_id, lambda v: _allocated_to(now, EquipmentAllocation.department_id, v))
        .when(f.site_id, lambda v: _allocated_to(now, EquipmentAllocation.site_id, v))
        .add(Equipment.name, "~", f.name)
        .add(available_amount_expr(now) > 0, "flag", f.available)
    )
    return paginate(_base_query(db, now), filters, _sort(now), f.sort, f.pagination)


def get_equipment(db: Session, equipment_id: int):
    return first_or_404(
        _base_query(db, today()).filter(Equipment.id == equipment_id), "Equipment", equipment_id
    )


def allocated_amount(db: Session, equipment_id: int, on: date | None = None) -> int:
    total = (
        db.query(func.coalesce(func.sum(EquipmentAllocation.amount), 0))
        .filter(EquipmentAllocation.equipment_id == equipment_id, allocation_is_current(on or today()))
        .scalar()
    )
    return int(total or 0)


def equipment_allocations(db: Session, equipment_id: int, pagination: Pagination) -> Page:
    now = today()
    q = (
        db.query(
            EquipmentAllocation.id,
            EquipmentAllocation.department_id,
            Department.name.label("department_name"),
            EquipmentAllocation.site_id,
            Site.name.label("site_name"),
            EquipmentAllocation.amount,
            EquipmentAllocation.period_start,
            EquipmentAllocation.period_end,
            allocation_is_current(now).label("is_current"),
        )
        .join(Department, Department.id == EquipmentAllocation.department_id)
        .outerjoin(Site, Site.id == EquipmentAllocation.site_id)
        .filter(EquipmentAllocation.equipment_id == equipment_id)
    )
    return paginate_query(q, pagination, EquipmentAllocation.period_start, EquipmentAllocation.id)


def create_equipment(db: Session, form: EquipmentForm) -> Notification:
    equipment = Equipment(
        name=form.name,
        amount=form.amount,
        purchase_date=form.purchase_date,
        purchase_cost=form.purchase_cost,
        fuel_type=form.fuel_type.value if form.fuel_type else None,
    )
    try:
        db.add(equipment)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create equipment", "/equipment/new")
    _LOG.info("equipment %s created", equipment.id)
    return Notification.success(f"Equipment {form.name} created successfully", f"/equipment/{equipment.id}")


def update_equipment(db: Session, equipment_id: int, form: EquipmentForm) -> Notification:
    equipment = load_or_404(db, Equipment, equipment_id, "Equipment")
    allocated = allocated_amount(db, equipment_id)
    if form.amount < allocated:
        return refused(
            _LOG, f"Cannot set amount less than allocated amount ({allocated})", f"/equipment/{equipment_id}/edit"
        )
    equipment.name = form.name
    equipment.amount = form.amount
    equipment.purchase_date = form.purchase_date
    equipment.purchase_cost = form.purchase_cost
    equipment.fuel_type = form.fuel_type.value if form.fuel_type else None
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update equipment", f"/equipment/{equipment_id}/edit")
    return Notification.success(f"Equipment {form.name} updated successfully", f"/equipment/{equipment_id}")


def delete_equipment(db: Session, equipment_id: int) -> Notification:
    equipment = load_or_404(db, Equipment, equipment_id, "Equipment")
    allocations = db.query(EquipmentAllocation).filter(EquipmentAllocation.equipment_id == equipment_id).count()
    if allocations:
        return refused(
            _LOG, f"Cannot delete equipment: it has {allocations} allocations. Remove allocations first.", "/equipment"
        )
    try:
        db.delete(equipment)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete equipment", "/equipment")
    return Notification.success("Equipment successfully deleted", "/equipment")


def create_allocation(db: Session, equipment_id: int, form: AllocationForm) -> Notification:
    equipment = load_or_404(db, Equipment, equipment_id, "Equipment")
    if not row_exists(db, Department, form.department_id):
        return refused(_LOG, f"Department with ID {form.department_id} does not exist")
    if form.site_id is not None and not row_exists(db, Site, form.site_id):
        return refused(_LOG, f"Site with ID {form.site_id} does not exist")
    available = equipment.amount - allocated_amount(db, equipment_id, form.period_start)
    if form.amount > available:
        return refused(_LOG, f"Not enough available equipment. Available: {available}, Requested: {form.amount}")
    allocation = EquipmentAllocation(equipment_id=equipment_id, **form.model_dump())
    try:
        db.add(allocation)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to allocate equipment")
    _LOG.info("equipment %s: %s allocated to department %s", equipment_id, form.amount, form.department_id)
    return Notification.success(f"Allocated {form.amount} of {equipment.name}", f"/equipment/{equipment_id}")
