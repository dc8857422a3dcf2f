from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.common import PageQuery
from app.schemas.enums import FuelType
from app.schemas.equipment import AllocationForm, EquipmentFilter, EquipmentForm
from app.services import equipment as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("equipment", "/equipment", "Equipment", "equipment")

LIST_COLUMNS = [
    Column("id", "ID", link="/equipment/{id}"),
    Column("name", "Name", link="/equipment/{id}", sort="name"),
    Column("amount", "Amount", sort="amount"),
    Column("available_amount", "Available", sort="available_amount"),
    Column("purchase_date", "Purchased", fmt="date", sort="purchase_date"),
    Column("purchase_cost", "Cost", fmt="money", sort="purchase_cost"),
    Column("fuel_type", "Fuel", fmt="label"),
]

ALLOCATION_COLUMNS = [
    Column("department_name", "Department", link="/departments/{department_id}"),
    Column("site_name", "Site", link="/sites/{site_id}"),
    Column("amount", "Amount"),
    Column("period_start", "From", fmt="date"),
    Column("period_end", "Until", fmt="date"),
    Column("is_current", "Current", fmt="bool"),
]


@page_router.get("")
def equipment_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def equipment_new_page(request: Request):
    return RESOURCE.new_page(request, fuel_types=list(FuelType))


@page_router.get("/{equipment_id}")
def equipment_details_page(equipment_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_equipment(db, equipment_id)
    return RESOURCE.details_page(request, equipment_id)


@page_router.get("/{equipment_id}/edit")
def equipment_edit_page(equipment_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, equipment_id, service.get_equipment(db, equipment_id), fuel_types=list(FuelType))


@router.get("")
def list_equipment(
    request: Request,
    f: EquipmentFilter = Depends(query_model(EquipmentFilter)),
    db: Session = Depends(get_db),
):
    return table(request, service.list_equipment(db, f), LIST_COLUMNS)


@router.post("")
def create_equipment(
    request: Request,
    form: EquipmentForm = Depends(form_model(EquipmentForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.create_equipment(db, form))


@router.get("/{equipment_id}")
def equipment_details(equipment_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.details(request, equipment=service.get_equipment(db, equipment_id))


@router.put("/{equipment_id}")
def update_equipment(
    equipment_id: int,
    request: Request,
    form: EquipmentForm = Depends(form_model(EquipmentForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_equipment(db, equipment_id, form))


@router.delete("/{equipment_id}")
def delete_equipment(equipment_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_equipment(db, equipment_id))


@router.get("/{equipment_id}/allocations")
def equipment_allocations(
    equipment_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    page = service.equipment_allocations(db, equipment_id, q.pagination)
    return table(request, page, ALLOCATION_COLUMNS, "Not allocated anywhere.")


@router.post("/{equipment_id}/allocations")
def create_allocation(
    equipment_id: int,
    request: Request,
    form: AllocationForm = Depends(form_model(AllocationForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.create_allocation(db, equipment_id, form))


@router.get("/{equipment_id}/allocations/new")
def allocation_form(equipment_id: int, request: Request, db: Session = Depends(get_db)):
    return render(request, "equipment/_allocation_form.html", {"equipment": service.get_equipment(db, equipment_id)})
