from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render_notification
from app.db.session import get_db
from app.schemas.common import PageQuery
from app.schemas.materials import MaterialFilter, MaterialForm
from app.services import materials as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("materials", "/materials", "Materials", "material")

LIST_COLUMNS = [
    Column("id", "ID", link="/materials/{id}"),
    Column("name", "Name", link="/materials/{id}", sort="name"),
    Column("units", "Units"),
    Column("cost", "Unit cost", fmt="money", sort="cost"),
    Column("estimated_spendings", "Estimated", fmt="money", sort="estimated_spendings"),
    Column("actual_spendings", "Actual", fmt="money", sort="actual_spendings"),
    Column("excess", "Over plan", fmt="bool"),
]


@page_router.get("")
def materials_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def material_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{material_id}")
def material_page(material_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_material(db, material_id)
    return RESOURCE.details_page(request, material_id)


@page_router.get("/{material_id}/edit")
def material_edit_page(material_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, material_id, service.get_material(db, material_id))


@router.get("")
def list_materials(
    request: Request,
    f: MaterialFilter = Depends(query_model(MaterialFilter)),
    db: Session = Depends(get_db),
):
    return table(request, service.list_materials(db, f), LIST_COLUMNS)


@router.post("")
def create_material(
    request: Request,
    form: MaterialForm = Depends(form_model(MaterialForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.create_material(db, form))


@router.get("/{material_id}")
def material_details(material_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.details(request, material=service.get_material(db, material_id))


@router.put("/{material_id}")
def update_material(
    material_id: int,
    request: Request,
    form: MaterialForm = Depends(form_model(MaterialForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_material(db, material_id, form))


@router.delete("/{material_id}")
def delete_material(material_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_material(db, material_id))


@router.get("/{material_id}/usage")
def material_usage(
    material_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("task_name", "Task", link="/tasks/{task_id}"),
        Column("site_name", "Site", link="/sites/{site_id}"),
        Column("expected_amount", "Expected"),
        Column("actual_amount", "Used"),
        Column("excess_amount", "Excess"),
        Column("total_cost", "Cost", fmt="money"),
    ]
    return table(request, service.material_usage(db, material_id, q.pagination), columns, "Not used by any task.")
