from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render_notification
from app.db.session import get_db
from app.schemas.areas import AreaFilter, AreaForm, AreaTabQuery
from app.schemas.common import PageQuery
from app.services import areas as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("areas", "/areas", "Areas", "area")

LIST_COLUMNS = [
    Column("id", "ID", link="/areas/{id}"),
    Column("name", "Name", link="/areas/{id}", sort="name"),
    Column("department_name", "Department", link="/departments/{department_id}", sort="department_name"),
    Column("supervisor_name", "Supervisor", link="/technical-personnel/{supervisor_id}", sort="supervisor_name"),
]


@page_router.get("")
def areas_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def area_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{area_id}")
def area_page(area_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_area(db, area_id)
    return RESOURCE.details_page(request, area_id)


@page_router.get("/{area_id}/edit")
def area_edit_page(area_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, area_id, service.get_area(db, area_id))


@router.get("")
def list_areas(request: Request, f: AreaFilter = Depends(query_model(AreaFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_areas(db, f), LIST_COLUMNS)


@router.post("")
def create_area(request: Request, form: AreaForm = Depends(form_model(AreaForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_area(db, form))


@router.get("/{area_id}")
def area_details(
    area_id: int,
    request: Request,
    q: AreaTabQuery = Depends(query_model(AreaTabQuery)),
    db: Session = Depends(get_db),
):
    return RESOURCE.details(request, area=service.get_area(db, area_id), tab=q.tab)


@router.put("/{area_id}")
def update_area(
    area_id: int,
    request: Request,
    form: AreaForm = Depends(form_model(AreaForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_area(db, area_id, form))


@router.delete("/{area_id}")
def delete_area(area_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_area(db, area_id))


@router.get("/{area_id}/sites")
def area_sites(
    area_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Site", link="/sites/{id}"),
        Column("type", "Type", fmt="label"),
        Column("client_name", "Client", link="/clients/{client_id}"),
    ]
    return table(request, service.area_sites(db, area_id, q.pagination), columns, "No sites.")


@router.get("/{area_id}/personnel")
def area_personnel(
    area_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Name", link="/technical-personnel/{id}"),
        Column("qualification", "Qualification", fmt="label"),
        Column("position", "Position", fmt="label"),
    ]
    return table(request, service.area_personnel(db, area_id, q.pagination), columns, "No personnel.")
