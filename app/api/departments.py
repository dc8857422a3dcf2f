from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render_notification
from app.db.session import get_db
from app.schemas.common import PageQuery
from app.schemas.departments import DepartmentFilter, DepartmentForm, DepartmentTabQuery
from app.services import departments as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("departments", "/departments", "Departments", "department")

LIST_COLUMNS = [
    Column("id", "ID", link="/departments/{id}"),
    Column("name", "Name", link="/departments/{id}", sort="name"),
    Column("supervisor_name", "Supervisor", link="/technical-personnel/{supervisor_id}", sort="supervisor_name"),
]


@page_router.get("")
def departments_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def department_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{department_id}")
def department_page(department_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_department(db, department_id)
    return RESOURCE.details_page(request, department_id)


@page_router.get("/{department_id}/edit")
def department_edit_page(department_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, department_id, service.get_department(db, department_id))


@router.get("")
def list_departments(
    request: Request,
    f: DepartmentFilter = Depends(query_model(DepartmentFilter)),
    db: Session = Depends(get_db),
):
    return table(request, service.list_departments(db, f), LIST_COLUMNS)


@router.post("")
def create_department(
    request: Request,
    form: DepartmentForm = Depends(form_model(DepartmentForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.create_department(db, form))


@router.get("/{department_id}")
def department_details(
    department_id: int,
    request: Request,
    q: DepartmentTabQuery = Depends(query_model(DepartmentTabQuery)),
    db: Session = Depends(get_db),
):
    return RESOURCE.details(request, department=service.get_department(db, department_id), tab=q.tab)


@router.put("/{department_id}")
def update_department(
    department_id: int,
    request: Request,
    form: DepartmentForm = Depends(form_model(DepartmentForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_department(db, department_id, form))


@router.delete("/{department_id}")
def delete_department(department_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_department(db, department_id))


@router.get("/{department_id}/areas")
def department_areas(
    department_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Area", link="/areas/{id}"),
        Column("supervisor_name", "Supervisor", link="/technical-personnel/{supervisor_id}"),
    ]
    return table(request, service.department_areas(db, department_id, q.pagination), columns, "No areas.")


@router.get("/{department_id}/equipment")
def department_equipment(
    department_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [Column("name", "Equipment", link="/equipment/{id}"), Column("amount", "Allocated")]
    return table(request, service.department_equipment(db, department_id, q.pagination), columns, "No equipment.")


@router.get("/{department_id}/sites")
def department_sites(
    department_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Site", link="/sites/{id}"),
        Column("type", "Type", fmt="label"),
        Column("area_name", "Area"),
    ]
    return table(request, service.department_sites(db, department_id, q.pagination), columns, "No sites.")


@router.get("/{department_id}/personnel")
def department_personnel(
    department_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Name", link="/technical-personnel/{id}"),
        Column("qualification", "Qualification", fmt="label"),
        Column("position", "Position", fmt="label"),
        Column("area_name", "Area"),
    ]
    return table(request, service.department_personnel(db, department_id, q.pagination), columns, "No personnel.")
