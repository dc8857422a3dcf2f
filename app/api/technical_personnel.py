from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.enums import Gender, Position, Qualification
from app.schemas.technical_personnel import PersonnelFilter, PersonnelForm, PersonnelQualificationQuery
from app.services import technical_personnel as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("technical_personnel", "/technical-personnel", "Technical personnel", "technical personnel")

LIST_COLUMNS = [
    Column("id", "ID", link="/technical-personnel/{id}"),
    Column("name", "Name", link="/technical-personnel/{id}", sort="name"),
    Column("qualification", "Qualification", fmt="label", sort="qualification"),
    Column("position", "Position", fmt="label", sort="position"),
    Column("area_name", "Area", link="/areas/{area_id}"),
    Column("is_project_manager", "Project manager", fmt="bool"),
]


def _form_context() -> dict:
    return {"qualifications": list(Qualification), "positions": list(Position), "genders": list(Gender)}


@page_router.get("")
def personnel_page(request: Request):
    return RESOURCE.list_page(request, **_form_context())


@page_router.get("/new")
def personnel_new_page(request: Request):
    return RESOURCE.new_page(request, details=None, **_form_context())


@page_router.get("/{personnel_id}")
def personnel_details_page(personnel_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_personnel(db, personnel_id)
    return RESOURCE.details_page(request, personnel_id)


@page_router.get("/{personnel_id}/edit")
def personnel_edit_page(personnel_id: int, request: Request, db: Session = Depends(get_db)):
    found = service.get_personnel(db, personnel_id)
    return RESOURCE.edit_page(request, personnel_id, found["person"], details=found["details"], **_form_context())


@router.get("")
def list_personnel(
    request: Request,
    f: PersonnelFilter = Depends(query_model(PersonnelFilter)),
    db: Session = Depends(get_db),
):
    return table(request, service.list_personnel(db, f), LIST_COLUMNS)


@router.post("")
def create_personnel(
    request: Request,
    form: PersonnelForm = Depends(form_model(PersonnelForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.create_personnel(db, form))


@router.get("/qualification-fields")
def personnel_qualification_fields(
    request: Request,
    q: PersonnelQualificationQuery = Depends(query_model(PersonnelQualificationQuery)),
):
    return render(
        request,
        "technical_personnel/_qualification_fields.html",
        {"qualification": q.qualification.value, "details": None},
    )


@router.get("/{personnel_id}")
def personnel_details(personnel_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.details(request, **service.get_personnel(db, personnel_id))


@router.put("/{personnel_id}")
def update_personnel(
    personnel_id: int,
    request: Request,
    form: PersonnelForm = Depends(form_model(PersonnelForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_personnel(db, personnel_id, form))


@router.delete("/{personnel_id}")
def delete_personnel(personnel_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_personnel(db, personnel_id))
