from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.enums import Gender, Profession
from app.schemas.workers import WorkerFilter, WorkerForm, WorkerProfessionQuery
from app.services import workers as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("workers", "/workers", "Workers", "worker")

LIST_COLUMNS = [
    Column("id", "ID", link="/workers/{id}"),
    Column("name", "Name", link="/workers/{id}", sort="name"),
    Column("profession", "Profession", fmt="label", sort="profession"),
    Column("brigade_name", "Brigade", link="/brigades/{brigade_id}", sort="brigade"),
    Column("is_brigadier", "Brigadier", fmt="bool"),
    Column("phone_number", "Phone"),
]


def _form_context() -> dict:
    return {"professions": list(Profession), "genders": list(Gender)}


@page_router.get("")
def workers_page(request: Request):
    return RESOURCE.list_page(request, **_form_context())


@page_router.get("/new")
def worker_new_page(request: Request):
    return RESOURCE.new_page(request, details=None, **_form_context())


@page_router.get("/{worker_id}")
def worker_page(worker_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_worker(db, worker_id)
    return RESOURCE.details_page(request, worker_id)


@page_router.get("/{worker_id}/edit")
def worker_edit_page(worker_id: int, request: Request, db: Session = Depends(get_db)):
    found = service.get_worker(db, worker_id)
    return RESOURCE.edit_page(request, worker_id, found["worker"], details=found["details"], **_form_context())


@router.get("")
def list_workers(request: Request, f: WorkerFilter = Depends(query_model(WorkerFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_workers(db, f), LIST_COLUMNS)


@router.post("")
def create_worker(request: Request, form: WorkerForm = Depends(form_model(WorkerForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_worker(db, form))


@router.get("/profession-fields")
def worker_profession_fields(request: Request, q: WorkerProfessionQuery = Depends(query_model(WorkerProfessionQuery))):
    return render(request, "workers/_profession_fields.html", {"profession": q.profession.value, "details": None})


@router.get("/{worker_id}")
def worker_details(worker_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.details(request, **service.get_worker(db, worker_id))


@router.put("/{worker_id}")
def update_worker(
    worker_id: int,
    request: Request,
    form: WorkerForm = Depends(form_model(WorkerForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_worker(db, worker_id, form))


@router.delete("/{worker_id}")
def delete_worker(worker_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_worker(db, worker_id))
