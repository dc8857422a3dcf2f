from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.brigades import BrigadeFilter, BrigadeForm, BrigadeTabQuery, BrigadeWorkerForm
from app.schemas.common import PageQuery
from app.services import brigades as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("brigades", "/brigades", "Brigades", "brigade")

LIST_COLUMNS = [
    Column("id", "ID", link="/brigades/{id}"),
    Column("brigadier_name", "Brigadier", link="/workers/{brigadier_id}", sort="brigadier_name"),
    Column("worker_count", "Workers", sort="worker_count"),
    Column("current_task_name", "Current task", link="/tasks/{current_task_id}"),
    Column("current_site_name", "Current site", link="/sites/{current_site_id}"),
]


@page_router.get("")
def brigades_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def brigade_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{brigade_id}")
def brigade_page(brigade_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_brigade(db, brigade_id)
    return RESOURCE.details_page(request, brigade_id)


@page_router.get("/{brigade_id}/edit")
def brigade_edit_page(brigade_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, brigade_id, service.get_brigade(db, brigade_id))


@router.get("")
def list_brigades(request: Request, f: BrigadeFilter = Depends(query_model(BrigadeFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_brigades(db, f), LIST_COLUMNS)


@router.post("")
def create_brigade(request: Request, form: BrigadeForm = Depends(form_model(BrigadeForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_brigade(db, form))


@router.get("/{brigade_id}")
def brigade_details(
    brigade_id: int,
    request: Request,
    q: BrigadeTabQuery = Depends(query_model(BrigadeTabQuery)),
    db: Session = Depends(get_db),
):
    return RESOURCE.details(request, brigade=service.get_brigade(db, brigade_id), tab=q.tab)


@router.put("/{brigade_id}")
def update_brigade(
    brigade_id: int,
    request: Request,
    form: BrigadeForm = Depends(form_model(BrigadeForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_brigade(db, brigade_id, form))


@router.delete("/{brigade_id}")
def delete_brigade(brigade_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_brigade(db, brigade_id))


@router.get("/{brigade_id}/workers")
def brigade_workers(
    brigade_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    page = service.brigade_workers(db, brigade_id, q.pagination)
    return render(request, "brigades/_workers.html", {"brigade_id": brigade_id, "page": page})


@router.post("/{brigade_id}/workers")
def add_brigade_worker(
    brigade_id: int,
    request: Request,
    form: BrigadeWorkerForm = Depends(form_model(BrigadeWorkerForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.add_brigade_worker(db, brigade_id, form))


@router.delete("/{brigade_id}/workers/{worker_id}")
def remove_brigade_worker(brigade_id: int, worker_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.remove_brigade_worker(db, brigade_id, worker_id))


@router.get("/{brigade_id}/tasks")
def brigade_tasks(
    brigade_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Task", link="/tasks/{id}"),
        Column("site_name", "Site", link="/sites/{site_id}"),
        Column("period_start", "Start", fmt="date"),
        Column("expected_period_end", "Expected end", fmt="date"),
        Column("actual_period_end", "Finished", fmt="date"),
        Column("status", "Status", fmt="label"),
    ]
    return table(request, service.brigade_tasks(db, brigade_id, q.pagination), columns, "No tasks.")


@router.get("/{brigade_id}/current")
def brigade_current(brigade_id: int, request: Request, db: Session = Depends(get_db)):
    return render(request, "brigades/_current.html", {"brigade": service.get_brigade(db, brigade_id)})
