from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.common import PageQuery
from app.schemas.enums import TaskStatus
from app.schemas.tasks import (
    TaskCompleteForm,
    TaskFilter,
    TaskForm,
    TaskMaterialForm,
    TaskMaterialUpdateForm,
    TaskTabQuery,
)
from app.services import tasks as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("tasks", "/tasks", "Tasks", "task")

LIST_COLUMNS = [
    Column("id", "ID", link="/tasks/{id}"),
    Column("name", "Name", link="/tasks/{id}", sort="name"),
    Column("site_name", "Site", link="/sites/{site_id}", sort="site_name"),
    Column("brigadier_name", "Brigade", link="/brigades/{brigade_id}"),
    Column("period_start", "Start", fmt="date", sort="period_start"),
    Column("expected_period_end", "Expected end", fmt="date", sort="expected_period_end"),
    Column("status", "Status", fmt="label", sort="status"),
    Column("deadline_exceeded", "Overdue", fmt="bool"),
]


@page_router.get("")
def tasks_page(request: Request):
    return RESOURCE.list_page(request, statuses=list(TaskStatus))


@page_router.get("/new")
def task_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{task_id}")
def task_page(task_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_task(db, task_id)
    return RESOURCE.details_page(request, task_id)


@page_router.get("/{task_id}/edit")
def task_edit_page(task_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, task_id, service.get_task(db, task_id))


@router.get("")
def list_tasks(request: Request, f: TaskFilter = Depends(query_model(TaskFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_tasks(db, f), LIST_COLUMNS)


@router.post("")
def create_task(request: Request, form: TaskForm = Depends(form_model(TaskForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_task(db, form))


@router.get("/{task_id}")
def task_details(
    task_id: int,
    request: Request,
    q: TaskTabQuery = Depends(query_model(TaskTabQuery)),
    db: Session = Depends(get_db),
):
    return RESOURCE.details(request, task=service.get_task(db, task_id), tab=q.tab)


@router.put("/{task_id}")
def update_task(
    task_id: int,
    request: Request,
    form: TaskForm = Depends(form_model(TaskForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_task(db, task_id, form))


@router.delete("/{task_id}")
def delete_task(task_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_task(db, task_id))


@router.put("/{task_id}/complete")
def complete_task(
    task_id: int,
    request: Request,
    form: TaskCompleteForm = Depends(form_model(TaskCompleteForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.complete_task(db, task_id, form))


@router.get("/{task_id}/materials")
def task_materials(
    task_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    page = service.task_materials(db, task_id, q.pagination)
    return render(request, "tasks/_materials.html", {"task_id": task_id, "page": page})


@router.post("/{task_id}/materials")
def add_task_material(
    task_id: int,
    request: Request,
    form: TaskMaterialForm = Depends(form_model(TaskMaterialForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.add_task_material(db, task_id, form))


@router.put("/{task_id}/materials/{material_id}")
def update_task_material(
    task_id: int,
    material_id: int,
    request: Request,
    form: TaskMaterialUpdateForm = Depends(form_model(TaskMaterialUpdateForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_task_material(db, task_id, material_id, form))


@router.get("/{task_id}/progress")
def task_progress(task_id: int, request: Request, db: Session = Depends(get_db)):
    return render(request, "tasks/_progress.html", service.task_progress(db, task_id))
