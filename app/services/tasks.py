import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.brigade import Brigade
from app.models.employee import Employee
from app.models.material import Expenditure, Material
from app.models.site import Site
from app.models.task import Task
from app.schemas.common import Page, Pagination
from app.schemas.notification import Notification
from app.schemas.tasks import TaskCompleteForm, TaskFilter, TaskForm, TaskMaterialForm, TaskMaterialUpdateForm
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists, today
from app.services.derived import deadline_exceeded_expr, task_status_expr, task_status_predicate
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query

_LOG = logging.getLogger("app.services.tasks")


def _sort(now):
    return SortSpec(
        allowed={
            "name": Task.name,
            "period_start": Task.period_start,
            "expected_period_end": Task.expected_period_end,
            "site_name": Site.name,
            "status": task_status_expr(now),
        },
        default=Task.id,
    )


def _base_query(db: Session, now):
    return (
        db.query(
            Task.id,
            Task.name,
            Task.description,
            Task.site_id,
            Site.name.label("site_name"),
            Task.brigade_id,
            full_name(Employee).label("brigadier_name"),
            Task.period_start,
            Task.expected_period_end,
            Task.actual_period_end,
            task_status_expr(now).label("status"),
            deadline_exceeded_expr(now).label("deadline_exceeded"),
        )
        .join(Site, Site.id == Task.site_id)
        .outerjoin(Brigade, Brigade.id == Task.brigade_id)
        .outerjoin(Employee, Employee.id == Brigade.brigadier_id)
    )


def list_tasks(db: Session, f: TaskFilter) -> Page:
    now = today()
    filters = (
        FilterSet()
        .add(Task.site_id, "=", f.site_id)
        .add(Task.brigade_id, "=", f.brigade_id)
        .when(f.status, lambda v: task_status_predicate(v, now))
        .add(Task.period_start, ">=", f.date_from)
        .add(Task.period_start, "<=", f.date_to)
        .add(Task.name, "~", f.name)
        .add(deadline_exceeded_expr(now), "flag", f.exceeded_deadline)
    )
    return paginate(_base_query(db, now), filters, _sort(now), f.sort, f.pagination)


def get_task(db: Session, task_id: int):
    return first_or_404(_base_query(db, today()).filter(Task.id == task_id), "Task", task_id)


def task_materials(db: Session, task_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            Expenditure.material_id,
            Material.name,
            Expenditure.expected_amount,
            Expenditure.actual_amount,
            Material.units,
            Material.cost,
            (func.coalesce(Expenditure.actual_amount, Expenditure.expected_amount) * Material.cost).label("total_cost"),
            (Expenditure.actual_amount - Expenditure.expected_amount).label("excess"),
        )
        .select_from(Expenditure)
        .join(Material, Material.id == Expenditure.material_id)
        .filter(Expenditure.task_id == task_id)
    )
    return paginate_query(q, pagination, Expenditure.material_id)


def task_progress(db: Session, task_id: int) -> dict:
    task = get_task(db, task_id)
    now = today()
    total_days = max((task.expected_period_end - task.period_start).days, 0)
    end = task.actual_period_end or min(now, task.expected_period_end)
    elapsed = min(max((end - task.period_start).days, 0), total_days)
    if task.actual_period_end is not None:
        percent = 100
    elif total_days == 0:
        percent = 0 if now < task.period_start else 100
    else:
        percent = round(elapsed * 100 / total_days)
    materials_total, materials_used = (
        db.query(func.count(Expenditure.material_id), func.count(Expenditure.actual_amount))
        .filter(Expenditure.task_id == task_id)
        .one()
    )
    return {
        "task": task,
        "total_days": total_days,
        "elapsed_days": elapsed,
        "percent": percent,
        "materials_total": materials_total,
        "materials_reported": materials_used,
    }


def _check_task(db: Session, form: TaskForm, redirect: str) -> Notification | None:
    if not row_exists(db, Site, form.site_id):
        return refused(_LOG, f"Site with ID {form.site_id} does not exist", redirect)
    if form.brigade_id is not None and not row_exists(db, Brigade, form.brigade_id):
        return refused(_LOG, f"Brigade with ID {form.brigade_id} does not exist", redirect)
    if form.expected_period_end < form.period_start:
        return refused(_LOG, "Expected end date cannot be before the start date", redirect)
    return None


def create_task(db: Session, form: TaskForm) -> Notification:
    problem = _check_task(db, form, "/tasks/new")
    if problem:
        return problem
    task = Task(**form.model_dump())
    try:
        db.add(task)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create task", "/tasks/new")
    _LOG.info("task %s created for site %s", task.id, task.site_id)
    return Notification.success(f"Task {form.name} created successfully", f"/tasks/{task.id}")


def update_task(db: Session, task_id: int, form: TaskForm) -> Notification:
    task = load_or_404(db, Task, task_id, "Task")
    problem = _check_task(db, form, f"/tasks/{task_id}/edit")
    if problem:
        return problem
    for key, value in form.model_dump().items():
        setattr(task, key, value)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update task", f"/tasks/{task_id}/edit")
    return Notification.success(f"Task {form.name} updated successfully", f"/tasks/{task_id}")


def delete_task(db: Session, task_id: int) -> Notification:
    task = load_or_404(db, Task, task_id, "Task")
    try:
        db.query(Expenditure).filter(Expenditure.task_id == task_id).delete(synchronize_session="fetch")
        db.delete(task)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete task", "/tasks")
    return Notification.success("Task successfully deleted", "/tasks")


def add_task_material(db: Session, task_id: int, form: TaskMaterialForm) -> Notification:
    load_or_404(db, Task, task_id, "Task")
    if not row_exists(db, Material, form.material_id):
        return refused(_LOG, f"Material with ID {form.material_id} does not exist")
    if db.get(Expenditure, (task_id, form.material_id)) is not None:
        return refused(_LOG, "Material is already added to this task")
    try:
        db.add(Expenditure(task_id=task_id, material_id=form.material_id, expected_amount=form.expected_amount))
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to add material")
    return Notification.success("Material added to the task")


def update_task_material(db: Session, task_id: int, material_id: int, form: TaskMaterialUpdateForm) -> Notification:
    expenditure = db.get(Expenditure, (task_id, material_id))
    if expenditure is None:
        return refused(_LOG, f"Material with ID {material_id} is not used by task {task_id}")
    expenditure.actual_amount = form.actual_amount
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update material usage")
    return Notification.success("Material usage updated")


def complete_task(db: Session, task_id: int, form: TaskCompleteForm) -> Notification:
    task = load_or_404(db, Task, task_id, "Task")
    if form.actual_period_end < task.period_start:
        return refused(_LOG, "Completion date cannot be before the start date", f"/tasks/{task_id}")
    task.actual_period_end = form.actual_period_end
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to complete task", f"/tasks/{task_id}")
    return Notification.success(f"Task {task.name} completed", f"/tasks/{task_id}")
