import logging

from sqlalchemy import exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.brigade import Assignment, Brigade
from app.models.employee import Employee
from app.models.site import Site
from app.models.task import Task
from app.models.worker import Worker
from app.schemas.brigades import BrigadeFilter, BrigadeForm, BrigadeWorkerForm
from app.schemas.common import Page, Pagination
from app.schemas.notification import Notification
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists, today
from app.services.derived import task_status_expr
from app.services.list_query import FilterSet, SortSpec, paginate, paginate_query
from app.services.workers import set_assignment

_LOG = logging.getLogger("app.services.brigades")


def _worker_count():
    return (
        select(func.count(Assignment.worker_id))
        .where(Assignment.brigade_id == Brigade.id)
        .correlate(Brigade)
        .scalar_subquery()
    )


def _current_task(column):
    """``column`` of the most recently started open task of the brigade."""
    return (
        select(column)
        .where(Task.brigade_id == Brigade.id, Task.actual_period_end.is_(None))
        .order_by(Task.period_start.desc(), Task.id.desc())
        .limit(1)
        .correlate(Brigade)
        .scalar_subquery()
    )


def _current_site_name():
    return (
        select(Site.name)
        .join(Task, Task.site_id == Site.id)
        .where(Task.brigade_id == Brigade.id, Task.actual_period_end.is_(None))
        .order_by(Task.period_start.desc(), Task.id.desc())
        .limit(1)
        .correlate(Brigade)
        .scalar_subquery()
    )


SORT = SortSpec(
    allowed={
        "brigadier_name": full_name(Employee),
        "worker_count": _worker_count(),
    },
    default=Brigade.id,
)


def _base_query(db: Session):
    return db.query(
        Brigade.id,
        Brigade.brigadier_id,
        full_name(Employee).label("brigadier_name"),
        _worker_count().label("worker_count"),
        _current_task(Task.id).label("current_task_id"),
        _current_task(Task.name).label("current_task_name"),
        _current_task(Task.site_id).label("current_site_id"),
        _current_site_name().label("current_site_name"),
    ).join(Employee, Employee.id == Brigade.brigadier_id)


def list_brigades(db: Session, f: BrigadeFilter) -> Page:
    filters = (
        FilterSet()
        .add(Brigade.brigadier_id, "=", f.brigadier_id)
        .when(f.site_id, lambda v: exists().where(Task.brigade_id == Brigade.id, Task.site_id == v))
        .when(f.task_name, lambda v: exists().where(Task.brigade_id == Brigade.id, Task.name.ilike(f"%{v}%")))
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_brigade(db: Session, brigade_id: int):
    return first_or_404(_base_query(db).filter(Brigade.id == brigade_id), "Brigade", brigade_id)


def brigade_workers(db: Session, brigade_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            Worker.id,
            full_name(Employee).label("name"),
            Worker.profession,
            (Worker.id == Brigade.brigadier_id).label("is_brigadier"),
        )
        .join(Employee, Employee.id == Worker.id)
        .join(Assignment, Assignment.worker_id == Worker.id)
        .join(Brigade, Brigade.id == Assignment.brigade_id)
        .filter(Assignment.brigade_id == brigade_id)
    )
    return paginate_query(q, pagination, Worker.id)


def brigade_tasks(db: Session, brigade_id: int, pagination: Pagination) -> Page:
    q = (
        db.query(
            Task.id,
            Task.name,
            Task.site_id,
            Site.name.label("site_name"),
            Task.period_start,
            Task.expected_period_end,
            Task.actual_period_end,
            task_status_expr(today()).label("status"),
        )
        .join(Site, Site.id == Task.site_id)
        .filter(Task.brigade_id == brigade_id)
    )
    return paginate_query(q, pagination, Task.period_start, Task.id)


def _brigadier_problem(db: Session, worker_id: int, brigade_id: int | None) -> bool:
    if not row_exists(db, Worker, worker_id):
        return True
    led = db.query(Brigade.id).filter(Brigade.brigadier_id == worker_id).scalar()
    return led is not None and led != brigade_id


def create_brigade(db: Session, form: BrigadeForm) -> Notification:
    if _brigadier_problem(db, form.brigadier_id, None):
        return refused(_LOG, "Worker does not exist or is already a brigadier", "/brigades/new")
    brigade = Brigade(brigadier_id=form.brigadier_id)
    try:
        db.add(brigade)
        db.flush()
        set_assignment(db, form.brigadier_id, brigade.id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create brigade", "/brigades/new")
    _LOG.info("brigade %s created with brigadier %s", brigade.id, form.brigadier_id)
    return Notification.success("Brigade successfully created", f"/brigades/{brigade.id}")


def update_brigade(db: Session, brigade_id: int, form: BrigadeForm) -> Notification:
    brigade = load_or_404(db, Brigade, brigade_id, "Brigade")
    if _brigadier_problem(db, form.brigadier_id, brigade_id):
        return refused(
            _LOG, "Worker does not exist or is already a brigadier in another brigade", f"/brigades/{brigade_id}/edit"
        )
    try:
        brigade.brigadier_id = form.brigadier_id
        db.flush()
        set_assignment(db, form.brigadier_id, brigade_id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update brigade", f"/brigades/{brigade_id}/edit")
    return Notification.success("Brigade successfully updated", f"/brigades/{brigade_id}")


def delete_brigade(db: Session, brigade_id: int) -> Notification:
    brigade = load_or_404(db, Brigade, brigade_id, "Brigade")
    active = db.query(Task).filter(Task.brigade_id == brigade_id, Task.actual_period_end.is_(None)).count()
    if active:
        return refused(_LOG, "Cannot delete brigade with active tasks", "/brigades")
    try:
        db.query(Assignment).filter(Assignment.brigade_id == brigade_id).delete(synchronize_session="fetch")
        db.query(Task).filter(Task.brigade_id == brigade_id).update(
            {Task.brigade_id: None}, synchronize_session="fetch"
        )
        db.delete(brigade)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete brigade", "/brigades")
    return Notification.success("Brigade successfully deleted", "/brigades")


def add_brigade_worker(db: Session, brigade_id: int, form: BrigadeWorkerForm) -> Notification:
    load_or_404(db, Brigade, brigade_id, "Brigade")
    assigned = db.query(exists().where(Assignment.worker_id == form.worker_id)).scalar()
    if assigned or not row_exists(db, Worker, form.worker_id):
        return refused(_LOG, "Worker does not exist or is already assigned to a brigade")
    try:
        db.add(Assignment(worker_id=form.worker_id, brigade_id=brigade_id))
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to add worker")
    return Notification.success("Worker added to the brigade")


def remove_brigade_worker(db: Session, brigade_id: int, worker_id: int) -> Notification:
    brigade = load_or_404(db, Brigade, brigade_id, "Brigade")
    if brigade.brigadier_id == worker_id:
        return refused(_LOG, "Cannot remove the brigadier from the brigade")
    assignment = (
        db.query(Assignment)
        .filter(Assignment.worker_id == worker_id, Assignment.brigade_id == brigade_id)
        .first()
    )
    if assignment is None:
        return refused(_LOG, f"Worker with ID {worker_id} is not a member of this brigade")
    try:
        db.delete(assignment)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to remove worker")
    return Notification.success("Worker removed from the brigade")
