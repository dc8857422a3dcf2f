import logging

from sqlalchemy import exists
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from app.models.brigade import Assignment, Brigade
from app.models.employee import EMPLOYEE_CLASS_WORKER, Employee
from app.models.worker import Driver, Electrician, Mason, Plumber, Welder, Worker
from app.schemas.common import Page
from app.schemas.enums import Profession
from app.schemas.notification import Notification
from app.schemas.workers import WorkerFilter, WorkerForm
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists
from app.services.employees import apply_employee, delete_employee, insert_employee
from app.services.list_query import FilterSet, SortSpec, paginate
from app.services.subtypes import SubtypeRegistry

_LOG = logging.getLogger("app.services.workers")

PROFESSION_SUBTYPES = SubtypeRegistry(
    Profession,
    "profession",
    {
        Profession.ELECTRICIAN: Electrician,
        Profession.PLUMBER: Plumber,
        Profession.WELDER: Welder,
        Profession.DRIVER: Driver,
        Profession.MASON: Mason,
    },
)

Brigadier = aliased(Employee, name="brigadier")
LedBrigade = aliased(Brigade, name="led_brigade")


def is_brigadier_expr(worker=Worker):
    return exists().where(LedBrigade.brigadier_id == worker.id)


SORT = SortSpec(
    allowed={
        "name": full_name(Employee),
        "profession": Worker.profession,
        "brigade": Assignment.brigade_id,
    },
    default=Worker.id,
)


def _base_query(db: Session):
    return (
        db.query(
            Worker.id,
            Employee.first_name,
            Employee.last_name,
            Employee.middle_name,
            full_name(Employee).label("name"),
            Employee.gender,
            Employee.photo,
            Employee.phone_number,
            Employee.salary,
            Worker.profession,
            Worker.union_name,
            Assignment.brigade_id,
            full_name(Brigadier).label("brigade_name"),
            is_brigadier_expr().label("is_brigadier"),
        )
        .join(Employee, Employee.id == Worker.id)
        .outerjoin(Assignment, Assignment.worker_id == Worker.id)
        .outerjoin(Brigade, Brigade.id == Assignment.brigade_id)
        .outerjoin(Brigadier, Brigadier.id == Brigade.brigadier_id)
    )


def list_workers(db: Session, f: WorkerFilter) -> Page:
    filters = (
        FilterSet()
        .add(Worker.profession, "=", f.profession)
        .add(Assignment.brigade_id, "=", f.brigade_id)
        .add(is_brigadier_expr(), "flag", f.is_brigadier)
        .add(full_name(Employee), "~", f.name)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_worker(db: Session, worker_id: int) -> dict:
    worker = first_or_404(_base_query(db).filter(Worker.id == worker_id), "Worker", worker_id)
    details = PROFESSION_SUBTYPES.values(db, worker.profession, worker_id)
    return {"worker": worker, "details": details}


def led_brigade_id(db: Session, worker_id: int) -> int | None:
    return db.query(Brigade.id).filter(Brigade.brigadier_id == worker_id).scalar()


def set_assignment(db: Session, worker_id: int, brigade_id: int | None) -> None:
    db.query(Assignment).filter(Assignment.worker_id == worker_id).delete(synchronize_session="fetch")
    if brigade_id is not None:
        db.add(Assignment(worker_id=worker_id, brigade_id=brigade_id))
    db.flush()


def create_worker(db: Session, form: WorkerForm) -> Notification:
    if form.brigade_id is not None and not row_exists(db, Brigade, form.brigade_id):
        return refused(_LOG, f"Brigade with ID {form.brigade_id} does not exist", "/workers/new")
    try:
        employee = insert_employee(db, EMPLOYEE_CLASS_WORKER, form)
        db.add(Worker(id=employee.id, profession=form.profession.value, union_name=form.union_name))
        db.flush()
        PROFESSION_SUBTYPES.insert(db, employee.id, form.details)
        set_assignment(db, employee.id, form.brigade_id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create worker", "/workers/new")
    _LOG.info("worker %s created as %s", employee.id, form.profession.value)
    return Notification.success(
        f"Worker {form.last_name} {form.first_name} created successfully", f"/workers/{employee.id}"
    )


def update_worker(db: Session, worker_id: int, form: WorkerForm) -> Notification:
    worker = load_or_404(db, Worker, worker_id, "Worker")
    employee = load_or_404(db, Employee, worker_id, "Employee")
    redirect = f"/workers/{worker_id}/edit"
    if form.brigade_id is not None and not row_exists(db, Brigade, form.brigade_id):
        return refused(_LOG, f"Brigade with ID {form.brigade_id} does not exist", redirect)
    led = led_brigade_id(db, worker_id)
    if led is not None and form.brigade_id != led:
        return refused(_LOG, "Cannot move a brigadier out of the brigade they lead", redirect)
    old_profession = worker.profession
    try:
        apply_employee(employee, form)
        worker.profession = form.profession.value
        worker.union_name = form.union_name
        db.flush()
        PROFESSION_SUBTYPES.sync(db, worker_id, old_profession, form.details)
        set_assignment(db, worker_id, form.brigade_id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update worker", redirect)
    return Notification.success(f"Worker {form.last_name} {form.first_name} updated successfully", f"/workers/{worker_id}")


def delete_worker(db: Session, worker_id: int) -> Notification:
    worker = load_or_404(db, Worker, worker_id, "Worker")
    if led_brigade_id(db, worker_id) is not None:
        return refused(_LOG, "Cannot delete worker: they are a brigadier. Assign another brigadier first.", "/workers")
    try:
        PROFESSION_SUBTYPES.delete(db, worker.profession, worker_id)
        set_assignment(db, worker_id, None)
        db.delete(worker)
        db.flush()
        delete_employee(db, worker_id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete worker", "/workers")
    return Notification.success("Worker successfully deleted", "/workers")
