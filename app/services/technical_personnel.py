import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.area import Area
from app.models.department import Department
from app.models.employee import EMPLOYEE_CLASS_TECHNICAL_PERSONNEL, Employee
from app.models.technical_personnel import Engineer, TechnicalPersonnel, Technician, Technologist
from app.schemas.common import Page
from app.schemas.enums import Qualification
from app.schemas.notification import Notification
from app.schemas.technical_personnel import PersonnelFilter, PersonnelForm
from app.services.common import db_failure, first_or_404, full_name, load_or_404, refused, row_exists
from app.services.employees import apply_employee, delete_employee, insert_employee
from app.services.list_query import FilterSet, SortSpec, paginate
from app.services.subtypes import SubtypeRegistry

_LOG = logging.getLogger("app.services.technical_personnel")

QUALIFICATION_SUBTYPES = SubtypeRegistry(
    Qualification,
    "qualification",
    {
        Qualification.TECHNICIAN: Technician,
        Qualification.TECHNOLOGIST: Technologist,
        Qualification.ENGINEER: Engineer,
    },
)

SORT = SortSpec(
    allowed={
        "name": full_name(Employee),
        "qualification": TechnicalPersonnel.qualification,
        "position": TechnicalPersonnel.position,
    },
    default=TechnicalPersonnel.id,
)


def _base_query(db: Session):
    return (
        db.query(
            TechnicalPersonnel.id,
            Employee.first_name,
            Employee.last_name,
            Employee.middle_name,
            full_name(Employee).label("name"),
            Employee.gender,
            Employee.photo,
            Employee.phone_number,
            Employee.salary,
            TechnicalPersonnel.qualification,
            TechnicalPersonnel.position,
            TechnicalPersonnel.education_level,
            TechnicalPersonnel.software_skills,
            TechnicalPersonnel.is_project_manager,
            TechnicalPersonnel.area_id,
            Area.name.label("area_name"),
            Area.department_id,
        )
        .join(Employee, Employee.id == TechnicalPersonnel.id)
        .outerjoin(Area, Area.id == TechnicalPersonnel.area_id)
    )


def list_personnel(db: Session, f: PersonnelFilter) -> Page:
    filters = (
        FilterSet()
        .add(TechnicalPersonnel.qualification, "=", f.qualification)
        .add(TechnicalPersonnel.position, "=", f.position)
        .add(Area.department_id, "=", f.department_id)
        .add(TechnicalPersonnel.area_id, "=", f.area_id)
        .add(full_name(Employee), "~", f.name)
    )
    return paginate(_base_query(db), filters, SORT, f.sort, f.pagination)


def get_personnel(db: Session, personnel_id: int) -> dict:
    person = first_or_404(
        _base_query(db).filter(TechnicalPersonnel.id == personnel_id), "Technical personnel", personnel_id
    )
    return {
        "person": person,
        "details": QUALIFICATION_SUBTYPES.values(db, person.qualification, personnel_id),
        "supervised_departments": db.query(Department.id, Department.name)
        .filter(Department.supervisor_id == personnel_id)
        .order_by(Department.id)
        .all(),
        "supervised_areas": db.query(Area.id, Area.name)
        .filter(Area.supervisor_id == personnel_id)
        .order_by(Area.id)
        .all(),
    }


def _apply_personnel(person: TechnicalPersonnel, form: PersonnelForm) -> None:
    person.qualification = form.qualification.value
    person.position = form.position.value if form.position else None
    person.education_level = form.education_level
    person.software_skills = list(form.software_skills)
    person.is_project_manager = form.is_project_manager
    person.area_id = form.area_id


def create_personnel(db: Session, form: PersonnelForm) -> Notification:
    redirect = "/technical-personnel/new"
    if form.area_id is not None and not row_exists(db, Area, form.area_id):
        return refused(_LOG, f"Area with ID {form.area_id} does not exist", redirect)
    try:
        employee = insert_employee(db, EMPLOYEE_CLASS_TECHNICAL_PERSONNEL, form)
        person = TechnicalPersonnel(id=employee.id)
        _apply_personnel(person, form)
        db.add(person)
        db.flush()
        QUALIFICATION_SUBTYPES.insert(db, employee.id, form.details)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create technical personnel", redirect)
    _LOG.info("technical personnel %s created as %s", employee.id, form.qualification.value)
    return Notification.success(
        f"Technical personnel {form.last_name} {form.first_name} created successfully",
        f"/technical-personnel/{employee.id}",
    )


def update_personnel(db: Session, personnel_id: int, form: PersonnelForm) -> Notification:
    person = load_or_404(db, TechnicalPersonnel, personnel_id, "Technical personnel")
    employee = load_or_404(db, Employee, personnel_id, "Employee")
    redirect = f"/technical-personnel/{personnel_id}/edit"
    if form.area_id is not None and not row_exists(db, Area, form.area_id):
        return refused(_LOG, f"Area with ID {form.area_id} does not exist", redirect)
    old_qualification = person.qualification
    try:
        apply_employee(employee, form)
        _apply_personnel(person, form)
        db.flush()
        QUALIFICATION_SUBTYPES.sync(db, personnel_id, old_qualification, form.details)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update technical personnel", redirect)
    return Notification.success(
        f"Technical personnel {form.last_name} {form.first_name} updated successfully",
        f"/technical-personnel/{personnel_id}",
    )


def delete_personnel(db: Session, personnel_id: int) -> Notification:
    person = load_or_404(db, TechnicalPersonnel, personnel_id, "Technical personnel")
    supervising = (
        db.query(Department).filter(Department.supervisor_id == personnel_id).count()
        + db.query(Area).filter(Area.supervisor_id == personnel_id).count()
    )
    if supervising:
        return refused(
            _LOG, "Cannot delete technical personnel: they are supervising a department or area", "/technical-personnel"
        )
    try:
        QUALIFICATION_SUBTYPES.delete(db, person.qualification, personnel_id)
        db.delete(person)
        db.flush()
        delete_employee(db, personnel_id)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete technical personnel", "/technical-personnel")
    return Notification.success("Technical personnel successfully deleted", "/technical-personnel")
