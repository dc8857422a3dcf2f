from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.schemas.employees import EmployeeForm

EMPLOYEE_FIELDS = ("first_name", "last_name", "middle_name", "photo", "phone_number", "salary")


def apply_employee(employee: Employee, form: EmployeeForm) -> None:
    for key in EMPLOYEE_FIELDS:
        setattr(employee, key, getattr(form, key))
    employee.gender = form.gender.value


def insert_employee(db: Session, employee_class: str, form: EmployeeForm) -> Employee:
    """Add the base employee row and flush it so its id is known."""
    employee = Employee(employee_class=employee_class)
    apply_employee(employee, form)
    db.add(employee)
    db.flush()
    return employee


def delete_employee(db: Session, employee_id: int) -> None:
    db.query(Employee).filter(Employee.id == employee_id).delete(synchronize_session="fetch")
