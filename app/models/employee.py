from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin

EMPLOYEE_CLASS_WORKER = "worker"
EMPLOYEE_CLASS_TECHNICAL_PERSONNEL = "technical_personnel"


class Employee(Base, IdMixin):
    __tablename__ = "employee"

    employee_class: Mapped[str] = mapped_column("class", String(30), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    photo: Mapped[str | None] = mapped_column(String(400), nullable=True)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)
