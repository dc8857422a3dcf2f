from datetime import date

from sqlalchemy import Date, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Equipment(Base, IdMixin):
    __tablename__ = "equipment"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    purchase_cost: Mapped[float] = mapped_column(Float, nullable=False)
    fuel_type: Mapped[str | None] = mapped_column(String(20), nullable=True)


class EquipmentAllocation(Base, IdMixin):
    __tablename__ = "equipment_allocation"

    equipment_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    department_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    site_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date | None] = mapped_column(Date, nullable=True)
