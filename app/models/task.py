from datetime import date

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Task(Base, IdMixin):
    __tablename__ = "task"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    site_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    brigade_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    expected_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    actual_period_end: Mapped[date | None] = mapped_column(Date, nullable=True)
