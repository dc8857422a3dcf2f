from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Material(Base, IdMixin):
    __tablename__ = "material"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    cost: Mapped[float] = mapped_column(Float, nullable=False)
    units: Mapped[str] = mapped_column(String(30), nullable=False)


class Expenditure(Base):
    __tablename__ = "expenditure"

    task_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    material_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False, index=True)
    expected_amount: Mapped[float] = mapped_column(Float, nullable=False)
    actual_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
