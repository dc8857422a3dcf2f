from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Brigade(Base, IdMixin):
    __tablename__ = "brigade"

    brigadier_id: Mapped[int] = mapped_column(Integer, unique=True, index=True, nullable=False)


class Assignment(Base):
    __tablename__ = "assignment"

    worker_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    brigade_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
