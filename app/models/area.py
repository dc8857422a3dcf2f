from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Area(Base, IdMixin):
    __tablename__ = "area"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    department_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    supervisor_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
