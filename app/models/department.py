from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Department(Base, IdMixin):
    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    supervisor_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)
