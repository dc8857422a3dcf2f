from sqlalchemy import BigInteger, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin


class Client(Base, IdMixin):
    __tablename__ = "client"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    inn: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(400), nullable=False)
    contact_person_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person_name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_vip: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
