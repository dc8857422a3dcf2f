from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class IdMixin:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class SatelliteMixin:
    """Variant row sharing its primary key with the base row it extends."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
