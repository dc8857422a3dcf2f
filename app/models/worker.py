from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import SatelliteMixin


class Worker(Base, SatelliteMixin):
    __tablename__ = "worker"

    profession: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    union_name: Mapped[str | None] = mapped_column(String(200), nullable=True)


class Electrician(Base, SatelliteMixin):
    __tablename__ = "electrician"

    voltage_specialization: Mapped[str] = mapped_column(String(100), nullable=False)


class Plumber(Base, SatelliteMixin):
    __tablename__ = "plumber"

    pipe_specialization: Mapped[str] = mapped_column(String(100), nullable=False)


class Welder(Base, SatelliteMixin):
    __tablename__ = "welder"

    welding_machine: Mapped[str] = mapped_column(String(100), nullable=False)


class Driver(Base, SatelliteMixin):
    __tablename__ = "driver"

    vehicle_type: Mapped[str] = mapped_column(String(100), nullable=False)
    number_of_accidents: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class Mason(Base, SatelliteMixin):
    __tablename__ = "mason"

    hq_restoration_skills: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
