from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import IdMixin, SatelliteMixin


class Site(Base, IdMixin):
    __tablename__ = "site"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    area_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    client_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    location: Mapped[str] = mapped_column(String(400), nullable=False)
    risk_level: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class PowerPlant(Base, SatelliteMixin):
    __tablename__ = "power_plant"

    energy_output: Mapped[float] = mapped_column(Float, nullable=False)
    energy_source: Mapped[str] = mapped_column(String(100), nullable=False)
    is_grid_connected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Road(Base, SatelliteMixin):
    __tablename__ = "road"

    length: Mapped[float] = mapped_column(Float, nullable=False)
    lanes: Mapped[int] = mapped_column(Integer, nullable=False)
    surface: Mapped[str] = mapped_column(String(100), nullable=False)


class Housing(Base, SatelliteMixin):
    __tablename__ = "housing"

    number_of_floors: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_entrances: Mapped[int] = mapped_column(Integer, nullable=False)
    housing_type: Mapped[str] = mapped_column(String(100), nullable=False)
    energy_efficiency: Mapped[str] = mapped_column(String(20), nullable=False)


class Bridge(Base, SatelliteMixin):
    __tablename__ = "bridge"

    length: Mapped[float] = mapped_column(Float, nullable=False)
    road_material: Mapped[str] = mapped_column(String(100), nullable=False)
    max_load: Mapped[float] = mapped_column(Float, nullable=False)


class Park(Base, SatelliteMixin):
    __tablename__ = "park"

    area: Mapped[float] = mapped_column(Float, nullable=False)
    has_playground: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    has_lighting: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
