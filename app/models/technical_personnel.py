from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import SatelliteMixin


class TechnicalPersonnel(Base, SatelliteMixin):
    __tablename__ = "technical_personnel"

    qualification: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    position: Mapped[str | None] = mapped_column(String(20), nullable=True)
    education_level: Mapped[str] = mapped_column(String(200), nullable=False)
    software_skills: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    is_project_manager: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    area_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)


class Technician(Base, SatelliteMixin):
    __tablename__ = "technician"

    safety_training_level: Mapped[str] = mapped_column(String(100), nullable=False)


class Technologist(Base, SatelliteMixin):
    __tablename__ = "technologist"

    management_tools: Mapped[list] = mapped_column(JSON, default=list, nullable=False)


class Engineer(Base, SatelliteMixin):
    __tablename__ = "engineer"

    pe_license_id: Mapped[int] = mapped_column(Integer, nullable=False)
