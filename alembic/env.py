import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from app.db.session import Base

# import models
from app.models.area import Area
from app.models.brigade import Assignment, Brigade
from app.models.client import Client
from app.models.department import Department
from app.models.employee import Employee
from app.models.equipment import Equipment, EquipmentAllocation
from app.models.material import Expenditure, Material
from app.models.site import Bridge, Housing, Park, PowerPlant, Road, Site
from app.models.task import Task
from app.models.technical_personnel import Engineer, TechnicalPersonnel, Technician, Technologist
from app.models.worker import Driver, Electrician, Mason, Plumber, Welder, Worker

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)
target_metadata = Base.metadata


def get_url():
    url = config.attributes.get("database_url") or os.getenv("DATABASE_URL")
    if url:
        return url
    from app.core.config import settings

    return settings.DATABASE_URL


def run_migrations_offline():
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    cfg = config.get_section(config.config_ini_section) or {}
    cfg["sqlalchemy.url"] = get_url()
    connectable = engine_from_config(cfg, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
