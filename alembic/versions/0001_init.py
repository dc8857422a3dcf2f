"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _satellite(name, parent, *columns):
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), sa.ForeignKey(f"{parent}.id"), primary_key=True, autoincrement=False),
        *columns,
    )


def upgrade():
    op.create_table(
        "employee",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("class", sa.String(length=30), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("photo", sa.String(length=400), nullable=True),
        sa.Column("phone_number", sa.String(length=30), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=False),
        sa.CheckConstraint("class IN ('worker', 'technical_personnel')", name="ck_employee_class"),
        sa.CheckConstraint("gender IN ('male', 'female')", name="ck_employee_gender"),
        sa.CheckConstraint("salary >= 0", name="ck_employee_salary"),
    )
    op.create_index("ix_employee_class", "employee", ["class"])

    op.create_table(
        "department",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("supervisor_id", sa.Integer(), nullable=True),
    )
    op.create_index("ix_department_supervisor_id", "department", ["supervisor_id"])

    op.create_table(
        "area",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("department.id"), nullable=False),
        sa.Column("supervisor_id", sa.Integer(), nullable=True),
    )
    op.create_index("ix_area_department_id", "area", ["department_id"])
    op.create_index("ix_area_supervisor_id", "area", ["supervisor_id"])

    _satellite(
        "technical_personnel",
        "employee",
        sa.Column("qualification", sa.String(length=20), nullable=False),
        sa.Column("position", sa.String(length=20), nullable=True),
        sa.Column("education_level", sa.String(length=200), nullable=False),
        sa.Column("software_skills", sa.JSON(), nullable=False),
        sa.Column("is_project_manager", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("area_id", sa.Integer(), sa.ForeignKey("area.id"), nullable=True),
    )
    op.create_index("ix_technical_personnel_qualification", "technical_personnel", ["qualification"])
    op.create_index("ix_technical_personnel_area_id", "technical_personnel", ["area_id"])
    _satellite(
        "technician",
        "technical_personnel",
        sa.Column("safety_training_level", sa.String(length=100), nullable=False),
    )
    _satellite("technologist", "technical_personnel", sa.Column("management_tools", sa.JSON(), nullable=False))
    _satellite("engineer", "technical_personnel", sa.Column("pe_license_id", sa.Integer(), nullable=False))

    op.create_foreign_key(
        "fk_department_supervisor", "department", "technical_personnel", ["supervisor_id"], ["id"]
    )
    op.create_foreign_key("fk_area_supervisor", "area", "technical_personnel", ["supervisor_id"], ["id"])

    op.create_table(
        "client",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("inn", sa.BigInteger(), nullable=False),
        sa.Column("address", sa.String(length=400), nullable=False),
        sa.Column("contact_person_email", sa.String(length=255), nullable=False),
        sa.Column("contact_person_name", sa.String(length=200), nullable=False),
        sa.Column("is_vip", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_client_inn", "client", ["inn"])

    op.create_table(
        "site",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("area_id", sa.Integer(), sa.ForeignKey("area.id"), nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client.id"), nullable=False),
        sa.Column("location", sa.String(length=400), nullable=False),
        sa.Column("risk_level", sa.String(length=20), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "type IN ('power_plant', 'road', 'housing', 'bridge', 'park')", name="ck_site_type"
        ),
        sa.CheckConstraint("risk_level IN ('low', 'medium', 'high')", name="ck_site_risk_level"),
    )
    op.create_index("ix_site_type", "site", ["type"])
    op.create_index("ix_site_area_id", "site", ["area_id"])
    op.create_index("ix_site_client_id", "site", ["client_id"])
    _satellite(
        "power_plant",
        "site",
        sa.Column("energy_output", sa.Float(), nullable=False),
        sa.Column("energy_source", sa.String(length=100), nullable=False),
        sa.Column("is_grid_connected", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    _satellite(
        "road",
        "site",
        sa.Column("length", sa.Float(), nullable=False),
        sa.Column("lanes", sa.Integer(), nullable=False),
        sa.Column("surface", sa.String(length=100), nullable=False),
    )
    _satellite(
        "housing",
        "site",
        sa.Column("number_of_floors", sa.Integer(), nullable=False),
        sa.Column("number_of_entrances", sa.Integer(), nullable=False),
        sa.Column("housing_type", sa.String(length=100), nullable=False),
        sa.Column("energy_efficiency", sa.String(length=20), nullable=False),
    )
    _satellite(
        "bridge",
        "site",
        sa.Column("length", sa.Float(), nullable=False),
        sa.Column("road_material", sa.String(length=100), nullable=False),
        sa.Column("max_load", sa.Float(), nullable=False),
    )
    _satellite(
        "park",
        "site",
        sa.Column("area", sa.Float(), nullable=False),
        sa.Column("has_playground", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("has_lighting", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )

    _satellite(
        "worker",
        "employee",
        sa.Column("profession", sa.String(length=20), nullable=False),
        sa.Column("union_name", sa.String(length=200), nullable=True),
    )
    op.create_index("ix_worker_profession", "worker", ["profession"])
    _satellite("electrician", "worker", sa.Column("voltage_specialization", sa.String(length=100), nullable=False))
    _satellite("plumber", "worker", sa.Column("pipe_specialization", sa.String(length=100), nullable=False))
    _satellite("welder", "worker", sa.Column("welding_machine", sa.String(length=100), nullable=False))
    _satellite(
        "driver",
        "worker",
        sa.Column("vehicle_type", sa.String(length=100), nullable=False),
        sa.Column("number_of_accidents", sa.Integer(), nullable=False, server_default="0"),
    )
    _satellite(
        "mason",
        "worker",
        sa.Column("hq_restoration_skills", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )

    op.create_table(
        "brigade",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("brigadier_id", sa.Integer(), sa.ForeignKey("worker.id"), nullable=False, unique=True),
    )
    op.create_table(
        "assignment",
        sa.Column("worker_id", sa.Integer(), sa.ForeignKey("worker.id"), primary_key=True, autoincrement=False),
        sa.Column("brigade_id", sa.Integer(), sa.ForeignKey("brigade.id"), nullable=False),
    )
    op.create_index("ix_assignment_brigade_id", "assignment", ["brigade_id"])

    op.create_table(
        "equipment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("purchase_cost", sa.Float(), nullable=False),
        sa.Column("fuel_type", sa.String(length=20), nullable=True),
        sa.CheckConstraint("amount >= 0", name="ck_equipment_amount"),
    )
    op.create_table(
        "equipment_allocation",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("equipment_id", sa.Integer(), sa.ForeignKey("equipment.id"), nullable=False),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("department.id"), nullable=False),
        sa.Column("site_id", sa.Integer(), sa.ForeignKey("site.id"), nullable=True),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("period_start", sa.Date(), nullable=False),
        sa.Column("period_end", sa.Date(), nullable=True),
        sa.CheckConstraint("amount > 0", name="ck_equipment_allocation_amount"),
    )
    op.create_index("ix_equipment_allocation_equipment_id", "equipment_allocation", ["equipment_id"])
    op.create_index("ix_equipment_allocation_department_id", "equipment_allocation", ["department_id"])
    op.create_index("ix_equipment_allocation_site_id", "equipment_allocation", ["site_id"])

    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("site_id", sa.Integer(), sa.ForeignKey("site.id"), nullable=False),
        sa.Column("brigade_id", sa.Integer(), sa.ForeignKey("brigade.id"), nullable=True),
        sa.Column("period_start", sa.Date(), nullable=False),
        sa.Column("expected_period_end", sa.Date(), nullable=False),
        sa.Column("actual_period_end", sa.Date(), nullable=True),
    )
    op.create_index("ix_task_site_id", "task", ["site_id"])
    op.create_index("ix_task_brigade_id", "task", ["brigade_id"])

    op.create_table(
        "material",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column("units", sa.String(length=30), nullable=False),
    )
    op.create_table(
        "expenditure",
        sa.Column("task_id", sa.Integer(), sa.ForeignKey("task.id"), primary_key=True, autoincrement=False),
        sa.Column("material_id", sa.Integer(), sa.ForeignKey("material.id"), primary_key=True, autoincrement=False),
        sa.Column("expected_amount", sa.Float(), nullable=False),
        sa.Column("actual_amount", sa.Float(), nullable=True),
    )
    op.create_index("ix_expenditure_material_id", "expenditure", ["material_id"])


def downgrade():
    for name in (
        "expenditure",
        "material",
        "task",
        "equipment_allocation",
        "equipment",
        "assignment",
        "brigade",
        "mason",
        "driver",
        "welder",
        "plumber",
        "electrician",
        "worker",
        "park",
        "bridge",
        "housing",
        "road",
        "power_plant",
        "site",
        "client",
    ):
        op.drop_table(name)
    op.drop_constraint("fk_area_supervisor", "area", type_="foreignkey")
    op.drop_constraint("fk_department_supervisor", "department", type_="foreignkey")
    for name in ("engineer", "technologist", "technician", "technical_personnel", "area", "department", "employee"):
        op.drop_table(name)
