"""SQL expressions for values computed from other rows.

Each takes "today" as an argument so it is bound as a parameter instead of
relying on the database clock.
"""
from datetime import date

from sqlalchemy import and_, case, exists, func, or_, select

from app.models.equipment import Equipment, EquipmentAllocation
from app.models.material import Expenditure, Material
from app.models.site import Site
from app.models.task import Task
from app.schemas.enums import SiteStatus, TaskStatus


def task_status(task, today: date) -> TaskStatus:
    if task.actual_period_end is not None:
        return TaskStatus.COMPLETED
    if task.period_start > today:
        return TaskStatus.PLANNED
    return TaskStatus.IN_PROGRESS


def task_status_expr(today: date, task=Task):
    return case(
        (task.actual_period_end.isnot(None), TaskStatus.COMPLETED.value),
        (task.period_start > today, TaskStatus.PLANNED.value),
        else_=TaskStatus.IN_PROGRESS.value,
    )


def task_status_predicate(status: TaskStatus, today: date, task=Task):
    if status == TaskStatus.COMPLETED:
        return task.actual_period_end.isnot(None)
    if status == TaskStatus.PLANNED:
        return and_(task.actual_period_end.is_(None), task.period_start > today)
    return and_(task.actual_period_end.is_(None), task.period_start <= today)


def deadline_exceeded_expr(today: date, task=Task):
    return or_(
        and_(task.actual_period_end.isnot(None), task.actual_period_end > task.expected_period_end),
        and_(task.actual_period_end.is_(None), task.expected_period_end < today),
    )


def site_has_tasks(site=Site):
    return exists().where(Task.site_id == site.id)


def site_has_open_tasks(site=Site):
    return exists().where(Task.site_id == site.id, Task.actual_period_end.is_(None))


def site_status_expr(site=Site):
    return case(
        (~site_has_tasks(site), SiteStatus.PLANNED.value),
        (site_has_open_tasks(site), SiteStatus.IN_PROGRESS.value),
        else_=SiteStatus.COMPLETED.value,
    )


def site_status_predicate(status: SiteStatus, site=Site):
    if status == SiteStatus.PLANNED:
        return ~site_has_tasks(site)
    if status == SiteStatus.IN_PROGRESS:
        return site_has_open_tasks(site)
    return and_(site_has_tasks(site), ~site_has_open_tasks(site))


def allocation_is_current(today: date, allocation=EquipmentAllocation):
    return or_(allocation.period_end.is_(None), allocation.period_end > today)


def allocated_amount_expr(today: date):
    return (
        select(func.coalesce(func.sum(EquipmentAllocation.amount), 0))
        .where(EquipmentAllocation.equipment_id == Equipment.id, allocation_is_current(today))
        .correlate(Equipment)
        .scalar_subquery()
    )


def available_amount_expr(today: date):
    return Equipment.amount - allocated_amount_expr(today)


def estimated_spendings_expr():
    expected = (
        select(func.coalesce(func.sum(Expenditure.expected_amount), 0.0))
        .where(Expenditure.material_id == Material.id)
        .correlate(Material)
        .scalar_subquery()
    )
    return expected * Material.cost


def actual_spendings_expr():
    actual = (
        select(func.coalesce(func.sum(func.coalesce(Expenditure.actual_amount, 0.0)), 0.0))
        .where(Expenditure.material_id == Material.id)
        .correlate(Material)
        .scalar_subquery()
    )
    return actual * Material.cost


def material_excess_expr():
    return exists().where(
        Expenditure.material_id == Material.id,
        Expenditure.actual_amount.isnot(None),
        Expenditure.actual_amount > Expenditure.expected_amount,
    )
