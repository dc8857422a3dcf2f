from datetime import date
from typing import Optional

from pydantic import Field

from app.schemas.common import FormModel, ListQuery
from app.schemas.enums import TaskStatus, TaskTab


class TaskForm(FormModel):
    name: str
    description: Optional[str] = None
    site_id: int
    brigade_id: Optional[int] = None
    period_start: date
    expected_period_end: date


class TaskFilter(ListQuery):
    site_id: Optional[int] = None
    brigade_id: Optional[int] = None
    status: Optional[TaskStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    name: Optional[str] = None
    exceeded_deadline: Optional[bool] = None


class TaskTabQuery(FormModel):
    tab: TaskTab = TaskTab.MATERIALS


class TaskMaterialForm(FormModel):
    material_id: int
    expected_amount: float = Field(gt=0)


class TaskMaterialUpdateForm(FormModel):
    actual_amount: float = Field(ge=0)


class TaskCompleteForm(FormModel):
    actual_period_end: date
