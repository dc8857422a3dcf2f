from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from app.schemas.common import FormModel, ListQuery
from app.schemas.enums import FuelType


class EquipmentForm(FormModel):
    name: str
    amount: int = Field(ge=0)
    purchase_date: date
    purchase_cost: float = Field(ge=0)
    fuel_type: Optional[FuelType] = None


class EquipmentFilter(ListQuery):
    department_id: Optional[int] = None
    site_id: Optional[int] = None
    name: Optional[str] = None
    available: Optional[bool] = None


class AllocationForm(FormModel):
    department_id: int
    site_id: Optional[int] = None
    amount: int = Field(gt=0)
    period_start: date
    period_end: Optional[date] = None

    @model_validator(mode="after")
    def _period_is_ordered(self):
        if self.period_end is not None and self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self
