from typing import Optional

from pydantic import Field

from app.schemas.common import FormModel, ListQuery


class MaterialForm(FormModel):
    name: str
    cost: float = Field(ge=0)
    units: str


class MaterialFilter(ListQuery):
    name: Optional[str] = None
    cost_min: Optional[float] = None
    cost_max: Optional[float] = None
    excess_usage: Optional[bool] = None
