from typing import Optional

from app.schemas.common import FormModel, ListQuery
from app.schemas.enums import DepartmentTab


class DepartmentForm(FormModel):
    name: str
    supervisor_id: Optional[int] = None


class DepartmentFilter(ListQuery):
    supervisor_id: Optional[int] = None
    name: Optional[str] = None


class DepartmentTabQuery(FormModel):
    tab: DepartmentTab = DepartmentTab.AREAS
