from typing import Optional

from app.schemas.common import FormModel, ListQuery
from app.schemas.enums import AreaTab


class AreaForm(FormModel):
    name: str
    department_id: int
    supervisor_id: Optional[int] = None


class AreaFilter(ListQuery):
    department_id: Optional[int] = None
    supervisor_id: Optional[int] = None
    name: Optional[str] = None


class AreaTabQuery(FormModel):
    tab: AreaTab = AreaTab.SITES
