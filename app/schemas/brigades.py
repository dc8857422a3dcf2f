from typing import Optional

from app.schemas.common import FormModel, ListQuery
from app.schemas.enums import BrigadeTab


class BrigadeForm(FormModel):
    brigadier_id: int


class BrigadeFilter(ListQuery):
    brigadier_id: Optional[int] = None
    site_id: Optional[int] = None
    task_name: Optional[str] = None


class BrigadeTabQuery(FormModel):
    tab: BrigadeTab = BrigadeTab.WORKERS


class BrigadeWorkerForm(FormModel):
    worker_id: int
