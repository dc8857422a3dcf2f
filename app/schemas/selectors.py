from typing import Optional

from app.schemas.common import FormModel
from app.schemas.enums import Position, Profession, Qualification, SiteType, TaskStatus


class SelectorQuery(FormModel):
    selected: Optional[int] = None


class NameQuery(SelectorQuery):
    name: Optional[str] = None


class AreaSelectorQuery(NameQuery):
    department_id: Optional[int] = None


class PersonnelSelectorQuery(NameQuery):
    qualification: Optional[Qualification] = None
    position: Optional[Position] = None
    department_id: Optional[int] = None
    area_id: Optional[int] = None


class WorkerSelectorQuery(NameQuery):
    profession: Optional[Profession] = None
    brigade_id: Optional[int] = None
    is_brigadier: Optional[bool] = None
    unassigned: Optional[bool] = None


class BrigadeSelectorQuery(SelectorQuery):
    brigadier_name: Optional[str] = None
    site_id: Optional[int] = None
    available: Optional[bool] = None


class SiteSelectorQuery(NameQuery):
    area_id: Optional[int] = None
    department_id: Optional[int] = None
    client_id: Optional[int] = None
    type: Optional[SiteType] = None


class EquipmentSelectorQuery(NameQuery):
    available: Optional[bool] = None


class TaskSelectorQuery(NameQuery):
    site_id: Optional[int] = None
    brigade_id: Optional[int] = None
    status: Optional[TaskStatus] = None
