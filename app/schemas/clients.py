from typing import Optional

from app.schemas.common import FormModel, ListQuery


class ClientForm(FormModel):
    name: str
    inn: int
    address: str
    contact_person_email: str
    contact_person_name: str
    is_vip: bool = False


class ClientFilter(ListQuery):
    name: Optional[str] = None
    inn: Optional[int] = None
    is_vip: Optional[bool] = None
