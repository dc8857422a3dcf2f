from typing import Optional

from app.schemas.common import FormModel
from app.schemas.enums import Gender


class EmployeeForm(FormModel):
    """Fields every employee carries, whatever their class."""

    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    gender: Gender
    photo: Optional[str] = None
    phone_number: str
    salary: int
