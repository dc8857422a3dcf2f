from collections.abc import Mapping
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import FormModel, ListQuery, strip_blanks
from app.schemas.employees import EmployeeForm
from app.schemas.enums import Profession


class ElectricianDetails(BaseModel):
    profession: Literal["electrician"] = "electrician"
    voltage_specialization: str


class PlumberDetails(BaseModel):
    profession: Literal["plumber"] = "plumber"
    pipe_specialization: str


class WelderDetails(BaseModel):
    profession: Literal["welder"] = "welder"
    welding_machine: str


class DriverDetails(BaseModel):
    profession: Literal["driver"] = "driver"
    vehicle_type: str
    number_of_accidents: int = 0


class MasonDetails(BaseModel):
    profession: Literal["mason"] = "mason"
    hq_restoration_skills: bool = False


ProfessionDetails = Annotated[
    Union[ElectricianDetails, PlumberDetails, WelderDetails, DriverDetails, MasonDetails],
    Field(discriminator="profession"),
]


class WorkerForm(EmployeeForm):
    profession: Profession
    union_name: Optional[str] = None
    brigade_id: Optional[int] = None
    details: ProfessionDetails

    @model_validator(mode="before")
    @classmethod
    def _nest_profession_fields(cls, data):
        data = strip_blanks(data)
        if isinstance(data, Mapping) and "details" not in data:
            data = dict(data)
            data["details"] = dict(data)
        return data


class WorkerFilter(ListQuery):
    profession: Optional[Profession] = None
    brigade_id: Optional[int] = None
    is_brigadier: Optional[bool] = None
    name: Optional[str] = None


class WorkerProfessionQuery(FormModel):
    profession: Profession
