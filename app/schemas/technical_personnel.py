from collections.abc import Mapping
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.common import FormModel, ListQuery, split_list, strip_blanks
from app.schemas.employees import EmployeeForm
from app.schemas.enums import Position, Qualification


class TechnicianDetails(BaseModel):
    qualification: Literal["technician"] = "technician"
    safety_training_level: str


class TechnologistDetails(BaseModel):
    qualification: Literal["technologist"] = "technologist"
    management_tools: list[str] = []

    @field_validator("management_tools", mode="before")
    @classmethod
    def _split_tools(cls, v):
        return split_list(v)


class EngineerDetails(BaseModel):
    qualification: Literal["engineer"] = "engineer"
    pe_license_id: int


QualificationDetails = Annotated[
    Union[TechnicianDetails, TechnologistDetails, EngineerDetails],
    Field(discriminator="qualification"),
]


class PersonnelForm(EmployeeForm):
    qualification: Qualification
    position: Optional[Position] = None
    education_level: str
    software_skills: list[str] = []
    is_project_manager: bool = False
    area_id: Optional[int] = None
    details: QualificationDetails

    @field_validator("software_skills", mode="before")
    @classmethod
    def _split_skills(cls, v):
        return split_list(v)

    @model_validator(mode="before")
    @classmethod
    def _nest_qualification_fields(cls, data):
        data = strip_blanks(data)
        if isinstance(data, Mapping) and "details" not in data:
            data = dict(data)
            data["details"] = dict(data)
        return data


class PersonnelFilter(ListQuery):
    qualification: Optional[Qualification] = None
    position: Optional[Position] = None
    department_id: Optional[int] = None
    area_id: Optional[int] = None
    name: Optional[str] = None


class PersonnelQualificationQuery(FormModel):
    qualification: Qualification
