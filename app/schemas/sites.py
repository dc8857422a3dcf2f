from collections.abc import Mapping
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import FormModel, ListQuery, strip_blanks
from app.schemas.enums import RiskLevel, SiteStatus, SiteTab, SiteType


class PowerPlantDetails(BaseModel):
    type: Literal["power_plant"] = "power_plant"
    energy_output: float
    energy_source: str
    is_grid_connected: bool = False


class RoadDetails(BaseModel):
    type: Literal["road"] = "road"
    length: float
    lanes: int
    surface: str


class HousingDetails(BaseModel):
    type: Literal["housing"] = "housing"
    number_of_floors: int
    number_of_entrances: int
    housing_type: str
    energy_efficiency: str


class BridgeDetails(BaseModel):
    type: Literal["bridge"] = "bridge"
    length: float
    road_material: str
    max_load: float


class ParkDetails(BaseModel):
    type: Literal["park"] = "park"
    area: float
    has_playground: bool = False
    has_lighting: bool = False


SiteDetails = Annotated[
    Union[PowerPlantDetails, RoadDetails, HousingDetails, BridgeDetails, ParkDetails],
    Field(discriminator="type"),
]


class SiteForm(FormModel):
    """Create/update form. Type specific inputs arrive flat next to the
    common ones and are validated against the variant named by ``type``."""

    name: str
    area_id: int
    client_id: int
    type: SiteType
    location: str
    risk_level: RiskLevel
    description: Optional[str] = None
    details: SiteDetails

    @model_validator(mode="before")
    @classmethod
    def _nest_type_fields(cls, data):
        data = strip_blanks(data)
        if isinstance(data, Mapping) and "details" not in data:
            data = dict(data)
            data["details"] = dict(data)
        return data


class SiteFilter(ListQuery):
    area_id: Optional[int] = None
    department_id: Optional[int] = None
    client_id: Optional[int] = None
    type: Optional[SiteType] = None
    name: Optional[str] = None
    status: Optional[SiteStatus] = None


class SiteTabQuery(FormModel):
    tab: SiteTab = SiteTab.SCHEDULE


class SiteTypeQuery(FormModel):
    type: SiteType
