from enum import Enum


class LabeledEnum(str, Enum):
    """String enum stored by value and displayed with a human label."""

    @property
    def label(self) -> str:
        return label_for(self.value)

    def __str__(self) -> str:
        return self.value


_LABELS = {
    "power_plant": "Power Plant",
    "in_progress": "In Progress",
    "asc": "Ascending",
    "desc": "Descending",
}


def label_for(value) -> str:
    if value is None:
        return ""
    value = getattr(value, "value", value)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    text = str(value)
    return _LABELS.get(text, text.replace("_", " ").capitalize())


class SiteType(LabeledEnum):
    POWER_PLANT = "power_plant"
    ROAD = "road"
    HOUSING = "housing"
    BRIDGE = "bridge"
    PARK = "park"


class RiskLevel(LabeledEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Gender(LabeledEnum):
    MALE = "male"
    FEMALE = "female"


class Profession(LabeledEnum):
    ELECTRICIAN = "electrician"
    PLUMBER = "plumber"
    WELDER = "welder"
    DRIVER = "driver"
    MASON = "mason"


class Qualification(LabeledEnum):
    TECHNICIAN = "technician"
    TECHNOLOGIST = "technologist"
    ENGINEER = "engineer"


class Position(LabeledEnum):
    MASTER = "master"
    FOREMAN = "foreman"


class FuelType(LabeledEnum):
    GASOLINE = "gasoline"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"


class TaskStatus(LabeledEnum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SiteStatus(LabeledEnum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SortDirection(LabeledEnum):
    ASC = "asc"
    DESC = "desc"


class DepartmentTab(LabeledEnum):
    AREAS = "areas"
    EQUIPMENT = "equipment"
    SITES = "sites"
    PERSONNEL = "personnel"


class AreaTab(LabeledEnum):
    SITES = "sites"
    PERSONNEL = "personnel"


class SiteTab(LabeledEnum):
    SCHEDULE = "schedule"
    MATERIALS = "materials"
    EQUIPMENT = "equipment"
    BRIGADES = "brigades"
    REPORTS = "reports"


class BrigadeTab(LabeledEnum):
    WORKERS = "workers"
    TASKS = "tasks"
    CURRENT = "current"


class TaskTab(LabeledEnum):
    MATERIALS = "materials"
    PROGRESS = "progress"
