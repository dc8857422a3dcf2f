from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NotificationResult(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    result: NotificationResult
    message: Optional[str] = None
    redirect: Optional[str] = None

    @classmethod
    def success(cls, message: str | None = None, redirect: str | None = None) -> "Notification":
        return cls(result=NotificationResult.SUCCESS, message=message, redirect=redirect)

    @classmethod
    def error(cls, message: str | None = None, redirect: str | None = None) -> "Notification":
        return cls(result=NotificationResult.ERROR, message=message, redirect=redirect)

    @property
    def is_success(self) -> bool:
        return self.result == NotificationResult.SUCCESS
