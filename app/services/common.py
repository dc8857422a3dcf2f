import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy import exists, literal
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.notification import Notification

_LOG = logging.getLogger("app.services")


def today() -> date:
    return date.today()


def full_name(employee):
    """``last_name first_name`` of an Employee (or an alias of it) as SQL."""
    return employee.last_name + literal(" ") + employee.first_name


def row_exists(db: Session, model, entity_id) -> bool:
    if entity_id is None:
        return False
    return bool(db.query(exists().where(model.id == entity_id)).scalar())


def load_or_404(db: Session, model, entity_id, label: str):
    row = db.get(model, entity_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} with ID {entity_id} not found")
    return row


def first_or_404(query, label: str, entity_id):
    row = query.first()
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} with ID {entity_id} not found")
    return row


def driver_message(exc: SQLAlchemyError) -> str:
    text = str(getattr(exc, "orig", None) or exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__


def db_failure(db: Session, exc: SQLAlchemyError, message: str, redirect: str | None = None) -> Notification:
    db.rollback()
    _LOG.warning("%s: %s", message, exc, exc_info=True)
    return Notification.error(f"{message}: {driver_message(exc)}", redirect)


def refused(log: logging.Logger, message: str, redirect: str | None = None) -> Notification:
    log.info("refused: %s", message)
    return Notification.error(message, redirect)
