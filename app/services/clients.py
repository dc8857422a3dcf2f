import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.client import Client
from app.models.site import Site
from app.schemas.clients import ClientFilter, ClientForm
from app.schemas.common import Page
from app.schemas.notification import Notification
from app.services.common import db_failure, load_or_404, refused
from app.services.derived import site_status_expr
from app.services.list_query import FilterSet, SortSpec, paginate

_LOG = logging.getLogger("app.services.clients")

SORT = SortSpec(
    allowed={
        "name": Client.name,
        "inn": Client.inn,
    },
    default=Client.id,
)


def list_clients(db: Session, f: ClientFilter) -> Page:
    q = db.query(Client.id, Client.name, Client.inn, Client.is_vip)
    filters = (
        FilterSet()
        .add(Client.name, "~", f.name)
        .add(Client.inn, "=", f.inn)
        .add(Client.is_vip, "=", f.is_vip)
    )
    return paginate(q, filters, SORT, f.sort, f.pagination)


def get_client(db: Session, client_id: int) -> dict:
    client = load_or_404(db, Client, client_id, "Client")
    sites = (
        db.query(Site.id, Site.name, Site.type, site_status_expr().label("status"))
        .filter(Site.client_id == client_id)
        .order_by(Site.id)
        .all()
    )
    return {"client": client, "sites": sites}


def create_client(db: Session, form: ClientForm) -> Notification:
    client = Client(**form.model_dump())
    try:
        db.add(client)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to create client", "/clients/new")
    _LOG.info("client %s created", client.id)
    return Notification.success(f"Client {client.name} created successfully", f"/clients/{client.id}")


def update_client(db: Session, client_id: int, form: ClientForm) -> Notification:
    client = load_or_404(db, Client, client_id, "Client")
    for key, value in form.model_dump().items():
        setattr(client, key, value)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to update client", f"/clients/{client_id}/edit")
    return Notification.success(f"Client {form.name} updated successfully", f"/clients/{client_id}")


def delete_client(db: Session, client_id: int) -> Notification:
    client = load_or_404(db, Client, client_id, "Client")
    sites = db.query(Site).filter(Site.client_id == client_id).count()
    if sites:
        return refused(_LOG, f"Cannot delete client: it has {sites} sites. Remove sites first.", "/clients")
    try:
        db.delete(client)
        db.commit()
    except SQLAlchemyError as exc:
        return db_failure(db, exc, "Failed to delete client", "/clients")
    return Notification.success("Client successfully deleted", "/clients")
