from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render_notification
from app.db.session import get_db
from app.models.client import Client
from app.schemas.clients import ClientFilter, ClientForm
from app.services import clients as service
from app.services.common import load_or_404

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("clients", "/clients", "Clients", "client")

LIST_COLUMNS = [
    Column("id", "ID", link="/clients/{id}"),
    Column("name", "Name", link="/clients/{id}", sort="name"),
    Column("inn", "INN", sort="inn"),
    Column("is_vip", "VIP", fmt="bool"),
]


@page_router.get("")
def clients_page(request: Request):
    return RESOURCE.list_page(request)


@page_router.get("/new")
def client_new_page(request: Request):
    return RESOURCE.new_page(request)


@page_router.get("/{client_id}")
def client_page(client_id: int, request: Request, db: Session = Depends(get_db)):
    load_or_404(db, Client, client_id, "Client")
    return RESOURCE.details_page(request, client_id)


@page_router.get("/{client_id}/edit")
def client_edit_page(client_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.edit_page(request, client_id, load_or_404(db, Client, client_id, "Client"))


@router.get("")
def list_clients(request: Request, f: ClientFilter = Depends(query_model(ClientFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_clients(db, f), LIST_COLUMNS)


@router.post("")
def create_client(request: Request, form: ClientForm = Depends(form_model(ClientForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_client(db, form))


@router.get("/{client_id}")
def client_details(client_id: int, request: Request, db: Session = Depends(get_db)):
    return RESOURCE.details(request, **service.get_client(db, client_id))


@router.put("/{client_id}")
def update_client(
    client_id: int,
    request: Request,
    form: ClientForm = Depends(form_model(ClientForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_client(db, client_id, form))


@router.delete("/{client_id}")
def delete_client(client_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_client(db, client_id))
