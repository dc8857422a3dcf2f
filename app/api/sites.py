from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import Resource, table
from app.core.deps import form_model, query_model
from app.core.templating import Column, render, render_notification
from app.db.session import get_db
from app.schemas.common import PageQuery
from app.schemas.enums import RiskLevel, SiteType
from app.schemas.sites import SiteFilter, SiteForm, SiteTabQuery, SiteTypeQuery
from app.services import sites as service

page_router = APIRouter()
router = APIRouter()

RESOURCE = Resource("sites", "/sites", "Sites", "site")

LIST_COLUMNS = [
    Column("id", "ID", link="/sites/{id}"),
    Column("name", "Name", link="/sites/{id}", sort="name"),
    Column("type", "Type", fmt="label", sort="type"),
    Column("area_name", "Area", link="/areas/{area_id}", sort="area_name"),
    Column("client_name", "Client", link="/clients/{client_id}", sort="client_name"),
    Column("status", "Status", fmt="label", sort="status"),
]


def _form_context() -> dict:
    return {"site_types": list(SiteType), "risk_levels": list(RiskLevel)}


@page_router.get("")
def sites_page(request: Request):
    return RESOURCE.list_page(request, **_form_context())


@page_router.get("/new")
def site_new_page(request: Request):
    return RESOURCE.new_page(request, details=None, **_form_context())


@page_router.get("/{site_id}")
def site_page(site_id: int, request: Request, db: Session = Depends(get_db)):
    service.get_site(db, site_id)
    return RESOURCE.details_page(request, site_id)


@page_router.get("/{site_id}/edit")
def site_edit_page(site_id: int, request: Request, db: Session = Depends(get_db)):
    found = service.get_site(db, site_id)
    return RESOURCE.edit_page(request, site_id, found["site"], details=found["details"], **_form_context())


@router.get("")
def list_sites(request: Request, f: SiteFilter = Depends(query_model(SiteFilter)), db: Session = Depends(get_db)):
    return table(request, service.list_sites(db, f), LIST_COLUMNS)


@router.post("")
def create_site(request: Request, form: SiteForm = Depends(form_model(SiteForm)), db: Session = Depends(get_db)):
    return render_notification(request, service.create_site(db, form))


@router.get("/type-fields")
def site_type_fields(request: Request, q: SiteTypeQuery = Depends(query_model(SiteTypeQuery))):
    """Inputs specific to one site type, swapped into the form on type change."""
    return render(request, "sites/_type_fields.html", {"type": q.type.value, "details": None})


@router.get("/{site_id}")
def site_details(
    site_id: int,
    request: Request,
    q: SiteTabQuery = Depends(query_model(SiteTabQuery)),
    db: Session = Depends(get_db),
):
    return RESOURCE.details(request, tab=q.tab, **service.get_site(db, site_id))


@router.put("/{site_id}")
def update_site(
    site_id: int,
    request: Request,
    form: SiteForm = Depends(form_model(SiteForm)),
    db: Session = Depends(get_db),
):
    return render_notification(request, service.update_site(db, site_id, form))


@router.delete("/{site_id}")
def delete_site(site_id: int, request: Request, db: Session = Depends(get_db)):
    return render_notification(request, service.delete_site(db, site_id))


@router.get("/{site_id}/schedule")
def site_schedule(
    site_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Task", link="/tasks/{id}"),
        Column("brigadier_name", "Brigade", link="/brigades/{brigade_id}"),
        Column("period_start", "Start", fmt="date"),
        Column("expected_period_end", "Expected end", fmt="date"),
        Column("actual_period_end", "Finished", fmt="date"),
        Column("status", "Status", fmt="label"),
        Column("deadline_exceeded", "Overdue", fmt="bool"),
    ]
    return table(request, service.site_schedule(db, site_id, q.pagination), columns, "No tasks scheduled.")


@router.get("/{site_id}/materials")
def site_materials(
    site_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Material", link="/materials/{id}"),
        Column("expected_amount", "Expected"),
        Column("actual_amount", "Used"),
        Column("units", "Units"),
        Column("cost", "Unit cost", fmt="money"),
    ]
    return table(request, service.site_materials(db, site_id, q.pagination), columns, "No materials.")


@router.get("/{site_id}/equipment")
def site_equipment(
    site_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("name", "Equipment", link="/equipment/{equipment_id}"),
        Column("amount", "Amount"),
        Column("period_start", "From", fmt="date"),
        Column("period_end", "Until", fmt="date"),
    ]
    return table(request, service.site_equipment(db, site_id, q.pagination), columns, "No equipment allocated.")


@router.get("/{site_id}/brigades")
def site_brigades(
    site_id: int,
    request: Request,
    q: PageQuery = Depends(query_model(PageQuery)),
    db: Session = Depends(get_db),
):
    columns = [
        Column("brigadier_name", "Brigadier", link="/brigades/{id}"),
        Column("task_count", "Tasks"),
    ]
    return table(request, service.site_brigades(db, site_id, q.pagination), columns, "No brigades.")


@router.get("/{site_id}/reports")
def site_reports(site_id: int, request: Request, db: Session = Depends(get_db)):
    return render(request, "sites/_report.html", {"report": service.site_report(db, site_id)})
