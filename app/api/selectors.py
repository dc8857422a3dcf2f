"""``<option>`` fragments loaded into form and filter dropdowns."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.pages import options
from app.core.deps import query_model
from app.db.session import get_db
from app.schemas import selectors as q
from app.services import selectors as service

router = APIRouter()


@router.get("/departments")
def departments(request: Request, f: q.NameQuery = Depends(query_model(q.NameQuery)), db: Session = Depends(get_db)):
    return options(request, service.departments(db, f), f.selected)


@router.get("/areas")
def areas(
    request: Request,
    f: q.AreaSelectorQuery = Depends(query_model(q.AreaSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.areas(db, f), f.selected)


@router.get("/clients")
def clients(request: Request, f: q.NameQuery = Depends(query_model(q.NameQuery)), db: Session = Depends(get_db)):
    return options(request, service.clients(db, f), f.selected)


@router.get("/technical-personnel")
def technical_personnel(
    request: Request,
    f: q.PersonnelSelectorQuery = Depends(query_model(q.PersonnelSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.technical_personnel(db, f), f.selected)


@router.get("/workers")
def workers(
    request: Request,
    f: q.WorkerSelectorQuery = Depends(query_model(q.WorkerSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.workers(db, f), f.selected)


@router.get("/brigades")
def brigades(
    request: Request,
    f: q.BrigadeSelectorQuery = Depends(query_model(q.BrigadeSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.brigades(db, f), f.selected)


@router.get("/sites")
def sites(
    request: Request,
    f: q.SiteSelectorQuery = Depends(query_model(q.SiteSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.sites(db, f), f.selected)


@router.get("/equipment")
def equipment(
    request: Request,
    f: q.EquipmentSelectorQuery = Depends(query_model(q.EquipmentSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.equipment(db, f), f.selected)


@router.get("/materials")
def materials(request: Request, f: q.NameQuery = Depends(query_model(q.NameQuery)), db: Session = Depends(get_db)):
    return options(request, service.materials(db, f), f.selected)


@router.get("/tasks")
def tasks(
    request: Request,
    f: q.TaskSelectorQuery = Depends(query_model(q.TaskSelectorQuery)),
    db: Session = Depends(get_db),
):
    return options(request, service.tasks(db, f), f.selected)
