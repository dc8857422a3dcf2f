from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.templating import render
from app.db.session import get_db

router = APIRouter()

SECTIONS = [
    ("/departments", "Departments"),
    ("/areas", "Areas"),
    ("/clients", "Clients"),
    ("/sites", "Sites"),
    ("/brigades", "Brigades"),
    ("/workers", "Workers"),
    ("/technical-personnel", "Technical personnel"),
    ("/equipment", "Equipment"),
    ("/materials", "Materials"),
    ("/tasks", "Tasks"),
]


@router.get("/")
def index(request: Request):
    return render(request, "index.html", {"sections": SECTIONS})


@router.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
