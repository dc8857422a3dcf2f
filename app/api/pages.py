from fastapi import Request
from fastapi.responses import HTMLResponse

from app.core.templating import Column, render
from app.schemas.common import Page


class Resource:
    """Names one resource for the shared page templates."""

    def __init__(self, template_dir: str, base_path: str, title: str, singular: str):
        self.template_dir = template_dir
        self.base_path = base_path
        self.title = title
        self.singular = singular

    def _context(self, **extra) -> dict:
        return {"resource": self.template_dir, "base_path": self.base_path, **extra}

    def list_page(self, request: Request, **extra) -> HTMLResponse:
        return render(request, "list_page.html", self._context(title=self.title, filter=None, **extra))

    def new_page(self, request: Request, **extra) -> HTMLResponse:
        return render(
            request,
            "form_page.html",
            self._context(title=f"New {self.singular}", entity_id=None, values=None, **extra),
        )

    def edit_page(self, request: Request, entity_id: int, values, **extra) -> HTMLResponse:
        return render(
            request,
            "form_page.html",
            self._context(title=f"Edit {self.singular}", entity_id=entity_id, values=values, **extra),
        )

    def details_page(self, request: Request, entity_id: int) -> HTMLResponse:
        return render(request, "details_page.html", self._context(title=self.title, entity_id=entity_id))

    def details(self, request: Request, **context) -> HTMLResponse:
        return render(request, f"{self.template_dir}/_details.html", self._context(**context))


def table(request: Request, page: Page, columns: list[Column], empty_message: str | None = None) -> HTMLResponse:
    return render(request, "_table.html", {"page": page, "columns": columns, "empty_message": empty_message})


def options(request: Request, rows: list, selected: int | None = None, placeholder: str | None = "---") -> HTMLResponse:
    return render(request, "_options.html", {"rows": rows, "selected": selected, "placeholder": placeholder})
