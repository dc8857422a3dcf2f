import logging
from datetime import date
from pathlib import Path
from string import Formatter
from typing import NamedTuple, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError
from markupsafe import escape

from app.core.config import settings
from app.schemas.enums import label_for
from app.schemas.notification import Notification

_LOG = logging.getLogger("app.templates")

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _fmt_date(value) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _money(value) -> str:
    return f"{float(value or 0):,.2f}"


def _mapping(row):
    return getattr(row, "_mapping", row)


def _field(row, key: str):
    return _mapping(row).get(key)


def _fill(template: str, row) -> str:
    """Format a link template with row values; empty when a value is missing."""
    values = dict(_mapping(row))
    names = [name for _, name, _, _ in Formatter().parse(template) if name]
    if any(values.get(name) is None for name in names):
        return ""
    return template.format(**values)


def url_with(request: Request, **overrides) -> str:
    """Current URL with some query parameters replaced."""
    params = dict(request.query_params)
    params.update({k: str(v) for k, v in overrides.items() if v is not None})
    return f"{request.url.path}?{urlencode(params)}"


class Column(NamedTuple):
    """One column of a rendered table fragment."""

    key: str
    title: str
    link: Optional[str] = None
    sort: Optional[str] = None
    fmt: Optional[str] = None


templates.env.filters["label"] = label_for
templates.env.filters["fmt_date"] = _fmt_date
templates.env.filters["money"] = _money
templates.env.filters["yesno"] = lambda v: "Yes" if v else "No"
templates.env.filters["field"] = _field
templates.env.filters["fill"] = _fill
templates.env.globals["app_name"] = settings.APP_NAME
templates.env.globals["url_with"] = url_with


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200) -> HTMLResponse:
    try:
        template = templates.get_template(name)
        body = template.render({"request": request, **(context or {})})
    except TemplateError as exc:
        _LOG.error("template %s failed: %s", name, exc, exc_info=True)
        return HTMLResponse(f"<p>Error rendering template: {escape(str(exc))}</p>", status_code=500)
    return HTMLResponse(body, status_code=status_code)


def render_notification(request: Request, notification: Notification) -> HTMLResponse:
    return render(request, "notification.html", {"notification": notification})
