import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import (
    areas,
    brigades,
    clients,
    departments,
    equipment,
    general,
    materials,
    selectors,
    sites,
    tasks,
    technical_personnel,
    workers,
)
from app.core.config import settings
from app.core.http_hardening import install_error_handlers, install_http_hardening
from app.db.session import ensure_database, run_migrations

_LOG = logging.getLogger("app")

RESOURCES = [
    ("departments", departments),
    ("areas", areas),
    ("clients", clients),
    ("sites", sites),
    ("brigades", brigades),
    ("workers", workers),
    ("technical-personnel", technical_personnel),
    ("equipment", equipment),
    ("materials", materials),
    ("tasks", tasks),
]


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        if settings.CREATE_DATABASE_IF_MISSING:
            ensure_database()
        run_migrations()
    _LOG.info("%s started (%s)", settings.APP_NAME, settings.APP_ENV)
    yield


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
install_http_hardening(app)
install_error_handlers(app)

app.include_router(general.router, include_in_schema=False)
app.include_router(selectors.router, prefix="/api/selectors")
for name, module in RESOURCES:
    app.include_router(module.page_router, prefix=f"/{name}", include_in_schema=False)
    app.include_router(module.router, prefix=f"/api/{name}")


def run() -> None:
    import uvicorn

    configure_logging()
    try:
        uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    except Exception:
        _LOG.critical("server stopped with a fatal error", exc_info=True)
        raise
