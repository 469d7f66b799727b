"""FastAPI app serving the timetable page and the sanitized export."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from jinja2 import Environment, PackageLoader, select_autoescape

from edtexport.config.hierarchy import load_export_config
from edtexport.config.schema import ExportConfig
from edtexport.core import TimetableExport
from edtexport.web.identity import resolve_user_identity

logger = logging.getLogger(__name__)

_jinja_env = Environment(
    loader=PackageLoader("edtexport.web", "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_page(user_identity: str) -> str:
    template = _jinja_env.get_template("index.html")
    return template.render(user_identity=user_identity, data_url="/timetable")


def create_app(
    config: ExportConfig | None = None,
    export: TimetableExport | None = None,
) -> FastAPI:
    """Build the app. Pass ``export`` to inject a pre-wired pipeline."""
    if export is None:
        export = TimetableExport(config or load_export_config())
    identity_header = export.config.identity_header

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        export.close()

    app = FastAPI(title="edtexport", lifespan=lifespan)
    app.state.export = export

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> HTMLResponse:
        user = resolve_user_identity(request, identity_header)
        return HTMLResponse(render_page(user))

    @app.get("/timetable", response_class=PlainTextResponse)
    def timetable() -> PlainTextResponse:
        """Sanitized XML, or a string starting with "Error: ". Always 200."""
        return PlainTextResponse(export.get_sanitized_xml_safe())

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": "edtexport"}

    return app
