# main.py
import logging
import os
from typing import Callable, List

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from config import ConfigurationError, ServiceAccount, Settings, load_settings
from records import rows_to_records
from sheets_client import SheetsClient, SheetsError

logger = logging.getLogger(__name__)

# Jinja2 setup
env = Environment(
    loader=FileSystemLoader(os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")),
    autoescape=select_autoescape(["html", "xml"])
)
template = env.get_template("index.html")


class HealthStatus(BaseModel):
    status: str
    configured: bool
    missing: List[str]


def create_app(
    settings: Settings,
    client_factory: Callable[[ServiceAccount], SheetsClient] = SheetsClient,
) -> FastAPI:
    app = FastAPI(title="Sheet JSON API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=HTMLResponse)
    async def index():
        html = template.render(sheet_range=settings.sheet_range, missing=settings.missing())
        return HTMLResponse(content=html)

    @app.get("/health", response_model=HealthStatus)
    async def health():
        missing = settings.missing()
        return HealthStatus(status="ok", configured=not missing, missing=missing)

    @app.get("/api/data")
    async def get_data():
        try:
            account = settings.service_account()
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return PlainTextResponse(f"Server configuration error: {e}", status_code=500)

        client = client_factory(account)
        logger.info("Fetching %s from Google Sheets...", settings.sheet_range)
        try:
            values = await run_in_threadpool(
                client.get_values, settings.spreadsheet_id, settings.sheet_range
            )
        except SheetsError:
            logger.exception("Error fetching from Google Sheets")
            return PlainTextResponse("Server Error", status_code=500)

        records = rows_to_records(values)
        logger.info("Fetched %d rows, sending to client.", len(records))
        return records

    return app


settings = load_settings()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

app = create_app(settings)


def main():
    missing = settings.missing()
    if missing:
        logger.warning("Not configured, /api/data will fail: missing %s", ", ".join(missing))
    logger.info("Server is live at http://localhost:%d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
