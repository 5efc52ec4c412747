from __future__ import annotations

import logging

from fastapi import FastAPI

from src.api.routes import close_mcp_server, router
from src.config import settings
from src.mcp_server.catalog import TOOL_CATALOG

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(
    title=settings.server_name,
    description="Google Tasks and Google Calendar exposed as agent tools",
    version=settings.server_version,
    debug=settings.app_debug,
)


@app.on_event("startup")
def startup_event() -> None:
    logging.info(
        "Google Tasks & Calendar tool server ready",
        extra={"tools": len(TOOL_CATALOG), "default_time_zone": settings.default_time_zone},
    )


@app.on_event("shutdown")
def shutdown_event() -> None:
    close_mcp_server()


app.include_router(router)
