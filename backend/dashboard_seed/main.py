import logging

import uvicorn
from fastapi import FastAPI

from .config import settings
from .routers import seed


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

app = FastAPI(title=f"{settings.app_name} API")

app.include_router(seed.router)


@app.get("/")
def root():
    return {"status": "ok", "service": f"{settings.app_name} API"}


def serve() -> None:
    """Entry point for ``dashboard-seed-server``."""
    uvicorn.run("dashboard_seed.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
