from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import Settings, get_settings
from ..db import create_seed_engine, ping_database
from ..observers import LoggingSeedObserver, SeedObserver
from ..pages import render_outcome
from ..runner import EngineFactory, Probe, run_seed

router = APIRouter(tags=["seed"])


def get_engine_factory() -> EngineFactory:
    return create_seed_engine


def get_probe() -> Probe:
    return ping_database


def get_observer() -> SeedObserver:
    return LoggingSeedObserver()


@router.get("/seed", response_class=HTMLResponse)
async def seed_database(
    settings: Settings = Depends(get_settings),
    engine_factory: EngineFactory = Depends(get_engine_factory),
    probe: Probe = Depends(get_probe),
    observer: SeedObserver = Depends(get_observer),
):
    outcome = await run_seed(settings, engine_factory=engine_factory, probe=probe, observer=observer)
    status_code, html = render_outcome(outcome, dashboard_path=settings.dashboard_path)
    return HTMLResponse(content=html, status_code=status_code)
