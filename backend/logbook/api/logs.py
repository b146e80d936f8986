import time

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from logbook.api.deps import get_settings, get_store
from logbook.config import Settings
from logbook.store import LogStore
from logbook.utils.page_renderer import LogPageRenderer

router = APIRouter(tags=["logs"])

@router.get("/", response_class=HTMLResponse)
def render_logs(
    settings: Settings = Depends(get_settings),
    store: LogStore = Depends(get_store)
):
    """Public page listing every log, newest first, grouped by day"""
    start = time.perf_counter()
    entries = store.fetch_all_descending()

    renderer = LogPageRenderer(settings.OWNER_NAME, settings.DISPLAY_TIMEZONE)
    return HTMLResponse(content=renderer.generate_html(entries, started=start))
