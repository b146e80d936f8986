from fastapi import Request

from logbook.config import Settings
from logbook.store import LogStore


# Both are attached to app.state by create_app
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> LogStore:
    return request.app.state.store
