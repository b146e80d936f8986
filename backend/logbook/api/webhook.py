import hmac
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from logbook.api.deps import get_settings, get_store
from logbook.config import Settings
from logbook.errors import MalformedPayload, SenderNotAllowlisted, Unauthorized
from logbook.schemas import LogEntry, TelegramUpdate
from logbook.store import LogStore

router = APIRouter(prefix="/_wh", tags=["webhook"])
logger = logging.getLogger("logbook.webhook")


def verify_key(key: Optional[str], settings: Settings) -> None:
    """Check the ?key= credential against the shared secret."""
    if not settings.REQUIRE_WEBHOOK_KEY:
        return
    if not key or not hmac.compare_digest(
        key.encode("utf-8"), (settings.TELEGRAM_SECRET or "").encode("utf-8")
    ):
        raise Unauthorized("invalid secret key")


def parse_update(body: bytes) -> TelegramUpdate:
    try:
        return TelegramUpdate.model_validate_json(body)
    except ValidationError as e:
        raise MalformedPayload(f"malformed webhook payload: {e.errors()[0]['msg']}") from e


def authorized_text(update: TelegramUpdate, username: str) -> Optional[str]:
    """
    Text of the update if it was sent by ``username``.

    Raises SenderNotAllowlisted for any other sender, including updates with
    no message or sender at all. Returns None for messages without text.
    """
    message = update.message
    sender = message.sender if message else None
    if sender is None or sender.username != username:
        raise SenderNotAllowlisted(
            f"sender {sender.username if sender else None!r} is not allowlisted"
        )
    return message.text


@router.post("/telegram")
async def telegram_webhook(
    request: Request,
    key: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    store: LogStore = Depends(get_store)
):
    """Telegram webhook: store messages from the owner, ignore everyone else"""
    verify_key(key, settings)
    update = parse_update(await request.body())

    text = authorized_text(update, settings.TELEGRAM_USERNAME)
    if text is None:
        logger.debug("Ignored owner update without text")
        return Response(status_code=200)

    entry = LogEntry(timestamp=datetime.now(timezone.utc), content=text)
    await run_in_threadpool(store.insert, entry)
    logger.info("Stored log (%d chars)", len(text))
    return Response(status_code=200)
