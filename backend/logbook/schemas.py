from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# Domain entity (matches database model)
class LogEntry(BaseModel):
    timestamp: datetime
    content: str

    class Config:
        from_attributes = True

# Telegram webhook envelope, only the fields we read
class TelegramUser(BaseModel):
    username: Optional[str] = None

class TelegramMessage(BaseModel):
    text: Optional[str] = None
    sender: Optional[TelegramUser] = Field(default=None, alias="from")

class TelegramUpdate(BaseModel):
    message: Optional[TelegramMessage] = None

# API Response Models
class HealthStatus(BaseModel):
    status: str
    version: str
    entries: int
    timezone: str
