"""
SQLModel Database Models

Key-value storage for the Inkwise session service.
The session is persisted as one JSON document under a single key.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoredValue(SQLModel, table=True):
    """
    One persisted value (JSON text) addressed by a string key.
    
    The service keeps the canonical session state under settings.STORAGE_KEY;
    the export envelope is never stored here.
    """
    __tablename__ = "stored_values"
    
    key: str = Field(primary_key=True, max_length=255)
    value_json: str
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
