# models/document.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(SQLModel, table=True):
    """One persisted slot: the JSON snapshot of a store's canonical state."""

    __tablename__ = "documents"
    __table_args__ = {"extend_existing": True}

    slot: str = Field(primary_key=True)
    payload: str = Field(sa_column=Column(Text, nullable=False))
    version: int = Field(default=1)
    # stored as UTC; the column rejects naive values
    saved_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
