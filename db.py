# db.py

#============================================================#
#                          TaskPilot                         #
#============================================================#
# Author      : Aktham Almomani                              #
# Created     : 2025-10-15                                   #
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : TaskPilot is a single-user project & task    #
#               tracker with reactive stores, debounced      #
#               persistence and Gantt timelines (SQLite)     #
#============================================================#


from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from models.document import Document, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Slots:
    PROJECTS = "projects"
    TASKS = "tasks"
    USERS = "users"
    SETTINGS = "settings"


class PersistenceError(Exception):
    """Base class for gateway read/write failures."""


class SlotNotFoundError(PersistenceError):
    def __init__(self, slot: str):
        super().__init__(f"no document stored in slot {slot!r}")
        self.slot = slot


class DocumentDecodeError(PersistenceError):
    def __init__(self, slot: str, reason: str):
        super().__init__(f"document in slot {slot!r} could not be decoded: {reason}")
        self.slot = slot


def make_engine(database_url: str):
    connect_args = {}
    if database_url.startswith("sqlite"):
        # the debounced writers save from timer threads
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


class DocumentGateway:
    """
    Load/save typed documents to named slots.

    Each slot is one row of the ``documents`` table. ``save`` replaces the
    payload inside a single transaction, so readers see either the previous
    or the new document, never a partial one.
    """

    def __init__(self, database_url: str = "sqlite:///taskpilot.db") -> None:
        self.database_url = database_url
        self.engine = make_engine(database_url)
        self._adapters: dict[Any, TypeAdapter] = {}

    def init_db(self) -> bool:
        try:
            SQLModel.metadata.create_all(self.engine, tables=[Document.__table__])
        except SQLAlchemyError:
            logger.exception("Could not initialise document schema at %s", self.database_url)
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()

    def _adapter(self, type_: Any) -> TypeAdapter:
        adapter = self._adapters.get(type_)
        if adapter is None:
            adapter = self._adapters[type_] = TypeAdapter(type_)
        return adapter

    # ---- writes ----

    def save(self, value: Any, slot: str) -> int:
        """Serialize ``value`` into ``slot``. Returns the slot's new version."""
        try:
            payload = to_json(value, indent=2).decode("utf-8")
        except PydanticSerializationError as exc:
            raise PersistenceError(f"could not serialize document for slot {slot!r}: {exc}") from exc

        try:
            with Session(self.engine) as s:
                doc = s.get(Document, slot)
                if doc is None:
                    doc = Document(slot=slot, payload=payload, version=1)
                else:
                    doc.payload = payload
                    doc.version += 1
                    doc.saved_at = utcnow()
                s.add(doc)
                s.commit()
                version = doc.version
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not write slot {slot!r}: {exc}") from exc

        logger.debug("Saved slot=%s version=%s bytes=%s", slot, version, len(payload))
        return version

    # ---- reads ----

    def _read_payload(self, slot: str) -> str:
        try:
            with Session(self.engine) as s:
                doc = s.get(Document, slot)
                payload = doc.payload if doc is not None else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not read slot {slot!r}: {exc}") from exc
        if payload is None:
            raise SlotNotFoundError(slot)
        return payload

    def load(self, type_: type[T] | Any, slot: str) -> T:
        payload = self._read_payload(slot)
        try:
            return self._adapter(type_).validate_json(payload)
        except ValidationError as exc:
            raise DocumentDecodeError(slot, f"{exc.error_count()} validation error(s)") from exc

    def load_or_default(self, type_: type[T] | Any, slot: str, fallback: T) -> T:
        try:
            return self.load(type_, slot)
        except SlotNotFoundError:
            logger.debug("Slot %s is empty; using default", slot)
        except PersistenceError as exc:
            logger.warning("Falling back to default for slot %s: %s", slot, exc)
        return fallback

    def exists(self, slot: str) -> bool:
        try:
            self._read_payload(slot)
        except PersistenceError:
            return False
        return True

    def version(self, slot: str) -> int:
        try:
            with Session(self.engine) as s:
                doc = s.get(Document, slot)
                return doc.version if doc is not None else 0
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not read slot {slot!r}: {exc}") from exc
