# stores/base.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from db import DocumentGateway
from utils.debounce import Debouncer
from utils.signals import Signal

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)

DEFAULT_SAVE_DELAY = 0.25


class CollectionStore(Generic[ItemT]):
    """
    Canonical in-memory collection backed by one gateway slot.

    Mutations apply immediately and publish the whole collection on
    ``changed``. Persistence is best-effort: the latest snapshot is written
    once the debounce window has been quiet, and write failures are logged,
    never raised.

    Update/delete targeting an id that is not present is a silent no-op.
    """

    slot: str = ""
    item_type: type[BaseModel] = BaseModel

    def __init__(
        self,
        gateway: DocumentGateway,
        *,
        save_delay: float = DEFAULT_SAVE_DELAY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self.changed = Signal()
        self._items: List[ItemT] = list(gateway.load_or_default(List[self.item_type], self.slot, []))
        self._autosave = Debouncer(save_delay, self._persist, name=f"save-{self.slot}")
        logger.info("%s ready slot=%s items=%s", type(self).__name__, self.slot, len(self._items))

    # ---- persistence ----

    def _persist(self, snapshot: List[ItemT]) -> None:
        try:
            self._gateway.save(snapshot, self.slot)
        except Exception:
            logger.exception("Autosave failed slot=%s items=%s", self.slot, len(snapshot))

    def _commit(self) -> None:
        snapshot = list(self._items)
        self.changed.emit(snapshot)
        self._autosave.trigger(snapshot)

    def flush(self) -> bool:
        """Write any pending snapshot synchronously."""
        return self._autosave.flush()

    def close(self) -> None:
        self._autosave.close()

    # ---- reads ----

    @property
    def items(self) -> List[ItemT]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemT]:
        return iter(list(self._items))

    def index_of(self, item_id: UUID) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def get(self, item_id: UUID) -> Optional[ItemT]:
        idx = self.index_of(item_id)
        return self._items[idx] if idx is not None else None

    # ---- mutations ----

    def create(self, item: ItemT) -> None:
        self._items.append(item)
        self._commit()

    def _prepare_update(self, item: ItemT) -> ItemT:
        return item

    def update(self, item: ItemT) -> bool:
        idx = self.index_of(item.id)
        if idx is None:
            logger.debug("update ignored: %s not in %s", item.id, self.slot)
            return False
        self._items[idx] = self._prepare_update(item)
        self._commit()
        return True

    def delete(self, ids: Iterable[UUID]) -> int:
        doomed = set(ids)
        kept = [item for item in self._items if item.id not in doomed]
        removed = len(self._items) - len(kept)
        if not removed:
            return 0
        self._items = kept
        self._commit()
        return removed

    def delete_at(self, positions: Iterable[int]) -> int:
        doomed = {p for p in positions if 0 <= p < len(self._items)}
        if not doomed:
            return 0
        self._items = [item for i, item in enumerate(self._items) if i not in doomed]
        self._commit()
        return len(doomed)
