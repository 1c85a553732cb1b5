"""In-memory translation history.

Entries live in process memory only and are lost on restart. The store is
capped; when it is full the oldest entries are evicted silently.
"""

import logging
import threading
from collections import OrderedDict
from datetime import datetime, timezone
from typing import List, Optional

from translingo.core.exceptions import TranslationNotFoundError
from translingo.models.translation import (
    TranslationCreate,
    TranslationHistoryEntry,
    TranslationType,
    TranslationUpdate,
)

logger = logging.getLogger(__name__)


class HistoryService:
    """Thread-safe, size-capped store of past translations.

    Ids are assigned from an increasing counter, so id order is creation
    order. All listing methods return entries newest first.
    """

    def __init__(self, max_entries: int = 1000):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: "OrderedDict[int, TranslationHistoryEntry]" = OrderedDict()
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _newest_first(self) -> List[TranslationHistoryEntry]:
        return list(reversed(self._entries.values()))

    def create(self, data: TranslationCreate) -> TranslationHistoryEntry:
        """Store a new entry, evicting the oldest ones beyond the cap."""
        with self._lock:
            entry = TranslationHistoryEntry(
                **data.model_dump(),
                id=self._next_id,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self._entries[entry.id] = entry

            evicted = 0
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
                evicted += 1

        if evicted:
            logger.debug(f"History full, evicted {evicted} oldest entries")
        return entry

    def list(self, limit: int = 50, offset: int = 0) -> List[TranslationHistoryEntry]:
        with self._lock:
            entries = self._newest_first()
        return entries[offset : offset + limit]

    def get(self, translation_id: int) -> TranslationHistoryEntry:
        """Return an entry by id.

        Raises:
            TranslationNotFoundError: If no entry has this id
        """
        with self._lock:
            entry = self._entries.get(translation_id)
        if entry is None:
            raise TranslationNotFoundError(translation_id)
        return entry

    def update(
        self, translation_id: int, updates: TranslationUpdate
    ) -> TranslationHistoryEntry:
        """Apply the fields set in ``updates`` to an entry."""
        # An explicit null only clears metadata; other fields are required
        changes = {
            field: value
            for field, value in updates.model_dump(exclude_unset=True).items()
            if value is not None or field == "metadata"
        }
        with self._lock:
            existing = self._entries.get(translation_id)
            if existing is None:
                raise TranslationNotFoundError(translation_id)
            updated = existing.model_copy(update=changes)
            self._entries[translation_id] = updated
        return updated

    def toggle_favorite(self, translation_id: int) -> TranslationHistoryEntry:
        with self._lock:
            existing = self._entries.get(translation_id)
            if existing is None:
                raise TranslationNotFoundError(translation_id)
            updated = existing.model_copy(update={"is_favorite": not existing.is_favorite})
            self._entries[translation_id] = updated
        return updated

    def delete(self, translation_id: int) -> None:
        with self._lock:
            if self._entries.pop(translation_id, None) is None:
                raise TranslationNotFoundError(translation_id)

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared translation history ({removed} entries)")
        return removed

    def search(self, query: str) -> List[TranslationHistoryEntry]:
        """Case-insensitive substring match over source and translated text."""
        needle = query.lower()
        with self._lock:
            entries = self._newest_first()
        return [
            entry
            for entry in entries
            if needle in entry.source_text.lower()
            or needle in entry.translated_text.lower()
        ]

    def by_type(self, translation_type: TranslationType) -> List[TranslationHistoryEntry]:
        with self._lock:
            entries = self._newest_first()
        return [entry for entry in entries if entry.type == translation_type]

    def favorites(self) -> List[TranslationHistoryEntry]:
        with self._lock:
            entries = self._newest_first()
        return [entry for entry in entries if entry.is_favorite]

    def query(
        self,
        limit: int = 50,
        offset: int = 0,
        translation_type: Optional[TranslationType] = None,
        favorites_only: bool = False,
        search: Optional[str] = None,
    ) -> List[TranslationHistoryEntry]:
        """Dispatch a listing request.

        Precedence: search, then type, then favorites, then the plain page.
        """
        if search:
            return self.search(search)
        if translation_type:
            return self.by_type(translation_type)
        if favorites_only:
            return self.favorites()
        return self.list(limit=limit, offset=offset)
