import hashlib
import json
import logging
from collections import OrderedDict
from dataclasses import asdict
from threading import Lock
from typing import List, Optional, Sequence, Tuple

from models.records import LibraryEntry, ReviewEntry, RecommendedGame

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, int, str]


def interaction_fingerprint(
        library_entries: Sequence[LibraryEntry],
        review_entries: Sequence[ReviewEntry]
) -> str:
    """Stable hash of a user's library and reviews; any mutation changes it"""
    payload = {
        'library': sorted((asdict(entry) for entry in library_entries), key=lambda e: e['app_id']),
        'reviews': sorted((asdict(review) for review in review_entries), key=lambda r: r['app_id']),
    }
    encoded = json.dumps(payload, sort_keys=True, default=str).encode('utf-8')
    return hashlib.sha1(encoded).hexdigest()


class RecommendationCache:
    """
    Small in-memory LRU of computed recommendations.

    Keys include a fingerprint of the user's library and reviews, so entries
    go stale by construction when either changes. The whole cache must be
    cleared when the catalog snapshot is reloaded.
    """

    def __init__(self, max_size: int = 256):
        self.max_size = max_size
        self._entries: 'OrderedDict[CacheKey, List[RecommendedGame]]' = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self.max_size > 0

    @staticmethod
    def make_key(
            user_id: str,
            limit: int,
            library_entries: Sequence[LibraryEntry],
            review_entries: Sequence[ReviewEntry]
    ) -> CacheKey:
        return user_id, limit, interaction_fingerprint(library_entries, review_entries)

    def get(self, key: CacheKey) -> Optional[List[RecommendedGame]]:
        if not self.enabled:
            return None

        with self._lock:
            recommendations = self._entries.get(key)
            if recommendations is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return list(recommendations)

    def put(self, key: CacheKey, recommendations: Sequence[RecommendedGame]) -> None:
        if not self.enabled:
            return

        with self._lock:
            self._entries[key] = list(recommendations)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("🧹 Recommendation cache cleared")

    def __len__(self) -> int:
        return len(self._entries)
