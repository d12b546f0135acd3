"""
Process-local cache for recommendation results and article lookups.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, List, Optional, Union

from ..errors import ValidationError
from ..models import Article, CacheKind

logger = logging.getLogger(__name__)

ALL_KINDS = "all"


class RecommendationCache:
    """In-memory cache partitioned by ``CacheKind``.

    There is no TTL and no locking: entries live until ``clear`` is called or
    the process exits, and every write replaces a whole value. Values are
    copied on the way in and out so callers can never mutate cached state.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._entries: Dict[CacheKind, Dict[Hashable, Any]] = {kind: {} for kind in CacheKind}

    def get(self, kind: CacheKind, key: Hashable) -> Optional[Any]:
        if not self.enabled:
            return None
        bucket = self._entries[kind]
        if key not in bucket:
            logger.debug(f"Cache miss: kind={kind.value}, key={key}")
            return None
        logger.debug(f"Cache hit: kind={kind.value}, key={key}")
        return self._copy_out(bucket[key])

    def set(self, kind: CacheKind, key: Hashable, value: Any) -> None:
        if not self.enabled:
            return
        self._entries[kind][key] = self._copy_in(value)

    def clear(self, kind: Union[str, CacheKind] = ALL_KINDS) -> int:
        """
        Clear one cache section or all of them.

        Args:
            kind: ``"all"``, a ``CacheKind`` or its string value

        Returns:
            Number of entries removed
        """
        kinds = self._resolve_kinds(kind)
        removed = 0
        for cache_kind in kinds:
            removed += len(self._entries[cache_kind])
            self._entries[cache_kind].clear()
        logger.info(f"Cleared {removed} cache entries ({kind if isinstance(kind, str) else kind.value})")
        return removed

    def stats(self) -> Dict[str, Any]:
        entries_by_kind = {kind.value: len(bucket) for kind, bucket in self._entries.items()}
        return {
            "entries_by_kind": entries_by_kind,
            "total_entries": sum(entries_by_kind.values()),
        }

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._entries.values())

    # Internals ----------------------------------------------------------------

    @staticmethod
    def _resolve_kinds(kind: Union[str, CacheKind]) -> List[CacheKind]:
        if isinstance(kind, CacheKind):
            return [kind]
        if kind == ALL_KINDS:
            return list(CacheKind)
        try:
            return [CacheKind(kind)]
        except ValueError:
            allowed = ", ".join([ALL_KINDS] + [k.value for k in CacheKind])
            raise ValidationError(
                f"Invalid cache kind: {kind}",
                {"field": "kind", "value": str(kind), "errors": [f"must be one of: {allowed}"]},
            ) from None

    @staticmethod
    def _copy_in(value: Any) -> Any:
        # Lists of frozen models are stored as tuples; articles are mutable and get deep copies.
        if isinstance(value, Article):
            return value.model_copy(deep=True)
        if isinstance(value, list):
            return tuple(value)
        return value

    @staticmethod
    def _copy_out(value: Any) -> Any:
        if isinstance(value, Article):
            return value.model_copy(deep=True)
        if isinstance(value, tuple):
            return list(value)
        return value
