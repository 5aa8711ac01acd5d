#!/usr/bin/env python3
"""
Cache Manager - Holds the advice result for the exact inputs it was computed from
"""

import logging
from typing import Any, Optional, Tuple
from dataclasses import dataclass

from ..data.models import AdviceResult

logger = logging.getLogger(__name__)

@dataclass
class CacheEntry:
    """Cached advice and the input tuple it belongs to"""
    key: Tuple
    data: AdviceResult
    token: int

class AdviceCache:
    """Single-slot cache: an entry is only valid for its own input tuple"""

    def __init__(self):
        self._entry: Optional[CacheEntry] = None

    def set(self, key: Tuple, data: AdviceResult, token: int = 0) -> None:
        """Store advice for an input tuple, replacing any previous entry"""
        self._entry = CacheEntry(key=key, data=data, token=token)
        logger.debug(f"Cached advice '{data.category}' for request {token}")

    def get(self, key: Tuple, default: Any = None) -> Any:
        """Get advice for these inputs, or default if missing or for other inputs"""
        if self._entry is None:
            logger.debug("Advice cache miss: empty")
            return default

        if self._entry.key != key:
            logger.debug("Advice cache miss: inputs changed")
            return default

        return self._entry.data

    @property
    def current(self) -> Optional[AdviceResult]:
        """Whatever is stored, regardless of key"""
        return self._entry.data if self._entry else None

    def clear(self) -> None:
        """Drop the cached advice"""
        if self._entry is not None:
            logger.debug(f"Cleared advice from request {self._entry.token}")
        self._entry = None

