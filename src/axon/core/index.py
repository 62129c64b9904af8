from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .exceptions import DuplicateRegistration, NormalizationFailed
from .paths import normalize_path

logger = logging.getLogger(__name__)


class PathIndex:
    """Bidirectional registry between normalized paths and integer ids.

    Ids are handed out densely from 0 and never reused. The id -> path side
    is a list indexed by id (``None`` marks a removed entry) and the
    path -> id side is a dict, so both directions change together.
    """

    def __init__(self) -> None:
        self._paths: List[Optional[str]] = []
        self._ids: Dict[str, int] = {}

    @property
    def next_id(self) -> int:
        return len(self._paths)

    def add(self, path: str) -> int:
        """Register ``path`` at the next id. Raises if it is already present."""

        normalized = normalize_path(path)
        existing = self._ids.get(normalized)
        if existing is not None:
            raise DuplicateRegistration(normalized, existing)
        return self._insert(normalized)

    def get_or_create(self, path: str) -> int:
        normalized = normalize_path(path)
        existing = self._ids.get(normalized)
        if existing is not None:
            return existing
        return self._insert(normalized)

    def get_index(self, path: str) -> Optional[int]:
        return self._ids.get(normalize_path(path))

    def get_path(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._paths):
            return self._paths[index]
        return None

    def remove_path(self, path: str) -> bool:
        index = self._ids.get(normalize_path(path))
        if index is None:
            return False
        return self._remove(index)

    def remove_index(self, index: int) -> bool:
        if self.get_path(index) is None:
            return False
        return self._remove(index)

    def count(self) -> int:
        """Number of live entries."""
        return len(self._ids)

    def items(self) -> Iterator[Tuple[int, str]]:
        """Live ``(id, path)`` pairs in id order."""
        for index, path in enumerate(self._paths):
            if path is not None:
                yield index, path

    def _insert(self, normalized: str) -> int:
        index = len(self._paths)
        self._paths.append(normalized)
        self._ids[normalized] = index
        logger.debug(f"Registered {normalized} as vertex {index}")
        return index

    def _remove(self, index: int) -> bool:
        path = self._paths[index]
        self._paths[index] = None
        del self._ids[path]
        logger.debug(f"Removed vertex {index} ({path})")
        return True

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return self.get_index(path) is not None
        except NormalizationFailed:
            return False
