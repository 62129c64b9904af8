from __future__ import annotations

import posixpath
import re
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Tuple

from .exceptions import NormalizationFailed


SEPARATOR = "/"
_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """Canonicalize a path without touching the filesystem.

    Backslashes become ``/``, then ``.``/``..`` segments and repeated
    separators are resolved lexically. ``a/./b``, ``a//b`` and ``a\\b``
    all normalize to ``a/b``.
    """

    if not isinstance(path, str):
        raise NormalizationFailed(f"Expected a string path, got {type(path).__name__}")
    if not path:
        raise NormalizationFailed("Cannot normalize an empty path")
    if "\x00" in path:
        raise NormalizationFailed(f"Path contains a NUL byte: {path!r}")

    normalized = posixpath.normpath(path.replace("\\", SEPARATOR))
    # POSIX keeps a leading "//" as implementation defined; fold it.
    if normalized.startswith("//"):
        normalized = SEPARATOR + normalized.lstrip(SEPARATOR)
    return normalized


def join_segments(*segments: str) -> str:
    """Join segments with a single separator between each (pure string op)."""

    joined = SEPARATOR.join(segment for segment in segments if segment)
    return _REPEATED_SEPARATORS.sub(SEPARATOR, joined)


class PathStack:
    """Chain of directory segments from the traversal root to a vertex."""

    def __init__(self, segments: Iterable[str] = ()) -> None:
        self._segments: List[str] = list(segments)

    @contextmanager
    def pushed(self, segment: str) -> Iterator["PathStack"]:
        """Push ``segment`` for the duration of the block.

        The segment is popped on every exit, including exceptions, so the
        stack is always restored to its depth on entry.
        """

        depth = len(self._segments)
        self._segments.append(segment)
        try:
            yield self
        finally:
            del self._segments[depth:]

    def join(self, name: str) -> str:
        return join_segments(*self._segments, name)

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)
