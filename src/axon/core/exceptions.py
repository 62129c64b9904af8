"""
Custom exceptions for the AXON graph engine
"""

from typing import Optional


class AxonError(Exception):
    """Base exception for the AXON graph engine"""
    pass


class ConfigurationError(AxonError):
    """Configuration-related errors"""
    pass


class NormalizationFailed(AxonError):
    """A path could not be canonicalized"""
    pass


class DuplicateRegistration(AxonError):
    """A path was added to the index twice"""

    def __init__(self, path: str, index: int):
        super().__init__(f"Path already registered: {path} (id {index})")
        self.path = path
        self.index = index


class EdgeFileLoadFailed(AxonError):
    """An edge descriptor could not be read or parsed"""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Failed to load edge descriptor {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class CycleDetected(AxonError):
    """A vertex was reached again while it was still being expanded"""

    def __init__(self, path: str):
        super().__init__(f"Cycle detected at {path}")
        self.path = path


class TraversalDepthExceeded(AxonError):
    """The active traversal path grew past the configured limit"""

    def __init__(self, path: str, limit: int):
        super().__init__(f"Traversal depth limit {limit} exceeded at {path}")
        self.path = path
        self.limit = limit


class InvalidEdgeIndex(AxonError, IndexError):
    """An edge referenced an id outside the matrix bounds"""
    pass


class MatrixAllocationFailed(AxonError):
    """The adjacency matrix could not be allocated"""
    pass


class MatrixNotBuilt(AxonError):
    """The adjacency matrix was read before traversal finished"""
    pass


class MetadataPathNotRegistered(AxonError, KeyError):
    """No metadata file path has been recorded for a vertex"""
    pass
