"""Per-function argument history and result store."""

from .history import ArgumentHistory
from .results import ResultStore

__all__ = ["ArgumentHistory", "ResultStore"]
