"""Core sync functionality."""

from .auth import SentiaryAuth
from .cache import CacheMarker
from .client import SentiaryClient
from .graph import resolve_override_order
from .languages import OutputLayout, resolve_languages
from .staleness import StalenessChecker, StalenessDecision, StalenessReason
from .worker import SyncResult, SyncWorker

__all__ = [
    "CacheMarker",
    "OutputLayout",
    "SentiaryAuth",
    "SentiaryClient",
    "StalenessChecker",
    "StalenessDecision",
    "StalenessReason",
    "SyncResult",
    "SyncWorker",
    "resolve_languages",
    "resolve_override_order",
]
