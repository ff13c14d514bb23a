"""Download localization files from Sentiary into local resource trees."""

from .errors import (
    ConfigurationError,
    CycleError,
    OutputWriteError,
    SyncError,
    TransportError,
    UnresolvedFallbackError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "CycleError",
    "OutputWriteError",
    "SyncError",
    "TransportError",
    "UnresolvedFallbackError",
    "__version__",
]
