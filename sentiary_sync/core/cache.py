"""Cache marker recording the remote modification time of the last sync."""

from datetime import datetime
from pathlib import Path
from typing import Any

from ..errors import OutputWriteError
from ..models.config import CacheConfiguration
from ..models.project import format_timestamp, parse_timestamp


class CacheMarker:
    """Reads and writes the last-modified cache file.

    The file holds a single ISO-8601 timestamp. A missing file means the
    project was never synced.
    """

    def __init__(self, config: CacheConfiguration) -> None:
        """Initialize cache marker.

        Args:
            config: Cache policy including the marker file path
        """
        self.config = config
        self.cache_file = Path(config.cache_file)

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def exists(self) -> bool:
        return self.cache_file.is_file()

    def read(self) -> datetime | None:
        """Read the stored timestamp.

        Returns:
            Parsed timestamp, or None if the file is absent

        Raises:
            ValueError: If the file content is not a timestamp
            OSError: If the file cannot be read
        """
        if not self.exists():
            return None
        return parse_timestamp(self.cache_file.read_text())

    def write(self, last_modified: datetime) -> bool:
        """Persist the remote modification time if caching is enabled.

        Returns:
            True if the marker was written

        Raises:
            OutputWriteError: If the file cannot be written
        """
        if not self.enabled:
            return False
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            self.cache_file.write_text(format_timestamp(last_modified))
        except OSError as e:
            raise OutputWriteError(self.cache_file, e) from e
        return True

    def get_status_summary(self) -> dict[str, Any]:
        """Get a summary of cache state."""
        last_sync: str | None = None
        if self.exists():
            try:
                last_sync = self.cache_file.read_text().strip()
            except OSError:
                last_sync = None
        return {
            "cache_file": str(self.cache_file),
            "enabled": self.enabled,
            "last_modified": last_sync,
        }
