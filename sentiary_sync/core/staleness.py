"""Deciding whether a full localization sync is needed."""

from dataclasses import dataclass

from ..models.project import ProjectInfo
from .cache import CacheMarker
from .languages import OutputLayout


class StalenessReason:
    """Why a sync is (or is not) required."""

    FORCED = "forced"
    MISSING_OUTPUT = "missing_output"
    CACHE_DISABLED = "cache_disabled"
    NO_CACHE_MARKER = "no_cache_marker"
    INVALID_CACHE_MARKER = "invalid_cache_marker"
    REMOTE_NEWER = "remote_newer"
    UP_TO_DATE = "up_to_date"


@dataclass(frozen=True)
class StalenessDecision:
    """Result of a staleness check."""

    must_sync: bool
    reason: str
    message: str


class StalenessChecker:
    """Evaluates, in a fixed order, the conditions that force a sync."""

    def __init__(self, layout: OutputLayout, marker: CacheMarker) -> None:
        self.layout = layout
        self.marker = marker

    def check(self, project_info: ProjectInfo, force_update: bool = False) -> StalenessDecision:
        """Decide whether localizations must be synced.

        The first matching condition wins:
        1. force update requested
        2. an expected output file is missing
        3. caching is disabled
        4. the cache marker does not exist (or cannot be parsed)
        5. the cache marker is older than the remote modification time

        Args:
            project_info: Remote project snapshot
            force_update: Ignore the cache and always sync

        Returns:
            StalenessDecision
        """
        if force_update:
            return StalenessDecision(True, StalenessReason.FORCED, "Force update enabled")

        missing = self.layout.missing_files()
        if missing:
            return StalenessDecision(
                True,
                StalenessReason.MISSING_OUTPUT,
                f"{len(missing)} output file(s) do not exist, e.g. {missing[0]}",
            )

        if not self.marker.enabled:
            return StalenessDecision(True, StalenessReason.CACHE_DISABLED, "Caching is not enabled")

        if not self.marker.exists():
            return StalenessDecision(True, StalenessReason.NO_CACHE_MARKER, "Cache file does not exist")

        try:
            cached = self.marker.read()
        except (ValueError, OSError) as e:
            return StalenessDecision(
                True,
                StalenessReason.INVALID_CACHE_MARKER,
                f"Cache file {self.marker.cache_file} is unreadable: {e}",
            )

        remote = project_info.terms_last_modified
        if cached is None or cached < remote:
            return StalenessDecision(
                True,
                StalenessReason.REMOTE_NEWER,
                f"Remote modified at {remote.isoformat()}, cache at {cached.isoformat() if cached else 'never'}",
            )

        return StalenessDecision(
            False,
            StalenessReason.UP_TO_DATE,
            f"Cache at {cached.isoformat()} is not older than remote {remote.isoformat()}",
        )
