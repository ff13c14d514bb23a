"""Models describing the remote project and the files exported from it."""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import OutputTarget

_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC.

    Accepts the ``Z`` suffix used by the Sentiary API.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat only takes 3 or 6 fractional digits before Python 3.11
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as sortable ISO-8601 UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ProjectInfo:
    """Snapshot of the remote project fetched at the start of a run."""

    id: str
    name: str
    languages: tuple[str, ...] = ()
    terms_last_modified: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # Ordered set: keep first occurrence only
        object.__setattr__(self, "languages", tuple(dict.fromkeys(self.languages)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using the API's field names."""
        return {
            "id": self.id,
            "name": self.name,
            "languages": list(self.languages),
            "termsLastModified": format_timestamp(self.terms_last_modified),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectInfo":
        """Create from an API response or a saved project info file."""
        last_modified = data.get("termsLastModified")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            languages=tuple(data.get("languages") or ()),
            terms_last_modified=(
                parse_timestamp(last_modified) if last_modified else datetime.now(timezone.utc)
            ),
        )


def save_project_info(path: Path, info: ProjectInfo) -> None:
    """Write project info as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(info.to_dict(), f, indent=2)
        f.write("\n")


def load_project_info(path: Path) -> ProjectInfo | None:
    """Read project info saved by ``save_project_info``, or None if absent."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path) as f:
        data = json.load(f)
    return ProjectInfo.from_dict(data)


@dataclass(frozen=True)
class LanguageConfiguration:
    """Languages that must exist on disk and the subset fetched from the API."""

    expected: frozenset[str]
    to_fetch: frozenset[str]


@dataclass(frozen=True)
class ExportedLocalization:
    """A localization file written during the current run."""

    language: str
    output_file: Path
    target: OutputTarget
