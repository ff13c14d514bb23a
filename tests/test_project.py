"""Tests for project models."""

import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from sentiary_sync.models.project import (
    ProjectInfo,
    format_timestamp,
    load_project_info,
    parse_timestamp,
    save_project_info,
)


class TestTimestamps:
    """Tests for timestamp helpers."""

    def test_parse_z_suffix(self) -> None:
        parsed = parse_timestamp("2026-01-31T12:00:00Z")

        assert parsed == datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)

    def test_parse_naive_is_utc(self) -> None:
        parsed = parse_timestamp("2026-01-31T12:00:00\n")

        assert parsed.tzinfo is not None
        assert parsed == datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)

    def test_parse_offset(self) -> None:
        parsed = parse_timestamp("2026-01-31T14:00:00+02:00")

        assert parsed == datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)

    def test_parse_nanosecond_fraction(self) -> None:
        parsed = parse_timestamp("2026-01-31T12:00:00.123456789Z")

        assert parsed == datetime(2026, 1, 31, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def test_parse_short_fraction(self) -> None:
        parsed = parse_timestamp("2026-01-31T12:00:00.5+00:00")

        assert parsed == datetime(2026, 1, 31, 12, 0, 0, 500000, tzinfo=timezone.utc)

    def test_parse_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")

    def test_format_converts_to_utc(self) -> None:
        value = datetime(2026, 1, 31, 14, 0, tzinfo=timezone(timedelta(hours=2)))

        assert format_timestamp(value) == "2026-01-31T12:00:00Z"

    def test_format_then_parse_preserves_microseconds(self) -> None:
        value = datetime(2026, 1, 31, 12, 0, 0, 123456, tzinfo=timezone.utc)

        assert parse_timestamp(format_timestamp(value)) == value


class TestProjectInfo:
    """Tests for ProjectInfo model."""

    def test_from_dict(self) -> None:
        data = {
            "id": "proj_1",
            "name": "Demo",
            "languages": ["en-US", "de-DE", "en-US"],
            "termsLastModified": "2026-01-31T12:00:00Z",
        }

        info = ProjectInfo.from_dict(data)

        assert info.id == "proj_1"
        assert info.name == "Demo"
        assert info.languages == ("en-US", "de-DE")
        assert info.terms_last_modified == datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)

    def test_from_dict_missing_id(self) -> None:
        with pytest.raises(KeyError):
            ProjectInfo.from_dict({"name": "Demo"})

    def test_to_dict(self) -> None:
        info = ProjectInfo(
            id="proj_1",
            name="Demo",
            languages=("en-US",),
            terms_last_modified=datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc),
        )

        assert info.to_dict() == {
            "id": "proj_1",
            "name": "Demo",
            "languages": ["en-US"],
            "termsLastModified": "2026-01-31T12:00:00Z",
        }

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "build" / "project-info.json"
            info = ProjectInfo(
                id="proj_1",
                name="Demo",
                languages=("en-US", "fr-FR"),
                terms_last_modified=datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc),
            )

            save_project_info(path, info)

            assert json.loads(path.read_text())["termsLastModified"] == "2026-01-31T12:00:00Z"
            assert load_project_info(path) == info

    def test_load_missing(self) -> None:
        assert load_project_info(Path("/nonexistent/project-info.json")) is None
