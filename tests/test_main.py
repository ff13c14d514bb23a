"""Tests for the command line interface."""

import io
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

from rich.console import Console

from sentiary_sync.errors import TransportError
from sentiary_sync.main import main
from sentiary_sync.models.project import ProjectInfo, save_project_info

CONFIG_YAML = """\
base_url: https://sentiary.test
project_id: proj_1
outputs:
  json:
    format: json
    output_dir: out
"""

ENV = {"SENTIARY_PROJECT_API_KEY": "secret"}

INFO = ProjectInfo(
    id="proj_1",
    name="Demo",
    languages=("en-US", "de-DE"),
    terms_last_modified=datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc),
)


def _write_config(tmpdir: str) -> Path:
    config_path = Path(tmpdir) / "sentiary.yaml"
    config_path.write_text(CONFIG_YAML)
    return config_path


def _mock_client(client: MagicMock) -> MagicMock:
    client_cls = MagicMock()
    client_cls.return_value.__enter__.return_value = client
    return client_cls


class TestMain:
    """Tests for the sentiary-sync CLI."""

    def test_no_command(self) -> None:
        assert main([]) == 1

    def test_missing_config(self) -> None:
        assert main(["--config", "/nonexistent/sentiary.yaml", "status"]) == 1

    def test_status_without_project_info(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)

            assert main(["--config", str(config_path), "status"]) == 0

    def test_status_with_project_info(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            save_project_info(Path(tmpdir) / "build" / "sentiary" / "project-info.json", INFO)

            assert main(["--config", str(config_path), "status"]) == 0

    def test_sync(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            client = MagicMock()
            client.get_project_info.return_value = INFO
            client.fetch_localization.side_effect = lambda language, fmt, output_file: output_file.write_text("{}")

            with patch.dict(os.environ, ENV, clear=True):
                with patch("sentiary_sync.main.SentiaryClient", _mock_client(client)):
                    result = main(["--config", str(config_path), "sync"])

            assert result == 0
            assert (Path(tmpdir) / "out" / "values" / "strings.json").exists()
            assert (Path(tmpdir) / "out" / "values-de-DE" / "strings.json").exists()
            assert (Path(tmpdir) / "build" / "sentiary" / "last-modified").exists()

    def test_sync_up_to_date_reported_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            client = MagicMock()
            client.get_project_info.return_value = INFO
            client.fetch_localization.side_effect = lambda language, fmt, output_file: output_file.write_text("{}")
            output = io.StringIO()

            with patch.dict(os.environ, ENV, clear=True):
                with patch("sentiary_sync.main.SentiaryClient", _mock_client(client)):
                    assert main(["--config", str(config_path), "sync"]) == 0
                    with patch("sentiary_sync.main.console", Console(file=output, width=200)):
                        assert main(["--config", str(config_path), "sync"]) == 0

            assert output.getvalue().count("Localizations are up to date") == 1
            assert "Localizations updated" not in output.getvalue()

    def test_sync_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            client = MagicMock()
            client.get_project_info.side_effect = TransportError("API error 403: forbidden", 403)

            with patch.dict(os.environ, ENV, clear=True):
                with patch("sentiary_sync.main.SentiaryClient", _mock_client(client)):
                    assert main(["--config", str(config_path), "sync"]) == 1

    def test_sync_missing_api_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)

            with patch.dict(os.environ, {}, clear=True):
                with patch("sentiary_sync.core.auth.load_dotenv"):
                    assert main(["--config", str(config_path), "sync"]) == 1

    def test_info_save(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            client = MagicMock()
            client.get_project_info.return_value = INFO

            with patch.dict(os.environ, ENV, clear=True):
                with patch("sentiary_sync.main.SentiaryClient", _mock_client(client)):
                    assert main(["--config", str(config_path), "info", "--save"]) == 0

            saved = Path(tmpdir) / "build" / "sentiary" / "project-info.json"
            assert saved.exists()

    def test_verify_auth(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = _write_config(tmpdir)
            client = MagicMock()
            client.verify_connection.return_value = True

            with patch.dict(os.environ, ENV, clear=True):
                with patch("sentiary_sync.main.SentiaryClient", _mock_client(client)):
                    assert main(["--config", str(config_path), "verify-auth"]) == 0
