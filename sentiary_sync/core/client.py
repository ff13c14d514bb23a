"""HTTP client wrapper for the Sentiary API."""

from pathlib import Path
from types import TracebackType
from typing import Any

import requests

from ..errors import TransportError
from ..models.naming import Format
from ..models.project import ProjectInfo
from .auth import SentiaryAuth

CHUNK_SIZE = 64 * 1024


class SentiaryClient:
    """HTTP client for the Sentiary batch API.

    Use as a context manager so the underlying session is always closed:

        with SentiaryClient(auth) as client:
            info = client.get_project_info()
    """

    API_PREFIX = "/api/v1/batch"

    def __init__(self, auth: SentiaryAuth | None = None) -> None:
        """Initialize client with authentication.

        Args:
            auth: SentiaryAuth instance (creates one from env if not provided)
        """
        self.auth = auth or SentiaryAuth()
        self.session = requests.Session()
        self.session.headers.update(self.auth.get_headers())

    def __enter__(self) -> "SentiaryClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP session."""
        self.session.close()

    def _project_path(self, suffix: str) -> str:
        return f"{self.API_PREFIX}/{self.auth.project_id}/{suffix}"

    def _get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        stream: bool = False,
    ) -> requests.Response:
        """Make an authenticated GET request.

        Raises:
            TransportError: On network errors or non-success status codes
        """
        url = self.auth.get_full_url(path)

        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.auth.timeout,
                stream=stream,
            )
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            error_msg = f"API error {response.status_code}: {response.text[:500]}"
            response.close()
            raise TransportError(error_msg, response.status_code, response)

        return response

    def get_project_info(self) -> ProjectInfo:
        """Fetch project metadata: name, available languages and last modification time.

        Returns:
            ProjectInfo snapshot

        Raises:
            TransportError: On API errors or a malformed response
        """
        response = self._get(self._project_path("info"))
        try:
            data: dict[str, Any] = response.json()
            return ProjectInfo.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Malformed project info response: {e}", response.status_code, response) from e

    def fetch_localization(self, language: str, fmt: Format, output_file: Path) -> None:
        """Download one language in one format and stream it to a file.

        Args:
            language: IETF BCP 47 language identifier
            fmt: Export format
            output_file: Destination file (parent directories are created)

        Raises:
            TransportError: On API or network errors
            OSError: If the destination cannot be written
        """
        params = {"languageId": language, "format": fmt.api_name}
        output_file = Path(output_file)

        with self._get(self._project_path("export"), params=params, stream=True) as response:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            try:
                with open(output_file, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            except requests.RequestException as e:
                raise TransportError(f"Download of '{language}' interrupted: {e}") from e

    def verify_connection(self) -> bool:
        """Verify API connectivity and authentication.

        Returns:
            True if connection successful

        Raises:
            TransportError: On connection or auth failure
        """
        info = self.get_project_info()
        return bool(info.id)
