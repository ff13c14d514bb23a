"""API key authentication for the Sentiary API."""

import os

from dotenv import load_dotenv

from ..errors import ConfigurationError

DEFAULT_REQUEST_TIMEOUT_MILLIS = 100_000


class SentiaryAuth:
    """Holds Sentiary project credentials and builds request headers."""

    def __init__(
        self,
        project_id: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        request_timeout_millis: int | None = None,
    ) -> None:
        """Initialize authentication with credentials.

        Args:
            project_id: Sentiary project ID (or load from SENTIARY_PROJECT_ID env)
            api_key: Project API key (or load from SENTIARY_PROJECT_API_KEY env)
            base_url: Sentiary base URL (or load from SENTIARY_URL env)
            request_timeout_millis: Request timeout (or load from
                SENTIARY_REQUEST_TIMEOUT_MILLIS env, default 100000)
        """
        load_dotenv()

        self.project_id = project_id or os.getenv("SENTIARY_PROJECT_ID", "")
        self.api_key = api_key or os.getenv("SENTIARY_PROJECT_API_KEY", "")
        self.base_url = (base_url or os.getenv("SENTIARY_URL", "")).rstrip("/")

        timeout = request_timeout_millis or os.getenv("SENTIARY_REQUEST_TIMEOUT_MILLIS")
        try:
            self.request_timeout_millis = int(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT_MILLIS
        except ValueError as e:
            raise ConfigurationError(f"Invalid request timeout: {timeout!r}") from e

        if not self.project_id or not self.api_key:
            raise ConfigurationError(
                "Sentiary projectId and projectApiKey must be set. Set SENTIARY_PROJECT_ID and "
                "SENTIARY_PROJECT_API_KEY environment variables or pass them directly."
            )
        if not self.base_url:
            raise ConfigurationError(
                "Missing Sentiary base URL. Set SENTIARY_URL or 'base_url' in the config file."
            )

    @property
    def timeout(self) -> float:
        """Request timeout in seconds, as expected by requests."""
        return self.request_timeout_millis / 1000

    def get_headers(self) -> dict[str, str]:
        """Generate authentication headers for an API request."""
        return {
            "Authorization": f"Ribbon {self.api_key}",
            "Accept": "application/json",
        }

    def get_full_url(self, path: str) -> str:
        """Build full URL from base URL and path."""
        return f"{self.base_url}{path}"

    def verify_credentials(self) -> bool:
        """Verify that credentials are set (does not test API connectivity)."""
        return bool(self.project_id and self.api_key and self.base_url)
