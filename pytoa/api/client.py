from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx
from loguru import logger

from pytoa.config.settings import AppSettings, settings as default_settings
from pytoa.errors import (
    AuthenticationError,
    ConfigurationError,
    FieldNotFoundError,
    ShapeError,
    TransportError,
)
from pytoa.logging.setup import register_secret
from pytoa.normalization.normalizer import decode_json

if TYPE_CHECKING:
    from pytoa.models.event import Event
    from pytoa.models.team import Team


class Client:
    """The main pytoa client.

    Holds the API key and application name sent with every request, and hands
    out `Team` and `Event` accessors that share it. A client holds no open
    connections; each request opens and closes its own.
    """

    def __init__(
        self,
        api_key: str,
        application_name: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key
        register_secret(api_key)
        self._application_name = (
            application_name or default_settings.toa_application_name
        )
        self._base_url = (base_url or default_settings.toa_base_url).rstrip("/")
        self._timeout = timeout or default_settings.request_timeout
        # Injected transport is only used by tests and embedding applications
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Optional[AppSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "Client":
        """Build a client from `AppSettings` (environment or .env file)."""
        settings = settings or default_settings
        if not settings.toa_api_key:
            logger.error("TOA API key is not set in environment variables.")
            raise ConfigurationError("Missing TOA_API_KEY configuration.")
        return cls(
            api_key=settings.toa_api_key,
            application_name=settings.toa_application_name,
            base_url=settings.toa_base_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def application_name(self) -> str:
        return self._application_name

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"Client(application_name={self._application_name!r}, base_url={self._base_url!r})"

    def headers(self) -> Dict[str, str]:
        return {
            "X-TOA-Key": self._api_key,
            "X-Application-Origin": self._application_name,
            "Content-Type": "application/json",
        }

    def request(self, path: str) -> httpx.Response:
        """Send one GET request to `<base_url><path>`.

        The path is used as given. Callers put only safe values in it (integer
        team numbers, event keys returned by the API).

        Raises:
            AuthenticationError: the API rejected the key (401, 403).
            TransportError: the request failed or returned another error status.
        """
        url = f"{self._base_url}{path}"
        logger.debug(f"Making request: GET {url}")
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            ) as http:
                response = http.get(url, headers=self.headers())
        except httpx.RequestError as e:
            logger.error(f"Request error for {path}: {e}")
            raise TransportError(f"Request to {path} failed: {e}", path=path) from e

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) at {path}. Check the API key."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for {path}",
                path=path,
                status_code=response.status_code,
            )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error for {path}: {response.status_code}")
            raise TransportError(
                f"HTTP error {response.status_code} for {path}",
                path=path,
                status_code=response.status_code,
            ) from e

        logger.debug(f"Request successful: {response.status_code} for {path}")
        return response

    def get_json(self, path: str) -> Any:
        """Request `path` and decode its body as JSON."""
        return decode_json(self.request(path), path)

    def api_version(self) -> str:
        """Get the version of The Orange Alliance API."""
        path = "/"
        data = self.get_json(path)
        if not isinstance(data, dict):
            raise ShapeError(f"Expected a JSON object from {path}, got {type(data).__name__}")
        if "version" not in data:
            raise FieldNotFoundError(f"No 'version' field in response from {path}")
        return str(data["version"])

    def team(self, team_number: int) -> "Team":
        """Get a `Team` accessor for an FTC team number."""
        from pytoa.models.team import Team

        return Team(team_number=team_number, client=self)

    def event(self, event_key: str) -> "Event":
        """Get an `Event` accessor for an event key such as ``1920-CMP-HOU1``."""
        from pytoa.models.event import Event

        return Event(event_key=event_key, client=self)
