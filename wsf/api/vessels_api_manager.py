"""
Vessels API manager for fetching vessel data from the WSF API.

This module handles all communication with the WSF Vessels API, which
includes vessel attributes, locations, and other vessel-specific data.
For the corresponding REST API documentation, see
http://www.wsdot.wa.gov/ferries/api/vessels/documentation/rest.html
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiohttp

from ..managers.config_manager import APIConfig, ConfigData
from ..models.vessel_data import VesselDataError, VesselLocation, parse_vessel_locations

logger = logging.getLogger(__name__)


class VesselAPIException(Exception):
    """Base exception for WSF API-related errors."""

    pass


class VesselNetworkException(VesselAPIException):
    """Exception for network-related errors."""

    pass


class VesselStatusException(VesselAPIException):
    """Exception for non-OK HTTP responses."""

    def __init__(self, status_code: int):
        super().__init__(
            f"Non-OK status code of {status_code} returned by endpoint"
        )
        self.status_code = status_code


class VesselDataException(VesselAPIException):
    """Exception for response body processing errors."""

    pass


@dataclass
class APIResponse:
    """Container for an API response; data is the decoded JSON of a 200 body."""

    status_code: int
    data: Any
    timestamp: datetime
    url: str
    body: str = ""


class HTTPClient(ABC):
    """Abstract HTTP client interface for dependency injection."""

    @abstractmethod
    async def get(
        self, url: str, params: Dict[str, str], headers: Dict[str, str]
    ) -> APIResponse:
        """Make HTTP GET request."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close HTTP client."""
        pass


class AioHttpClient(HTTPClient):
    """Concrete HTTP client implementation using aiohttp."""

    def __init__(self, timeout_seconds: int = 10):
        """Initialize HTTP client with timeout."""
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def get(
        self, url: str, params: Dict[str, str], headers: Dict[str, str]
    ) -> APIResponse:
        """Make HTTP GET request."""
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params, headers=headers) as response:
                data = None
                body = ""
                if response.status == 200:
                    try:
                        data = await response.json(content_type=None)
                    except json.JSONDecodeError as e:
                        raise VesselDataException(
                            f"Invalid JSON returned by endpoint: {e}"
                        ) from e
                else:
                    body = await response.text()
                return APIResponse(
                    status_code=response.status,
                    data=data,
                    timestamp=datetime.now(),
                    url=str(response.url),
                    body=body,
                )
        except aiohttp.ClientError as e:
            raise VesselNetworkException(f"Network error: {e}") from e
        except asyncio.TimeoutError as e:
            raise VesselNetworkException("Request timed out") from e

    async def close(self) -> None:
        """Close HTTP client."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP client session closed")
        self._session = None


class VesselDataSource(ABC):
    """Abstract source of vessel location data."""

    @abstractmethod
    async def fetch_vessel_locations(self) -> List[VesselLocation]:
        """Fetch the location of every tracked vessel."""
        pass


class VesselsService(VesselDataSource):
    """
    WSF Vessels API data source.

    Only responsible for Vessels API communication and data parsing.
    """

    VESSEL_LOCATIONS_PATH = "Vessels/rest/vessellocations"

    def __init__(self, http_client: HTTPClient, config: APIConfig):
        """Initialize with HTTP client and API configuration."""
        self._http_client = http_client
        self._config = config

    async def fetch_vessel_locations(self) -> List[VesselLocation]:
        """
        Fetch every tracked vessel's location data.

        This is updated frequently on the endpoint.

        Returns:
            List[VesselLocation]: One record per vessel

        Raises:
            VesselAPIException: For transport, status and payload errors
            MalformedTimestamp: If a record carries an undecodable date
        """
        payload = await self._get_json(self.VESSEL_LOCATIONS_PATH)

        try:
            locations = parse_vessel_locations(payload)
        except VesselDataError as e:
            logger.error(f"Failed to parse vessel locations: {e}")
            raise VesselDataException(f"Vessel data parsing failed: {e}") from e

        logger.info(f"Fetched {len(locations)} vessel locations")
        return locations

    def _build_url(self, path: str) -> str:
        """Build an endpoint URL below the configured base URL."""
        return f"{self._config.base_url}{path}"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
        }

    async def _get_json(self, path: str) -> Any:
        """
        GET an endpoint and decode its JSON body.

        Args:
            path: Endpoint path relative to the base URL

        Returns:
            Any: Decoded JSON body
        """
        url = self._build_url(path)
        params = {"apiaccesscode": self._config.access_code}

        logger.debug(f"Requesting {url}")
        response = await self._http_client.get(url, params, self._build_headers())

        if response.status_code != 200:
            logger.error(
                f"{url} returned status {response.status_code}: {response.body[:200]}"
            )
            raise VesselStatusException(response.status_code)

        return response.data


class WSFClient:
    """
    Manages communication with the WSF API.

    Composes the configured HTTP transport with the per-API services.
    """

    def __init__(self, config: APIConfig, http_client: Optional[HTTPClient] = None):
        """
        Initialize the client.

        Args:
            config: API configuration (base URL, access code, user agent)
            http_client: HTTP transport; defaults to an aiohttp client
        """
        self.config = config
        self._http_client = http_client or AioHttpClient(
            timeout_seconds=config.timeout_seconds
        )
        self.vessels = VesselsService(self._http_client, config)
        logger.debug(f"WSFClient initialized for {config.base_url}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def fetch_vessel_locations(self) -> List[VesselLocation]:
        """Fetch every tracked vessel's location data."""
        return await self.vessels.fetch_vessel_locations()

    async def close(self) -> None:
        """Close the underlying HTTP transport."""
        await self._http_client.close()


class WSFClientFactory:
    """Factory for creating WSF clients."""

    @staticmethod
    def create_client(
        config: ConfigData, http_client: Optional[HTTPClient] = None
    ) -> WSFClient:
        """Create a client from the loaded configuration."""
        return WSFClient(config.api, http_client=http_client)

    @staticmethod
    def create_from_access_code(access_code: str, **kwargs) -> WSFClient:
        """Create a client with default settings and the given access code."""
        return WSFClient(APIConfig(access_code=access_code, **kwargs))
