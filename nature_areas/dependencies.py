"""
Dependency Injection Container for the Nature Areas Backend.

The container owns one upstream client per data source and their HTTP
connection pools. It is built at startup and closed at shutdown.
"""

import logging
from typing import Optional

import httpx

from .config import Settings
from .clients.http_client import UpstreamHttpClient
from .clients.n2000_client import N2000Client
from .clients.nvv_client import NVVClient
from .clients.ramsar_client import RamsarClient

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Dependency injection container that manages upstream client lifecycle.

    ``transport`` is handed to every HTTP client; tests pass an
    ``httpx.MockTransport`` here.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport
        self._nvv_client: Optional[NVVClient] = None
        self._n2000_client: Optional[N2000Client] = None
        self._ramsar_client: Optional[RamsarClient] = None
        logger.info("ServiceContainer initialized")

    def _http(self, api_name: str, base_url: str) -> UpstreamHttpClient:
        return UpstreamHttpClient(
            api_name, base_url, timeout=self.settings.UPSTREAM_TIMEOUT_S, transport=self.transport
        )

    @property
    def nvv_client(self) -> NVVClient:
        """Get or create the NVR client."""
        if self._nvv_client is None:
            self._nvv_client = NVVClient(
                self._http("nvr", self.settings.NVV_API_BASE),
                default_status=self.settings.DEFAULT_DECISION_STATUS,
                default_limit=self.settings.DEFAULT_LIST_LIMIT,
            )
            logger.info(f"NVVClient created for {self.settings.NVV_API_BASE}")
        return self._nvv_client

    @property
    def n2000_client(self) -> N2000Client:
        """Get or create the Natura 2000 client."""
        if self._n2000_client is None:
            self._n2000_client = N2000Client(
                self._http("natura2000", self.settings.N2000_API_BASE),
                default_limit=self.settings.DEFAULT_LIST_LIMIT,
            )
            logger.info(f"N2000Client created for {self.settings.N2000_API_BASE}")
        return self._n2000_client

    @property
    def ramsar_client(self) -> RamsarClient:
        """Get or create the Ramsar client."""
        if self._ramsar_client is None:
            self._ramsar_client = RamsarClient(
                self._http("ramsar", self.settings.RAMSAR_API_BASE),
                default_limit=self.settings.DEFAULT_LIST_LIMIT,
            )
            logger.info(f"RamsarClient created for {self.settings.RAMSAR_API_BASE}")
        return self._ramsar_client

    async def close(self):
        """Close all managed clients and their connection pools."""
        clients_to_close = [
            ("nvv_client", self._nvv_client),
            ("n2000_client", self._n2000_client),
            ("ramsar_client", self._ramsar_client),
        ]

        for client_name, client in clients_to_close:
            if client is not None:
                try:
                    await client.close()
                    logger.info(f"Closed {client_name}")
                except httpx.HTTPError as e:
                    logger.warning(f"Error closing {client_name}: {e}")

        self._nvv_client = self._n2000_client = self._ramsar_client = None
        logger.info("ServiceContainer closed all managed clients")


# Global container instance (initialized at startup)
_service_container: Optional[ServiceContainer] = None


def get_service_container() -> ServiceContainer:
    """Get the global service container instance."""
    if _service_container is None:
        raise RuntimeError("Service container not initialized. Call init_service_container() first.")
    return _service_container


def init_service_container(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> ServiceContainer:
    """Initialize the global service container."""
    global _service_container
    _service_container = ServiceContainer(settings, transport=transport)
    logger.info("Service container initialized successfully")
    return _service_container


async def close_service_container():
    """Close the global service container and clean up all resources."""
    global _service_container
    if _service_container:
        await _service_container.close()
        _service_container = None
        logger.info("Service container closed and reset")


# FastAPI dependency functions
def get_settings_cached() -> Settings:
    """Get settings from the service container to ensure consistency."""
    return get_service_container().settings


def get_nvv_client() -> NVVClient:
    """FastAPI dependency to get the NVR client."""
    return get_service_container().nvv_client


def get_n2000_client() -> N2000Client:
    """FastAPI dependency to get the Natura 2000 client."""
    return get_service_container().n2000_client


def get_ramsar_client() -> RamsarClient:
    """FastAPI dependency to get the Ramsar client."""
    return get_service_container().ramsar_client
