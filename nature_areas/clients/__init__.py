from .base_client import BaseAreaClient
from .http_client import UpstreamHttpClient
from .n2000_client import N2000Client
from .nvv_client import NVVClient
from .ramsar_client import RamsarClient

__all__ = ["BaseAreaClient", "UpstreamHttpClient", "N2000Client", "NVVClient", "RamsarClient"]
