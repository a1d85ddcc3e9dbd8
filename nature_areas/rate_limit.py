"""Shared slowapi limiter; every public endpoint is limited per client address."""
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_settings

limiter = Limiter(key_func=get_remote_address)


def rate_limit() -> str:
    """Current limit string, e.g. '60/minute'"""
    return get_settings().RATE_LIMIT
