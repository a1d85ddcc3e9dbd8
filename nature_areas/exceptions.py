"""
Custom Exception Hierarchy for the Nature Areas Backend

Structured errors so the API layer can map each failure to a precise HTTP
status and the logs can tell upstream outages from bad geometry.
"""
from typing import Optional


class NatureAreasError(Exception):
    """Base exception for all nature areas service errors"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamTransportError(NatureAreasError):
    """Raised when an upstream REST call fails at the network or HTTP level"""

    status_code = 502

    def __init__(self, api_name: str, reason: str, upstream_status: Optional[int] = None):
        message = f"Upstream request to {api_name} failed: {reason}"
        if upstream_status is not None:
            message += f" (HTTP {upstream_status})"
        super().__init__(message)
        self.api_name = api_name
        self.reason = reason
        self.upstream_status = upstream_status


class UpstreamTimeoutError(UpstreamTransportError):
    """Raised when an upstream REST call exceeds its timeout"""

    status_code = 504

    def __init__(self, api_name: str, timeout_seconds: float):
        super().__init__(api_name, f"timeout after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class UpstreamNotFoundError(UpstreamTransportError):
    """Raised when the upstream service answers 404 for a resource"""

    status_code = 404

    def __init__(self, api_name: str, path: str):
        super().__init__(api_name, f"resource not found: {path}", upstream_status=404)
        self.path = path


class EmptyGeometryError(NatureAreasError):
    """Raised when a WKT string contains no coordinate pairs"""

    status_code = 502

    def __init__(self, wkt: str):
        preview = wkt if len(wkt) <= 60 else wkt[:57] + "..."
        super().__init__(f"No coordinates found in WKT string: {preview!r}")
        self.wkt = wkt


class EmptyInputError(NatureAreasError):
    """Raised when combining an empty collection of bounding boxes"""

    status_code = 400

    def __init__(self):
        super().__init__("Cannot combine empty collection of bounding boxes")


class LookupValidationError(NatureAreasError):
    """Raised when request parameters are missing or contradictory"""

    status_code = 400


class ConfigurationError(NatureAreasError):
    """Raised when service configuration is invalid"""

    def __init__(self, config_field: str, reason: str):
        super().__init__(f"Configuration error in {config_field}: {reason}")
        self.config_field = config_field
        self.reason = reason
