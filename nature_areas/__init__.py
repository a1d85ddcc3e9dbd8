"""Swedish protected nature areas (NVR, Natura 2000, Ramsar) served in WGS84."""

__version__ = "1.0.0"
