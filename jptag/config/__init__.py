"""
Config helpers for the cattle lookup crawler.
"""

from jptag.config.loader import get_cattle_lookup_settings, load_settings, resolve_path
from jptag.config.models import (
    CattleLookupSettings,
    OutputSettings,
    PortalSettings,
    RetrySettings,
)

__all__ = [
    "CattleLookupSettings",
    "OutputSettings",
    "PortalSettings",
    "RetrySettings",
    "get_cattle_lookup_settings",
    "load_settings",
    "resolve_path",
]
