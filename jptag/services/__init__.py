"""
Service layer exports.
"""

from jptag.services.cattle_lookup_service import CattleLookupService, get_cattle_lookup_service

__all__ = ["CattleLookupService", "get_cattle_lookup_service"]
