"""
jptag/domain package marker.
"""

from jptag.domain.cattle_lookup import CrawlSummary, TagOutcome, TagState

__all__ = [
    "CrawlSummary",
    "TagOutcome",
    "TagState",
]
