"""
Storage layer exports.
"""

from jptag.scraping.storage.base import RowSink
from jptag.scraping.storage.csv_storage import CSVRowSink, default_output_name

__all__ = ["CSVRowSink", "RowSink", "default_output_name"]
