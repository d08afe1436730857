"""
Parsing layer exports.
"""

from jptag.scraping.parsing.forms import FormButton, HTMLForm, find_form, parse_form
from jptag.scraping.parsing.result_parser import (
    DEFAULT_LAYOUT,
    ResultTableLayout,
    cell_text,
    dump_cells,
    normalize_date,
    parse_result_cells,
    parse_transfers,
    text_of,
)

__all__ = [
    "DEFAULT_LAYOUT",
    "FormButton",
    "HTMLForm",
    "ResultTableLayout",
    "cell_text",
    "dump_cells",
    "find_form",
    "normalize_date",
    "parse_form",
    "parse_result_cells",
    "parse_transfers",
    "text_of",
]
