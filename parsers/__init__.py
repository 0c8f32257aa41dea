"""
Spreadsheet parsers module.
"""

from parsers.spreadsheet_parser import (
    parse_spreadsheet,
    file_extension,
    SUPPORTED_EXTENSIONS,
)

__all__ = [
    "parse_spreadsheet",
    "file_extension",
    "SUPPORTED_EXTENSIONS",
]
