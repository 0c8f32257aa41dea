"""
Schema and header alias table.

Decides which canonical field, if any, a raw spreadsheet header refers to.
"""

from typing import Iterable, Optional
import structlog

from models.product import PRODUCT_FIELDS
from utils.text_utils import normalize_header, compact_header

logger = structlog.get_logger(__name__)


class AliasTable:
    """
    Header → canonical field lookup.

    Each field registers two alias keys: its lower-cased title and the same
    title with whitespace, hyphens and parentheses removed. On a key
    collision the field declared first keeps the key.
    """

    def __init__(self, fields: Iterable[str] = PRODUCT_FIELDS):
        self.fields: tuple[str, ...] = tuple(fields)
        self._aliases: dict[str, str] = {}

        for field in self.fields:
            for key in self._keys_for(field):
                owner = self._aliases.setdefault(key, field)
                if owner != field:
                    logger.warning(
                        "alias_collision",
                        alias=key,
                        kept=owner,
                        dropped=field
                    )

    @staticmethod
    def _keys_for(field: str) -> tuple[str, str]:
        norm = normalize_header(field)
        return norm, compact_header(norm)

    def lookup(self, header) -> Optional[str]:
        """
        Map a raw header to a canonical field.

        Args:
            header: Raw column header (non-strings are stringified)

        Returns:
            Canonical field title, or None if the header is unmapped
        """
        norm = normalize_header(header)
        field = self._aliases.get(norm)
        if field is None:
            field = self._aliases.get(compact_header(norm))
        return field

    def map_headers(self, headers: Iterable) -> dict[str, Optional[str]]:
        """Look up every header once, preserving header order."""
        return {header: self.lookup(header) for header in headers}

    @property
    def aliases(self) -> dict[str, str]:
        """Copy of the alias key → field table."""
        return dict(self._aliases)


_alias_table: Optional[AliasTable] = None


def get_alias_table() -> AliasTable:
    """Get or create the AliasTable for the canonical schema."""
    global _alias_table
    if _alias_table is None:
        _alias_table = AliasTable()
    return _alias_table
