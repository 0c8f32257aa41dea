"""
Test data factories.

Uses factory pattern to generate consistent catalog rows.
"""

from typing import Optional

from models.product import CanonicalField, PRODUCT_FIELDS, empty_record


class ProductFactory:
    """
    Factory for creating canonical product records.

    Usage:
        # Create with defaults
        product = ProductFactory.create()

        # Create with overrides (keyword → CanonicalField member name)
        product = ProductFactory.create(identifier="1042", sub_category="Stolar")

        # Create multiple
        products = ProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        name: Optional[str] = None,
        identifier: Optional[str] = None,
        parent_category: str = "Möbler",
        sub_category: str = "Stolar",
        **fields: str
    ) -> dict:
        """
        Create a single full product record.

        Args:
            name: Product name (auto-generated if not provided)
            identifier: Article number (auto-generated if not provided)
            parent_category: Kategori (parent)
            sub_category: Kategori (sub)
            **fields: Any other CanonicalField, by lower-case member name

        Returns:
            Dict with every canonical column title
        """
        counter = cls._next_counter()
        record = empty_record()
        record[CanonicalField.NAME.value] = name if name is not None else f"Produkt {counter}"
        record[CanonicalField.IDENTIFIER.value] = (
            identifier if identifier is not None else str(10000 + counter)
        )
        record[CanonicalField.PARENT_CATEGORY.value] = parent_category
        record[CanonicalField.SUB_CATEGORY.value] = sub_category
        for key, value in fields.items():
            record[CanonicalField[key.upper()].value] = value
        return record

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple products."""
        return [cls.create(**overrides) for _ in range(count)]


class RowFactory:
    """
    Factory for raw spreadsheet rows (header → cell) as a decoder emits them.
    """

    @staticmethod
    def from_record(record: dict, headers: Optional[dict[str, str]] = None) -> dict:
        """
        Raw row for a record, optionally renaming columns.

        Args:
            record: Canonical record
            headers: Column title → raw header to use instead
        """
        headers = headers or {}
        return {headers.get(f, f): record[f] for f in PRODUCT_FIELDS}

    @staticmethod
    def minimal(name: str, identifier: str) -> dict:
        """Row with only name and article number columns."""
        return {"Namn": name, "Artikelnummer": identifier}
