"""
Canonical product schema.

Column titles follow the Table.se product export. The field set is closed:
nothing is added or removed at runtime, and declared order is the export
order.
"""

from enum import Enum


class CanonicalField(str, Enum):
    """Canonical product fields, in export order."""
    NAME = "Namn"
    IDENTIFIER = "Artikelnummer"
    COLOR = "Färg"
    MATERIAL = "Material"
    SERIES = "Serie"
    PRICE_EXCL_TAX_VALUE = "Pris exkl. moms (värde)"
    PRICE_EXCL_TAX_UNIT = "Pris exkl. moms (enhet)"
    PRICE_INCL_TAX_VALUE = "Pris inkl. moms (värde)"
    PRICE_INCL_TAX_UNIT = "Pris inkl. moms (enhet)"
    LENGTH_VALUE = "Längd (värde)"
    LENGTH_UNIT = "Längd (enhet)"
    WIDTH_VALUE = "Bredd (värde)"
    WIDTH_UNIT = "Bredd (enhet)"
    HEIGHT_VALUE = "Höjd (värde)"
    HEIGHT_UNIT = "Höjd (enhet)"
    DEPTH_VALUE = "Djup (värde)"
    DEPTH_UNIT = "Djup (enhet)"
    DIAMETER_VALUE = "Diameter (värde)"
    DIAMETER_UNIT = "Diameter (enhet)"
    CAPACITY_VALUE = "Kapacitet (värde)"
    CAPACITY_UNIT = "Kapacitet (enhet)"
    VOLUME_VALUE = "Volym (värde)"
    VOLUME_UNIT = "Volym (enhet)"
    WEIGHT_VALUE = "Vikt (värde)"
    WEIGHT_UNIT = "Vikt (enhet)"
    DATA_TEXT = "Data (text)"
    PARENT_CATEGORY = "Kategori (parent)"
    SUB_CATEGORY = "Kategori (sub)"
    IMAGE_URL = "Produktbild-URL"
    PRODUCT_URL = "Produkt-URL"
    DESCRIPTION = "Beskrivning"
    EXTRA_DATA = "Extra data"


# Column titles in export order
PRODUCT_FIELDS: tuple[str, ...] = tuple(f.value for f in CanonicalField)

# A product record maps every column title in PRODUCT_FIELDS to a string.
# Identifiers are not unique; position in the catalog is the fallback identity.
ProductRecord = dict[str, str]


def empty_record() -> ProductRecord:
    """Record with every canonical field set to an empty string."""
    return {field: "" for field in PRODUCT_FIELDS}


class QueryMode(str, Enum):
    """How a search query is interpreted."""
    IDENTIFIER = "IDENTIFIER"
    NAME = "NAME"
