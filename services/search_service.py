"""
Search and ranking engine.

Scores products against a free-text query. Each query token must hit at
least one of four fields (identifier, sub category, parent category, name);
which field counts most depends on whether the query looks like an article
number or a name.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import re
import structlog

from config import settings
from models.product import CanonicalField, ProductRecord, QueryMode
from utils.text_utils import normalize_search_text

logger = structlog.get_logger(__name__)


# Priority tables: first matching field wins, scores are not summed across fields
SCORE_TABLES: dict[QueryMode, tuple[tuple[str, int], ...]] = {
    QueryMode.IDENTIFIER: (
        (CanonicalField.IDENTIFIER.value, 100),
        (CanonicalField.SUB_CATEGORY.value, 90),
        (CanonicalField.PARENT_CATEGORY.value, 80),
        (CanonicalField.NAME.value, 70),
    ),
    QueryMode.NAME: (
        (CanonicalField.SUB_CATEGORY.value, 100),
        (CanonicalField.PARENT_CATEGORY.value, 90),
        (CanonicalField.IDENTIFIER.value, 80),
        (CanonicalField.NAME.value, 70),
    ),
}

SEARCH_FIELDS: tuple[str, ...] = tuple(name for name, _ in SCORE_TABLES[QueryMode.NAME])

_HAS_DIGIT = re.compile(r"\d")
_SINGLE_TOKEN = re.compile(r"[\w-]+")


@dataclass(frozen=True)
class SearchResult:
    """A product and its score for one query. The record itself is untouched."""
    position: int
    product: ProductRecord
    score: int


def classify_query(query: str, max_length: Optional[int] = None) -> QueryMode:
    """
    Decide whether a query looks like an identifier or a name.

    Identifier-like: contains a digit, or is one token of word characters
    and hyphens shorter than max_length.

    Args:
        query: Raw query as typed
        max_length: Token length threshold (defaults to settings)

    Returns:
        QueryMode.IDENTIFIER or QueryMode.NAME
    """
    if max_length is None:
        max_length = settings.search_identifier_max_length

    query = query.strip()
    if _HAS_DIGIT.search(query):
        return QueryMode.IDENTIFIER
    if _SINGLE_TOKEN.fullmatch(query) and len(query) < max_length:
        return QueryMode.IDENTIFIER
    return QueryMode.NAME


def tokenize_query(query: str) -> list[str]:
    """Normalized query tokens."""
    return normalize_search_text(query).split()


def searchable_fields(product: ProductRecord) -> dict[str, str]:
    """Normalized values of the fields a query is matched against."""
    return {name: normalize_search_text(product.get(name)) for name in SEARCH_FIELDS}


def score_token(token: str, fields: dict[str, str], mode: QueryMode) -> int:
    """
    Score one normalized token against normalized fields.

    Returns the score of the highest-priority field containing the token,
    or 0 if no field contains it.
    """
    for name, score in SCORE_TABLES[mode]:
        if token in fields.get(name, ""):
            return score
    return 0


def score_product(tokens: Sequence[str], product: ProductRecord, mode: QueryMode) -> int:
    """
    Total score of a product for all tokens.

    Every token must match; a single miss makes the whole product score 0.
    """
    fields = searchable_fields(product)
    total = 0
    for token in tokens:
        score = score_token(token, fields, mode)
        if score == 0:
            return 0
        total += score
    return total


def search_products(
    products: Sequence[ProductRecord],
    query: str,
    max_length: Optional[int] = None,
) -> list[SearchResult]:
    """
    Rank products for a query.

    An empty query (or one with no letters or digits) returns every product
    in upload order with score 0. Otherwise only products matching every
    token are returned, highest score first; equal scores keep upload order.

    Args:
        products: Current catalog, in upload order
        query: Raw query as typed
        max_length: Identifier token length threshold (defaults to settings)

    Returns:
        List of SearchResult
    """
    tokens = tokenize_query(query or "")
    if not tokens:
        return [SearchResult(position=i, product=p, score=0) for i, p in enumerate(products)]

    mode = classify_query(query, max_length)

    results = []
    for position, product in enumerate(products):
        score = score_product(tokens, product, mode)
        if score > 0:
            results.append(SearchResult(position=position, product=product, score=score))

    # sorted() is stable, so ties keep upload order
    results = sorted(results, key=lambda r: r.score, reverse=True)

    logger.debug(
        "search_completed",
        mode=mode.value,
        token_count=len(tokens),
        scanned=len(products),
        matched=len(results)
    )

    return results


def sort_by_category(results: Sequence[SearchResult]) -> list[SearchResult]:
    """
    Grid order for browsing: sub category, then parent category.

    Case-insensitive, stable within a category.
    """
    def _key(result: SearchResult) -> tuple[str, str]:
        product = result.product
        return (
            (product.get(CanonicalField.SUB_CATEGORY.value) or "").lower(),
            (product.get(CanonicalField.PARENT_CATEGORY.value) or "").lower(),
        )

    return sorted(results, key=_key)
