"""
Related-product recommendations.

Ranks the other products of a catalog by category affinity with a focal
product, then by how close their article numbers are.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import math
import re
import structlog

from config import settings
from models.product import CanonicalField, ProductRecord
from utils.text_utils import normalize_search_text

logger = structlog.get_logger(__name__)

IDENTIFIER = CanonicalField.IDENTIFIER.value
PARENT_CATEGORY = CanonicalField.PARENT_CATEGORY.value
SUB_CATEGORY = CanonicalField.SUB_CATEGORY.value

# Distance for identifiers that are not numeric; ranks below every real distance
MAX_DISTANCE = math.inf

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RelatedProduct:
    """A candidate with the keys it was ranked by."""
    position: int
    product: ProductRecord
    category_score: int
    identifier_distance: float


def parse_identifier(value: Optional[str]) -> Optional[int]:
    """
    Leading integer of an article number.

    - "1042" → 1042
    - " 1042-B" → 1042
    - "AB-12" → None
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def category_score(focal: ProductRecord, candidate: ProductRecord) -> int:
    """
    2 if parent and sub category both match, 1 if only parent matches, else 0.

    Categories are compared after search normalization.
    """
    if normalize_search_text(candidate.get(PARENT_CATEGORY)) != normalize_search_text(focal.get(PARENT_CATEGORY)):
        return 0
    if normalize_search_text(candidate.get(SUB_CATEGORY)) == normalize_search_text(focal.get(SUB_CATEGORY)):
        return 2
    return 1


def identifier_distance(focal_id: Optional[int], candidate: ProductRecord) -> float:
    """Absolute difference of numeric identifiers, MAX_DISTANCE if either is not numeric."""
    candidate_id = parse_identifier(candidate.get(IDENTIFIER))
    if focal_id is None or candidate_id is None:
        return MAX_DISTANCE
    return abs(focal_id - candidate_id)


def _focal_position(focal: ProductRecord, products: Sequence[ProductRecord]) -> Optional[int]:
    """Position of the focal product: same object first, else first equal record."""
    for position, product in enumerate(products):
        if product is focal:
            return position
    for position, product in enumerate(products):
        if product == focal:
            return position
    return None


def rank_related(
    focal: ProductRecord,
    products: Sequence[ProductRecord],
    limit: Optional[int] = None,
    focal_position: Optional[int] = None,
) -> list[RelatedProduct]:
    """
    Rank products related to a focal product.

    The focal product and products with a blank identifier are excluded.
    Order: category score descending, identifier distance ascending, then
    upload order.

    Args:
        focal: Product being viewed
        products: Full catalog, in upload order
        limit: Maximum results (defaults to settings)
        focal_position: Position of the focal product when known; looked up
                        by identity, then equality, otherwise

    Returns:
        At most `limit` RelatedProduct entries
    """
    if limit is None:
        limit = settings.recommendation_limit
    if focal_position is None:
        focal_position = _focal_position(focal, products)

    focal_id = parse_identifier(focal.get(IDENTIFIER))

    candidates = [
        RelatedProduct(
            position=position,
            product=product,
            category_score=category_score(focal, product),
            identifier_distance=identifier_distance(focal_id, product),
        )
        for position, product in enumerate(products)
        if position != focal_position and (product.get(IDENTIFIER) or "").strip()
    ]

    candidates.sort(key=lambda c: (-c.category_score, c.identifier_distance, c.position))
    related = candidates[:max(limit, 0)]

    logger.debug(
        "related_products_ranked",
        focal_position=focal_position,
        candidates=len(candidates),
        returned=len(related)
    )

    return related


def get_related_products(
    focal: ProductRecord,
    products: Sequence[ProductRecord],
    limit: Optional[int] = None,
) -> list[ProductRecord]:
    """Related products only, without ranking keys."""
    return [c.product for c in rank_related(focal, products, limit)]
