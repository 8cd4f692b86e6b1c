"""
Pairwise strategy similarity and synergies.

similarity(A, B) in [0, 1]:
- +0.5 same donor category
- +0.5 either strategy lists the other as similar
- up to +0.3 for close resource requirements (1 - |diff| / 4)
- up to +0.2 for close network leverage (1 - |diff| / 4)
capped at 1.0. The score is symmetric.
"""

from typing import Optional

from fundraising_advisor.constants import (
    SIMILAR_STRATEGY_THRESHOLD,
    SIMILARITY_CATEGORY_WEIGHT,
    SIMILARITY_LISTED_WEIGHT,
    SIMILARITY_NETWORK_WEIGHT,
    SIMILARITY_RESOURCE_WEIGHT,
)
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog


def similarity(a: Strategy, b: Strategy) -> float:
    score = 0.0
    if a.donor_category == b.donor_category:
        score += SIMILARITY_CATEGORY_WEIGHT
    if b.id in a.similar_strategies or a.id in b.similar_strategies:
        score += SIMILARITY_LISTED_WEIGHT

    resource_diff = abs(a.criterion("resourceRequirements") - b.criterion("resourceRequirements"))
    score += (1 - resource_diff / 4) * SIMILARITY_RESOURCE_WEIGHT

    network_diff = abs(a.criterion("networkLeverage") - b.criterion("networkLeverage"))
    score += (1 - network_diff / 4) * SIMILARITY_NETWORK_WEIGHT

    return min(1.0, score)


def calculate_similarity_score(
    strategy_a_id: str, strategy_b_id: str, catalog: Optional[StrategyCatalog] = None
) -> float:
    """Similarity of two catalog strategies by id; 0 when either id is unknown."""
    catalog = catalog or load_catalog()
    a = catalog.get(strategy_a_id)
    b = catalog.get(strategy_b_id)
    if a is None or b is None:
        return 0.0
    return similarity(a, b)


def get_synergies(primary: Strategy, secondary: Strategy) -> list[str]:
    """Shared traits that let two strategies run side by side."""
    synergies = []
    if primary.criteria.resourceRequirements == secondary.criteria.resourceRequirements:
        synergies.append("Can share resources and infrastructure")
    if primary.criteria.networkLeverage == secondary.criteria.networkLeverage:
        synergies.append("Can leverage same network connections")
    if "digital" in primary.id and "digital" in secondary.id:
        synergies.append("Can share digital infrastructure and capabilities")
    if "event" in primary.id and "event" in secondary.id:
        synergies.append("Can combine event planning and execution resources")
    if primary.criteria.complianceRequirements == secondary.criteria.complianceRequirements:
        synergies.append("Share compliance and regulatory requirements")
    if primary.donor_category == secondary.donor_category:
        synergies.append("Can leverage same donor relationships and networks")
    return synergies


def find_similar_strategies(
    strategy_id: str,
    threshold: float = SIMILAR_STRATEGY_THRESHOLD,
    catalog: Optional[StrategyCatalog] = None,
) -> list[tuple[Strategy, float]]:
    """
    Catalog neighbours of a strategy.

    Args:
        strategy_id: Strategy to compare against
        threshold: Minimum similarity to include
        catalog: Catalog to search (default: packaged catalog)

    Returns:
        (strategy, similarity) pairs sorted by descending similarity; empty
        for unknown ids
    """
    catalog = catalog or load_catalog()
    target = catalog.get(strategy_id)
    if target is None:
        return []

    scored = [(other, similarity(target, other)) for other in catalog if other.id != strategy_id]
    matches = [(s, score) for s, score in scored if score >= threshold]
    return sorted(matches, key=lambda pair: pair[1], reverse=True)
