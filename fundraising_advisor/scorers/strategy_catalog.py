"""Strategy Catalog: the static list of fundraising strategies.

Loads data/strategies.yaml once, validates it, and serves immutable Strategy
records. The catalog is read-only after load, so one instance can be shared
by any number of concurrent engine runs.

Usage:
    from fundraising_advisor.scorers.strategy_catalog import get_strategy, list_strategies

    csr = get_strategy("csr")
    # csr.donor_category == DonorCategory.CORPORATE
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

import yaml
from pydantic import ValidationError

from fundraising_advisor.config import get_data_dir
from fundraising_advisor.schemas.enums import DonorCategory
from fundraising_advisor.schemas.strategy import Strategy

logger = logging.getLogger(__name__)

CATALOG_FILENAME = "strategies.yaml"


class StrategyCatalog:
    """Ordered, id-indexed collection of strategies.

    Catalog order is significant: rule gap-filling walks strategies in this
    order.
    """

    def __init__(self, strategies: list[Strategy]):
        _validate_catalog(strategies)
        self._strategies = tuple(strategies)
        self._by_id = {s.id: s for s in strategies}

    def get(self, strategy_id: str) -> Optional[Strategy]:
        return self._by_id.get(strategy_id)

    def __getitem__(self, strategy_id: str) -> Strategy:
        strategy = self._by_id.get(strategy_id)
        if strategy is None:
            raise KeyError(f"Unknown strategy id: {strategy_id}")
        return strategy

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._by_id

    def __iter__(self) -> Iterator[Strategy]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    @property
    def ids(self) -> list[str]:
        return [s.id for s in self._strategies]

    def by_donor_category(self) -> dict[DonorCategory, list[Strategy]]:
        """Strategies grouped by donor category; every category is present."""
        grouped: dict[DonorCategory, list[Strategy]] = {c: [] for c in DonorCategory}
        for strategy in self._strategies:
            grouped[strategy.donor_category].append(strategy)
        return grouped


def _validate_catalog(strategies: list[Strategy]) -> None:
    """Validate ids are unique and similar-strategy references resolve."""
    seen: set[str] = set()
    for strategy in strategies:
        if strategy.id in seen:
            raise ValueError(f"Duplicate strategy id in catalog: {strategy.id}")
        seen.add(strategy.id)

    for strategy in strategies:
        unknown = set(strategy.similar_strategies) - seen
        if unknown:
            raise ValueError(f"Strategy {strategy.id} lists unknown similar strategies: {sorted(unknown)}")
        if strategy.id in strategy.similar_strategies:
            raise ValueError(f"Strategy {strategy.id} lists itself as similar")


def load_catalog_file(path: Path) -> StrategyCatalog:
    """Parse and validate a catalog YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    entries = raw.get("strategies")
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"Catalog {path} has no 'strategies' list")

    strategies = []
    for index, entry in enumerate(entries):
        try:
            strategies.append(Strategy.model_validate(entry))
        except ValidationError as e:
            strategy_id = entry.get("id", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            raise ValueError(f"Invalid strategy {strategy_id} in {path}: {e}") from e

    return StrategyCatalog(strategies)


# Module-level cache, keyed by data directory
_catalog_cache: dict[Path, StrategyCatalog] = {}


def load_catalog(data_dir: Optional[Path] = None) -> StrategyCatalog:
    """Load and cache the catalog from a data directory (default: packaged data)."""
    data_dir = Path(data_dir) if data_dir is not None else get_data_dir()
    cached = _catalog_cache.get(data_dir)
    if cached is not None:
        return cached

    path = data_dir / CATALOG_FILENAME
    if not path.exists():
        raise FileNotFoundError(f"Strategy catalog not found at {path}")

    catalog = load_catalog_file(path)
    _catalog_cache[data_dir] = catalog
    logger.info(f"Loaded {len(catalog)} strategies from {path}")
    return catalog


def get_strategy(strategy_id: str) -> Optional[Strategy]:
    """Look up a strategy in the default catalog; None for unknown ids."""
    return load_catalog().get(strategy_id)


def list_strategies() -> list[Strategy]:
    """All strategies of the default catalog, in catalog order."""
    return list(load_catalog())


def strategies_by_donor_category() -> dict[DonorCategory, list[Strategy]]:
    return load_catalog().by_donor_category()


def clear_cache():
    """Clear the catalog cache (useful for testing)."""
    _catalog_cache.clear()
