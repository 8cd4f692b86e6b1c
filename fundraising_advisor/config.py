"""
Central configuration for the recommendation engine.

Settings come from environment variables (a .env file is honoured by the CLI):
  - FUNDRAISING_ADVISOR_CURRENCY_PER_USD (default: 75.0)
      Local currency units per US dollar. Budgets are answered in local
      currency (INR) while size thresholds are defined in USD.
  - FUNDRAISING_ADVISOR_CURRENT_YEAR (default: wall-clock year)
      Pin the year used for maturity so runs are reproducible.
  - FUNDRAISING_ADVISOR_TOP_N (default: 5)
  - FUNDRAISING_ADVISOR_DATA_DIR (default: packaged data/ directory)
      Directory containing strategies.yaml and archetypes.yaml.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from fundraising_advisor.constants import DEFAULT_LOCAL_CURRENCY_PER_USD, DEFAULT_TOP_N

ENV_PREFIX = "FUNDRAISING_ADVISOR_"


def get_data_dir() -> Path:
    """
    Get the directory holding the static YAML datasets.

    Uses FUNDRAISING_ADVISOR_DATA_DIR if set, otherwise the data/ directory
    shipped inside the package.
    """
    env_path = os.environ.get(f"{ENV_PREFIX}DATA_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path(__file__).parent / "data"


@dataclass(frozen=True)
class EngineSettings:
    """Configuration for a recommendation engine instance.

    Attributes:
        local_currency_per_usd: Conversion factor applied to answered budgets
        current_year: Year used for maturity; None means "now"
        top_n: Number of recommendations returned by default
        data_dir: Directory containing the YAML datasets
    """

    local_currency_per_usd: float = DEFAULT_LOCAL_CURRENCY_PER_USD
    current_year: Optional[int] = None
    top_n: int = DEFAULT_TOP_N
    data_dir: Path = field(default_factory=get_data_dir)

    def __post_init__(self):
        if self.local_currency_per_usd <= 0:
            raise ValueError(f"local_currency_per_usd must be positive, got {self.local_currency_per_usd}")
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")

    def resolve_year(self) -> int:
        """Year to derive maturity from."""
        if self.current_year is not None:
            return self.current_year
        return datetime.now().year


def _read_env(name: str, cast, default):
    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from e


def load_settings() -> EngineSettings:
    """Build EngineSettings from the environment."""
    return EngineSettings(
        local_currency_per_usd=_read_env("CURRENCY_PER_USD", float, DEFAULT_LOCAL_CURRENCY_PER_USD),
        current_year=_read_env("CURRENT_YEAR", int, None),
        top_n=_read_env("TOP_N", int, DEFAULT_TOP_N),
        data_dir=get_data_dir(),
    )
