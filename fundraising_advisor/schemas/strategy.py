"""Strategy catalog schema.

A Strategy is an immutable catalog record: identity, donor category,
suitability constraints and 1-5 scoring criteria. Records are validated once
when the YAML catalog is loaded and are never mutated afterwards.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fundraising_advisor.constants import DEFAULT_CRITERION_VALUE
from fundraising_advisor.schemas.enums import DonorCategory, MaturityStage, SizeClass

CRITERION_NAMES = (
    "macroTrends",
    "targetAudience",
    "fundingScale",
    "fundingTimeline",
    "implementationFeasibility",
    "resourceRequirements",
    "networkLeverage",
    "executionRisk",
    "scalabilityPotential",
    "donorEngagement",
    "missionAlignment",
    "complianceRequirements",
)


def _criterion(description: str):
    return Field(None, ge=1, le=5, description=description)


class ScoringCriteria(BaseModel):
    """Named 1-5 ratings describing a strategy.

    Field names follow the catalog keys (camelCase) so that the YAML and the
    presentation snapshot share one vocabulary. Not every strategy rates every
    criterion; lookups through get() fall back to the neutral value 3.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    macroTrends: Optional[int] = _criterion("Fit with current giving trends")
    targetAudience: Optional[int] = _criterion("Breadth of reachable donor audience")
    fundingScale: Optional[int] = _criterion("Typical size of funds raised")
    fundingTimeline: Optional[int] = _criterion("Speed to first funds (5 = fastest)")
    implementationFeasibility: Optional[int] = _criterion("Ease of getting started")
    resourceRequirements: Optional[int] = _criterion("Staff, money and tooling needed")
    networkLeverage: Optional[int] = _criterion("Dependence on existing relationships")
    executionRisk: Optional[int] = _criterion("Likelihood of execution failure")
    scalabilityPotential: Optional[int] = _criterion("Room to grow the channel")
    donorEngagement: Optional[int] = _criterion("Depth of donor relationship")
    missionAlignment: Optional[int] = _criterion("Typical fit with mission-driven giving")
    complianceRequirements: Optional[int] = _criterion("Regulatory burden (1 = heaviest)")

    def get(self, name: str, default: int = DEFAULT_CRITERION_VALUE) -> int:
        """Rating for a criterion, or default when the strategy does not rate it."""
        value = getattr(self, name, None)
        return default if value is None else value

    def snapshot(self) -> dict[str, int]:
        """Rated criteria only, for presentation."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class SuitabilityConstraints(BaseModel):
    """Which organisations a strategy is meant for."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    maturity: frozenset[MaturityStage] = Field(description="Eligible maturity stages")
    size: frozenset[SizeClass] = Field(description="Eligible size classes")
    registration_types: Optional[frozenset[str]] = Field(
        None, description="Restrict to these registration types (None = any)"
    )


class Strategy(BaseModel):
    """A named fundraising approach with fixed scoring metadata."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    donor_category: DonorCategory
    suitable_for: SuitabilityConstraints
    criteria: ScoringCriteria
    similar_strategies: tuple[str, ...] = ()

    def criterion(self, name: str, default: int = DEFAULT_CRITERION_VALUE) -> int:
        return self.criteria.get(name, default)
