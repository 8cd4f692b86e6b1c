"""
Eligibility gates shared by the recommenders.

Categorical gates are hard prerequisites that hold regardless of organisation
size or age. Suitability gates compare the strategy's maturity/size/
registration constraints against the profile. Each gate has a name so that
exclusions can be audited.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.strategy import Strategy


@dataclass(frozen=True)
class CategoricalGate:
    """A prerequisite that applies to specific strategies."""

    name: str
    strategy_ids: frozenset[str]
    passes: Callable[[NGOProfile], bool]
    description: str = ""


CATEGORICAL_GATES: tuple[CategoricalGate, ...] = (
    CategoricalGate(
        name="educationalRegistration",
        strategy_ids=frozenset({"endowmentFunds"}),
        passes=lambda p: p.registration_type == "educational",
        description="Endowment funds are only available for registered educational institutions",
    ),
    CategoricalGate(
        name="csr1",
        strategy_ids=frozenset({"csr"}),
        passes=lambda p: p.has_compliance("csr1"),
        description="CSR funding requires CSR-1 registration",
    ),
    CategoricalGate(
        name="fcra",
        strategy_ids=frozenset({"foreignGrants", "foreignRFPs"}),
        passes=lambda p: p.has_compliance("fcra"),
        description="Foreign contributions require FCRA registration",
    ),
)


def failed_categorical_gate(strategy: Strategy, profile: NGOProfile) -> Optional[str]:
    """Name of the first categorical gate the strategy fails, or None."""
    for gate in CATEGORICAL_GATES:
        if strategy.id in gate.strategy_ids and not gate.passes(profile):
            return gate.name
    return None


def failed_suitability(strategy: Strategy, profile: NGOProfile) -> Optional[str]:
    """Which suitability constraint the profile misses ("maturity", "size", "registrationType"), or None."""
    constraints = strategy.suitable_for
    if profile.maturity not in constraints.maturity:
        return "maturity"
    if profile.size not in constraints.size:
        return "size"
    if constraints.registration_types is not None and profile.registration_type not in constraints.registration_types:
        return "registrationType"
    return None


def check_eligibility(strategy: Strategy, profile: NGOProfile, require_suitability: bool = True) -> Optional[str]:
    """
    Run the gates for one strategy.

    Args:
        strategy: Catalog strategy
        profile: Derived NGO profile
        require_suitability: Also enforce maturity/size/registration constraints

    Returns:
        Name of the failed gate, or None when eligible
    """
    gate = failed_categorical_gate(strategy, profile)
    if gate is not None:
        return gate
    if require_suitability:
        return failed_suitability(strategy, profile)
    return None
