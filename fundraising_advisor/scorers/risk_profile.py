"""
Risk profile per strategy (0-20).

The score rewards strategies whose execution risk suits the organisation's
stated tolerance, stage and size, then adjusts for strategy-specific
capabilities. Qualitative levels: >= 15 Optimal, >= 10 Acceptable, else
Cautious.
"""

from typing import Any, Callable, Mapping

from fundraising_advisor.constants import (
    MAX_RISK_SCORE,
    RISK_ACCEPTABLE_THRESHOLD,
    RISK_ALIGNMENT_BONUS,
    RISK_OPTIMAL_THRESHOLD,
)
from fundraising_advisor.parsers.answer_values import is_yes
from fundraising_advisor.schemas.enums import MaturityStage, RiskLevel, RiskTolerance, SizeClass
from fundraising_advisor.schemas.profile import NGOProfile, RiskProfile
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.utils.numbers import clamp

DIGITAL_LEANING_STRATEGIES = frozenset({"digitalFundraising", "p2p", "crowdfunding"})

LOW_EXECUTION_RISK_INSIGHT = "Low execution risk, good fit for risk-averse organizations"
HIGH_EXECUTION_RISK_INSIGHT = "Higher execution risk, requires strong risk management"


def tolerance_matches(risk_tolerance: str, execution_risk: int) -> bool:
    """Exact match between stated tolerance and a strategy's execution-risk tier."""
    return (
        (risk_tolerance == RiskTolerance.RISK_AVERSE and execution_risk <= 2)
        or (risk_tolerance == RiskTolerance.MODERATE and execution_risk == 3)
        or (risk_tolerance == RiskTolerance.RISK_SEEKING and execution_risk >= 4)
    )


def tolerance_adjacent(risk_tolerance: str, execution_risk: int) -> bool:
    """One tier away from an exact match."""
    return (
        (risk_tolerance == RiskTolerance.RISK_AVERSE and execution_risk == 3)
        or (risk_tolerance == RiskTolerance.MODERATE and execution_risk in (2, 4))
        or (risk_tolerance == RiskTolerance.RISK_SEEKING and execution_risk == 3)
    )


def risk_level(score: float) -> RiskLevel:
    if score >= RISK_OPTIMAL_THRESHOLD:
        return RiskLevel.OPTIMAL
    if score >= RISK_ACCEPTABLE_THRESHOLD:
        return RiskLevel.ACCEPTABLE
    return RiskLevel.CAUTIOUS


# =============================================================================
# Adjustment tables
# =============================================================================


def _startup(strategy: Strategy) -> int:
    adjustment = 0
    if strategy.criterion("implementationFeasibility") <= 2:
        adjustment -= 3
    if strategy.id in DIGITAL_LEANING_STRATEGIES:
        adjustment += 3
    return adjustment


MATURITY_ADJUSTMENTS: dict[MaturityStage, Callable[[Strategy], int]] = {
    MaturityStage.STARTUP: _startup,
    MaturityStage.GROWTH: lambda s: 2 if s.criterion("scalabilityPotential") >= 4 else 0,
    MaturityStage.MATURE: lambda s: 1 if s.criterion("implementationFeasibility") <= 2 else 0,
    MaturityStage.ESTABLISHED: lambda s: 2,
}

SIZE_ADJUSTMENTS: dict[SizeClass, Callable[[Strategy], int]] = {
    SizeClass.SMALL: lambda s: -2 if s.criterion("resourceRequirements") >= 4 else 0,
    SizeClass.MEDIUM: lambda s: 1 if s.criterion("resourceRequirements") >= 3 else 0,
    SizeClass.LARGE: lambda s: 2,
}


def _grants_capability(profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    ready = is_yes(answers.get("ngoGrantWriting")) and is_yes(answers.get("ngoComplianceSystem"))
    return 3 if ready else -2


def _corporate_capability(profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    ready = is_yes(answers.get("ngoCSRExperience")) and profile.networks.corporate >= 3
    return 3 if ready else -2


STRATEGY_CAPABILITY_ADJUSTMENTS: dict[str, Callable[[NGOProfile, Mapping[str, Any]], int]] = {
    "grants": _grants_capability,
    "csr": _corporate_capability,
    "employeeGiving": _corporate_capability,
}
DEFAULT_CAPABILITY_ADJUSTMENT = 1


def calculate_risk_profile(strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]) -> RiskProfile:
    """Risk profile of one strategy for this organisation."""
    execution_risk = strategy.criterion("executionRisk")
    score = 0

    if tolerance_matches(profile.risk_tolerance, execution_risk):
        score += RISK_ALIGNMENT_BONUS

    score += MATURITY_ADJUSTMENTS[profile.maturity](strategy)
    score += SIZE_ADJUSTMENTS[profile.size](strategy)

    capability = STRATEGY_CAPABILITY_ADJUSTMENTS.get(strategy.id)
    score += capability(profile, answers) if capability else DEFAULT_CAPABILITY_ADJUSTMENT

    score = int(clamp(score, 0, MAX_RISK_SCORE))

    insights = []
    if execution_risk <= 2:
        insights.append(LOW_EXECUTION_RISK_INSIGHT)
    elif execution_risk >= 4:
        insights.append(HIGH_EXECUTION_RISK_INSIGHT)

    return RiskProfile(
        score=score,
        level=risk_level(score),
        execution_risk=execution_risk,
        maturity_aligned=profile.maturity in strategy.suitable_for.maturity,
        insights=insights,
    )
