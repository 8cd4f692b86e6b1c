"""
Detailed strategy fit (0-100).

A composite of everything known about the organisation, evaluated per
strategy. Order of operations matters and is fixed:

1. Raw accumulation
   - network alignment  min(20, alignment * 4)
   - stage alignment    min(25, stage * 1.67)
   - resource profile   min(25, ...) when the strategy suits the size class
   - location impact
   - funding profile    scale, timeline, scalability
   - risk profile score
   - compliance burden  min(5, (6 - complianceRequirements) * 1.2)
   - macro trends       weighted 1.5 for startups
   - compliance readiness
2. x0.8 when a demanding strategy meets low compliance readiness
3. Mission alignment: + min(15, mission * 3), then reweighted to
   min(100, round(score * 0.95 + mission * 5))
4. Platform diversity (digitalFundraising), keyword alignment x3,
   beneficiary alignment x2
5. Foreign funding gating (zero without valid FCRA) and bonuses
6. Foreign funding intent multiplier (x1.2 / x0.8 / x0.5)
7. Final clamp to [0, 100], rounded half up
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from fundraising_advisor.constants import MAX_SCORE
from fundraising_advisor.parsers.answer_values import as_list, as_str, is_yes, parse_int
from fundraising_advisor.schemas.enums import DonorCategory, MaturityStage, SizeClass
from fundraising_advisor.schemas.profile import ComplianceReadiness, NGOProfile, RiskProfile
from fundraising_advisor.schemas.recommendation import StrategyFit
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.scorers.compliance_readiness import calculate_compliance_readiness
from fundraising_advisor.scorers.location_impact import calculate_location_impact, get_location_insights
from fundraising_advisor.scorers.mission_alignment import (
    analyze_mission_alignment,
    calculate_beneficiary_alignment,
    calculate_mission_alignment,
)
from fundraising_advisor.scorers.risk_profile import DIGITAL_LEANING_STRATEGIES, calculate_risk_profile
from fundraising_advisor.utils.numbers import clamp, round_half_up

MAJOR_GIVING_PLATFORMS = frozenset({"benevity", "caf", "yourcause", "globalgiving"})
PLATFORM_BONUS_PER_PLATFORM = 2.5
MAX_PLATFORM_BONUS = 10

RESOURCE_MULTIPLIERS = {SizeClass.SMALL: 2.0, SizeClass.MEDIUM: 1.5, SizeClass.LARGE: 1.2}

# Stage-specific strategy preferences
STAGE_PREFERRED_STRATEGIES: dict[MaturityStage, tuple[frozenset[str], int]] = {
    MaturityStage.STARTUP: (DIGITAL_LEANING_STRATEGIES, 5),
    MaturityStage.GROWTH: (frozenset({"csr", "hniGiving", "checkoutCharity"}), 4),
    MaturityStage.MATURE: (frozenset({"grants", "csr", "eventBased"}), 4),
    MaturityStage.ESTABLISHED: (frozenset({"endowmentFunds", "legacyGiving", "grants"}), 5),
}

FOREIGN_INTENT_MULTIPLIERS = {"yes": 1.2, "future": 0.8, "no": 0.5}
FOREIGN_CATEGORIES = frozenset({DonorCategory.FOUNDATION_FOREIGN, DonorCategory.FOUNDATION_RESTRICTED})


@dataclass
class FitAssessment:
    """Everything the fit scorer learns about one strategy."""

    fit: StrategyFit
    risk_profile: RiskProfile
    compliance: ComplianceReadiness
    foreign_funding_insights: list[str] = field(default_factory=list)


def calculate_platform_bonus(platforms: list[str]) -> float:
    """2.5 points per major giving platform in use, up to 10."""
    count = sum(1 for p in platforms if p in MAJOR_GIVING_PLATFORMS)
    return min(MAX_PLATFORM_BONUS, count * PLATFORM_BONUS_PER_PLATFORM)


# =============================================================================
# Components
# =============================================================================


def _network_score(strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]) -> float:
    if strategy.id in ("digitalFundraising", "p2p"):
        return min(
            5,
            (2 if is_yes(answers.get("ngoSocialMedia")) else 0)
            + (2 if is_yes(answers.get("ngoDonorDatabase")) else 0)
            + (1 if profile.digital_capacity >= 4 else 0),
        )
    if strategy.id in ("csr", "employeeGiving", "checkoutCharity"):
        return min(5, profile.networks.corporate * 1.2 + (1 if is_yes(answers.get("ngoCSRExperience")) else 0))
    if strategy.id in ("grants", "endowmentFunds"):
        return min(5, profile.networks.foundation * 1.2 + (1 if is_yes(answers.get("ngoGrantWriting")) else 0))
    if strategy.id in ("hniGiving", "legacyGiving"):
        relationship = parse_int(answers.get("ngoDonorRelationship"))
        if relationship >= 4:
            return 5
        return 3 if relationship >= 3 else 1
    return min(5, profile.networks.individual)


def calculate_network_alignment(strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]) -> float:
    """Network score weighted by how little the strategy leans on existing relationships."""
    weight = 6 - strategy.criterion("networkLeverage")
    return _network_score(strategy, profile, answers) * weight / 5


def calculate_stage_alignment(strategy: Strategy, profile: NGOProfile, network_alignment: float) -> float:
    bonus = 0
    if profile.maturity in strategy.suitable_for.maturity:
        bonus += 5

    preferred, points = STAGE_PREFERRED_STRATEGIES[profile.maturity]
    if strategy.id in preferred:
        bonus += points

    if profile.maturity == MaturityStage.STARTUP:
        if strategy.criterion("networkLeverage") <= 2:
            bonus += 3
        if strategy.criterion("implementationFeasibility") >= 4:
            bonus += 2
    elif profile.maturity == MaturityStage.GROWTH:
        if strategy.criterion("scalabilityPotential") >= 4:
            bonus += 4
    elif profile.maturity == MaturityStage.MATURE:
        if strategy.criterion("networkLeverage") >= 4 and network_alignment >= 4:
            bonus += 3
    elif profile.maturity == MaturityStage.ESTABLISHED:
        if strategy.criterion("fundingScale") >= 4:
            bonus += 3

    return min(15, bonus)


def calculate_resource_score(strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]) -> float:
    if profile.size not in strategy.suitable_for.size:
        return 0

    resource_req = strategy.criterion("resourceRequirements")
    score = 5 + min(7, (5 - resource_req) * RESOURCE_MULTIPLIERS[profile.size])

    has_specialized_resources = (
        (strategy.id == "grants" and is_yes(answers.get("ngoGrantWriting")))
        or (strategy.id == "csr" and is_yes(answers.get("ngoCSRExperience")))
        or (strategy.id == "digitalFundraising" and profile.digital_capacity >= 6)
    )
    if has_specialized_resources:
        score += 3

    if profile.staff_count >= 10 and resource_req >= 3:
        score += 2
    if profile.staff_count < 5 and resource_req <= 2:
        score += 2

    if profile.budget_usd >= 500_000 and resource_req >= 3:
        score += 3
    if profile.budget_usd < 100_000 and resource_req <= 2:
        score += 3

    if profile.normalized_volunteer_capacity >= 4 and resource_req <= 3:
        score += 3

    return min(25, score)


def calculate_funding_score(strategy: Strategy) -> float:
    score = min(8, strategy.criterion("fundingScale") * 1.6)
    score += min(6, strategy.criterion("fundingTimeline") * 1.2)
    if strategy.criterion("scalabilityPotential") >= 4:
        score += 6
    return score


# =============================================================================
# Insights
# =============================================================================


def compliance_insights(strategy: Strategy, compliance: ComplianceReadiness) -> list[str]:
    insights = []
    if compliance.score < 5:
        insights.append("Compliance readiness needs improvement")
    if strategy.criterion("complianceRequirements") <= 2 and not compliance.has_essentials:
        insights.append("Missing essential compliance requirements")
    if strategy.id == "csr" and not compliance.ready_for_csr:
        insights.append("CSR-1 registration required for CSR funding")
    if strategy.id == "grants" and not compliance.ready_for_fcra:
        insights.append("FCRA registration recommended for international grants")
    return insights


def foreign_funding_insights(strategy: Strategy, profile: NGOProfile) -> list[str]:
    if strategy.donor_category not in FOREIGN_CATEGORIES:
        return []
    capability = profile.foreign_funding
    insights = [f"Foreign Funding Access Level: {capability.tier.value}"]
    if not capability.has_valid_fcra and capability.processing_fcra:
        insights.append("Complete FCRA registration process to enable this strategy")
    if (
        capability.has_valid_fcra
        and not capability.has_501c
        and strategy.donor_category == DonorCategory.FOUNDATION_FOREIGN
    ):
        insights.append("Consider 501(c) registration to maximize foreign funding access")
    return insights


# =============================================================================
# Composite
# =============================================================================


def calculate_strategy_fit(strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]) -> FitAssessment:
    """
    Score one strategy against the full profile.

    Args:
        strategy: Catalog strategy
        profile: Derived NGO profile
        answers: Raw answer set (for capability flags not kept on the profile)

    Returns:
        FitAssessment with the fit breakdown, the risk profile enriched with
        location and compliance insights, the compliance readiness snapshot
        and foreign-funding insights
    """
    compliance = calculate_compliance_readiness(strategy, profile, answers)
    risk = calculate_risk_profile(strategy, profile, answers)

    network_alignment = calculate_network_alignment(strategy, profile, answers)
    stage_alignment = calculate_stage_alignment(strategy, profile, network_alignment)
    resource_score = calculate_resource_score(strategy, profile, answers)
    location_impact = calculate_location_impact(strategy, profile)
    funding_score = calculate_funding_score(strategy)

    score: float = 0
    score += min(20, network_alignment * 4)
    score += min(25, stage_alignment * 1.67)
    score += resource_score
    score += location_impact
    score += funding_score
    score += risk.score
    score += min(5, (6 - strategy.criterion("complianceRequirements")) * 1.2)
    trend_weight = 1.5 if profile.maturity == MaturityStage.STARTUP else 1.0
    score += min(5, strategy.criterion("macroTrends") * trend_weight)
    score += compliance.score

    if strategy.criterion("complianceRequirements") <= 2 and compliance.score < 5:
        score *= 0.8

    mission = calculate_mission_alignment(strategy, profile)
    score += min(15, mission * 3)
    score = min(MAX_SCORE, round_half_up(score * 0.95 + mission * 5))

    platform_bonus: float = 0
    if strategy.id == "digitalFundraising":
        platform_bonus = calculate_platform_bonus(as_list(answers.get("ngoOnlinePlatformsUsed")))
        score += platform_bonus

    keyword_alignment = analyze_mission_alignment(profile.mission, strategy.id)
    score += keyword_alignment * 3

    beneficiary_alignment = calculate_beneficiary_alignment(strategy, profile)
    score += beneficiary_alignment * 2

    capability = profile.foreign_funding
    if strategy.donor_category == DonorCategory.FOUNDATION_FOREIGN:
        if not capability.has_valid_fcra:
            score = 0
        elif capability.has_501c:
            score += 10
    elif strategy.donor_category == DonorCategory.FOUNDATION_RESTRICTED:
        if not capability.has_valid_fcra:
            score = 0
    elif strategy.donor_category == DonorCategory.FOUNDATION_DOMESTIC:
        if profile.has_compliance("80g"):
            score += 5

    if strategy.donor_category in FOREIGN_CATEGORIES:
        score *= FOREIGN_INTENT_MULTIPLIERS.get(as_str(answers.get("ngoForeignFundingIntent")), 1.0)

    final_score = round_half_up(clamp(score, 0, MAX_SCORE))

    enriched_risk = risk.model_copy(
        update={
            "insights": (
                get_location_insights(strategy, profile, location_impact)
                + risk.insights
                + compliance_insights(strategy, compliance)
            )
        }
    )

    return FitAssessment(
        fit=StrategyFit(
            score=final_score,
            network_alignment=network_alignment,
            stage_alignment=stage_alignment,
            resource_score=resource_score,
            location_impact=location_impact,
            funding_score=funding_score,
            mission_alignment=mission,
            keyword_alignment=keyword_alignment,
            beneficiary_alignment=beneficiary_alignment,
            platform_bonus=platform_bonus,
        ),
        risk_profile=enriched_risk,
        compliance=compliance,
        foreign_funding_insights=foreign_funding_insights(strategy, profile),
    )
