"""
Derive an NGOProfile from a raw questionnaire answer set.

Every feature is a pure function of the answers (and the current year for
maturity). Missing or malformed answers contribute nothing: the derivation
never raises on answer content.

Feature scales:
- digital capacity            0-8
- volunteer capacity          0-10 (halved, capped at 5, for the fit composite)
- event capacity              0-10
- network strengths           0-6 per segment
- fundraising capacity        0-12
- foreign funding             0-10 plus readiness tier
"""

from typing import Any, Mapping, Optional

from fundraising_advisor.config import EngineSettings
from fundraising_advisor.constants import (
    FOREIGN_FULL_ACCESS_THRESHOLD,
    FOREIGN_LIMITED_ACCESS_THRESHOLD,
    FOREIGN_RESTRICTED_ACCESS_THRESHOLD,
    GROWTH_MAX_AGE_YEARS,
    MATURE_MAX_AGE_YEARS,
    MAX_DIGITAL_CAPACITY,
    MAX_EVENT_CAPACITY,
    MAX_FOREIGN_FUNDING_SCORE,
    MAX_FUNDRAISING_CAPACITY,
    MAX_NETWORK_STRENGTH,
    MAX_VOLUNTEER_CAPACITY,
    MEDIUM_BUDGET_USD,
    MEDIUM_MAX_STAFF,
    RATING_THRESHOLD,
    SMALL_BUDGET_USD,
    SMALL_MAX_STAFF,
    STARTUP_MAX_AGE_YEARS,
)
from fundraising_advisor.parsers.answer_values import (
    as_list,
    as_ratings,
    as_str,
    is_yes,
    parse_float,
    parse_int,
    rating_average,
)
from fundraising_advisor.schemas.enums import ForeignFundingTier, MaturityStage, SizeClass
from fundraising_advisor.schemas.profile import ForeignFundingCapability, NetworkStrengths, NGOProfile
from fundraising_advisor.utils.logger import get_logger

logger = get_logger(__name__)

# =============================================================================
# Answer vocabularies
# =============================================================================

# Yes/no questions that each add one point of digital capacity
DIGITAL_PRESENCE_KEYS = (
    "ngoWebsite",
    "ngoSocialMedia",
    "ngoDonationPage",
    "ngoEmailMarketing",
    "ngoOnlinePlatforms",
    "ngoDigitalBudget",
    "ngoOnlineCampaigns",
)
DIGITAL_SKILL_KEYS = ("digitalMarketing", "contentCreation", "websiteManagement", "dataAnalysis")
EVENT_SKILL_KEYS = ("eventPlanning", "eventMarketing", "eventTicketing", "eventVolunteers", "eventFollowup")

VOLUNTEER_SHARE_POINTS = {"25to50": 1, "51to75": 2, "over75": 3}
EVENT_COUNT_POINTS = {"3to5": 1, "6to10": 2, "over10": 3}
PARTNER_COUNT_POINTS = {"1to3": 1, "4to10": 2, "over10": 3}
DONOR_COUNT_POINTS = {"100to500": 1, "500to1000": 2, "over1000": 3}
FUNDRAISING_SKILL_POINTS = {"some": 1, "mix": 2, "specialized": 3}
FUNDRAISING_CAPITAL_POINTS = {"yes": 2, "limited": 1}

FOREIGN_INTENT_POINTS = {"yes": 2, "future": 1}


# =============================================================================
# Scale and stage
# =============================================================================


def calculate_maturity(founding_year: int, current_year: int) -> MaturityStage:
    """Maturity stage from organisational age.

    An unknown founding year (0) yields a very large age, i.e. established.
    """
    age = current_year - founding_year
    if age < STARTUP_MAX_AGE_YEARS:
        return MaturityStage.STARTUP
    if age < GROWTH_MAX_AGE_YEARS:
        return MaturityStage.GROWTH
    if age < MATURE_MAX_AGE_YEARS:
        return MaturityStage.MATURE
    return MaturityStage.ESTABLISHED


def calculate_size(budget_usd: float, staff: int) -> SizeClass:
    if budget_usd < SMALL_BUDGET_USD and staff < SMALL_MAX_STAFF:
        return SizeClass.SMALL
    if budget_usd < MEDIUM_BUDGET_USD and staff < MEDIUM_MAX_STAFF:
        return SizeClass.MEDIUM
    return SizeClass.LARGE


# =============================================================================
# Capacities
# =============================================================================


def calculate_digital_capacity(answers: Mapping[str, Any]) -> int:
    score = sum(1 for key in DIGITAL_PRESENCE_KEYS if is_yes(answers.get(key)))

    skills = as_ratings(answers.get("ngoDigitalSkills"))
    if skills and rating_average(skills, DIGITAL_SKILL_KEYS) >= RATING_THRESHOLD:
        score += 1

    return min(MAX_DIGITAL_CAPACITY, score)


def calculate_volunteer_capacity(answers: Mapping[str, Any]) -> int:
    score = 0

    if is_yes(answers.get("ngoVolunteers")):
        score += 1
        volunteer_count = parse_int(answers.get("ngoVolunteersCount"))
        if volunteer_count > 10:
            score += 1
        if volunteer_count > 50:
            score += 1

    if is_yes(answers.get("ngoVolunteerOperations")):
        score += 1
        score += VOLUNTEER_SHARE_POINTS.get(as_str(answers.get("ngoVolunteerPercentage")), 0)

    if is_yes(answers.get("ngoVolunteerManagement")):
        score += 1
    if parse_int(answers.get("ngoVolunteerCapacity")) >= RATING_THRESHOLD:
        score += 1
    if is_yes(answers.get("ngoVolunteerFundraising")):
        score += 2

    return min(MAX_VOLUNTEER_CAPACITY, score)


def calculate_event_capacity(answers: Mapping[str, Any]) -> int:
    score = 0

    if is_yes(answers.get("ngoEventExperience")):
        score += 1
        score += EVENT_COUNT_POINTS.get(as_str(answers.get("ngoEventCount")), 0)
        if len(as_list(answers.get("ngoEventTypes"))) > 3:
            score += 1

    ratings = as_ratings(answers.get("ngoEventCapacity"))
    if ratings:
        avg_skill = rating_average(ratings, EVENT_SKILL_KEYS)
        if avg_skill >= 3:
            score += 2
        if avg_skill >= 4:
            score += 1

    for key in ("ngoEventVenues", "ngoVirtualEvents", "ngoEventBudget"):
        if is_yes(answers.get(key)):
            score += 1

    return min(MAX_EVENT_CAPACITY, score)


def calculate_fundraising_capacity(answers: Mapping[str, Any]) -> int:
    score = 0

    if is_yes(answers.get("ngoFundraisingDept")):
        score += 1
        if parse_int(answers.get("ngoFundraisingStaffCount")) >= 2:
            score += 1

    score += FUNDRAISING_SKILL_POINTS.get(as_str(answers.get("ngoFundraisingSkill")), 0)

    if is_yes(answers.get("ngoVolunteerFundraisingSupport")):
        score += 1
    if parse_float(answers.get("ngoFundraisingBudgetPercent")) >= 10:
        score += 1

    score += FUNDRAISING_CAPITAL_POINTS.get(as_str(answers.get("ngoFundraisingCapital")), 0)

    if is_yes(answers.get("ngoCRM")):
        score += 1
    if is_yes(answers.get("ngoFinancialSystems")):
        score += 1

    return min(MAX_FUNDRAISING_CAPACITY, score)


# =============================================================================
# Network strengths
# =============================================================================


def _network_strength(
    answers: Mapping[str, Any],
    presence_key: Optional[str],
    count_key: str,
    count_points: Mapping[str, int],
    rating_key: str,
    capability_key: str,
) -> int:
    score = 0
    if presence_key is None:
        score += count_points.get(as_str(answers.get(count_key)), 0)
    elif is_yes(answers.get(presence_key)):
        score += 1
        score += count_points.get(as_str(answers.get(count_key)), 0)

    if parse_int(answers.get(rating_key)) >= RATING_THRESHOLD:
        score += 1
    if is_yes(answers.get(capability_key)):
        score += 1
    return min(MAX_NETWORK_STRENGTH, score)


def calculate_corporate_network_strength(answers: Mapping[str, Any]) -> int:
    return _network_strength(
        answers,
        presence_key="ngoCorporateRelations",
        count_key="ngoCorporatePartnersCount",
        count_points=PARTNER_COUNT_POINTS,
        rating_key="ngoCorporateRelationshipStrength",
        capability_key="ngoCSRExperience",
    )


def calculate_individual_network_strength(answers: Mapping[str, Any]) -> int:
    """Individual donor network.

    The donor database flag and the donor-count bracket score independently:
    a count answer counts even without a database.
    """
    score = 1 if is_yes(answers.get("ngoDonorDatabase")) else 0
    score += _network_strength(
        answers,
        presence_key=None,
        count_key="ngoDonorCount",
        count_points=DONOR_COUNT_POINTS,
        rating_key="ngoDonorRelationship",
        capability_key="ngoDonorStewardship",
    )
    return min(MAX_NETWORK_STRENGTH, score)


def calculate_foundation_network_strength(answers: Mapping[str, Any]) -> int:
    return _network_strength(
        answers,
        presence_key="ngoFoundationRelations",
        count_key="ngoFoundationCount",
        count_points=PARTNER_COUNT_POINTS,
        rating_key="ngoFoundationRelationshipStrength",
        capability_key="ngoGrantWriting",
    )


# =============================================================================
# Foreign funding
# =============================================================================


def foreign_funding_tier(score: float) -> ForeignFundingTier:
    if score >= FOREIGN_FULL_ACCESS_THRESHOLD:
        return ForeignFundingTier.FULL_ACCESS
    if score >= FOREIGN_LIMITED_ACCESS_THRESHOLD:
        return ForeignFundingTier.LIMITED_ACCESS
    if score >= FOREIGN_RESTRICTED_ACCESS_THRESHOLD:
        return ForeignFundingTier.RESTRICTED_ACCESS
    return ForeignFundingTier.DOMESTIC_ONLY


def calculate_foreign_funding_capability(answers: Mapping[str, Any]) -> ForeignFundingCapability:
    compliance = set(as_list(answers.get("ngoComplianceStatus")))
    in_process = set(as_list(answers.get("ngoComplianceInProcess")))
    has_fcra = "fcra" in compliance
    has_501c = "501c" in compliance

    score: float = 0
    if has_fcra and has_501c:
        score += 5
    elif has_fcra:
        score += 3

    score += FOREIGN_INTENT_POINTS.get(as_str(answers.get("ngoForeignFundingIntent")), 0)

    readiness = as_ratings(answers.get("ngoForeignComplianceReadiness"))
    if readiness:
        avg_readiness = sum(readiness.values()) / len(readiness)
        score += min(3, avg_readiness / 2)

    score = max(0, min(MAX_FOREIGN_FUNDING_SCORE, score))
    return ForeignFundingCapability(
        score=score,
        tier=foreign_funding_tier(score),
        has_valid_fcra=has_fcra and is_yes(answers.get("ngoFCRAValidity")),
        has_501c=has_501c,
        processing_fcra="fcra" in in_process,
        processing_501c="501c" in in_process,
    )


# =============================================================================
# Aggregator
# =============================================================================


class NGOProfileAggregator:
    """
    Build the NGOProfile consumed by every recommender.

    The currency conversion factor and the reference year come from
    EngineSettings so that derivation stays deterministic for a given
    configuration.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    def build(self, answers: Optional[Mapping[str, Any]], current_year: Optional[int] = None) -> NGOProfile:
        """
        Derive the profile.

        Args:
            answers: Raw answer set (question id -> value); None is treated as empty
            current_year: Reference year for maturity; defaults to the settings year

        Returns:
            NGOProfile instance
        """
        answers = answers or {}
        year = current_year if current_year is not None else self.settings.resolve_year()

        founding_year = parse_int(answers.get("ngoYear"))
        budget = parse_int(answers.get("ngoBudget"))
        budget_usd = budget / self.settings.local_currency_per_usd
        staff = parse_int(answers.get("ngoStaff"))

        maturity = calculate_maturity(founding_year, year)
        size = calculate_size(budget_usd, staff)

        profile = NGOProfile(
            founding_year=founding_year,
            age_years=year - founding_year,
            maturity=maturity,
            size=size,
            budget=budget,
            budget_usd=budget_usd,
            staff_count=staff,
            registration_type=as_str(answers.get("ngoRegistrationType")),
            digital_capacity=calculate_digital_capacity(answers),
            volunteer_capacity=calculate_volunteer_capacity(answers),
            event_capacity=calculate_event_capacity(answers),
            fundraising_capacity=calculate_fundraising_capacity(answers),
            networks=NetworkStrengths(
                corporate=calculate_corporate_network_strength(answers),
                individual=calculate_individual_network_strength(answers),
                foundation=calculate_foundation_network_strength(answers),
            ),
            compliance_status=frozenset(as_list(answers.get("ngoComplianceStatus"))),
            compliance_in_process=frozenset(as_list(answers.get("ngoComplianceInProcess"))),
            foreign_funding=calculate_foreign_funding_capability(answers),
            risk_tolerance=as_str(answers.get("ngoRiskTolerance")) or "moderate",
            locations=tuple(as_list(answers.get("ngoLocation"))),
            scope=as_str(answers.get("ngoScope")),
            primary_beneficiaries=tuple(as_list(answers.get("ngoPrimaryBeneficiaries"))),
            secondary_beneficiaries=tuple(as_list(answers.get("ngoSecondaryBeneficiaries"))),
            indirect_beneficiaries=tuple(as_list(answers.get("ngoIndirectBeneficiaries"))),
            mission=as_str(answers.get("ngoMission")),
        )
        logger.debug(
            "Built profile",
            maturity=maturity.value,
            size=size.value,
            digital=profile.digital_capacity,
            volunteer=profile.volunteer_capacity,
            event=profile.event_capacity,
        )
        return profile
