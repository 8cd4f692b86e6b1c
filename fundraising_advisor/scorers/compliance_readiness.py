"""
Compliance readiness per strategy (0-10).

Scoring:
- Base: PAN +1, 12A +2, 80G +2
- Strategy adjustment (lookup table below). A missing hard prerequisite
  resets the running score to 0 before the general factors are added:
    csr / employeeGiving   CSR-1 required (+5), event capability +2
    endowmentFunds         educational registration required (+5)
    legacyGiving           5+ years of donor relationships required (+4)
    crowdfunding           a product or service to offer required (+3)
- General factors: Darpan +1, ITR with Form 10B +2, current audit +2,
  compliance team (in-house or outsourced) +1
"""

from typing import Any, Callable, Mapping

from fundraising_advisor.constants import MAX_COMPLIANCE_SCORE
from fundraising_advisor.parsers.answer_values import as_str, is_yes, parse_int
from fundraising_advisor.schemas.profile import ComplianceReadiness, NGOProfile
from fundraising_advisor.schemas.strategy import Strategy

EVENT_CAPABILITY_THRESHOLD = 4
LEGACY_RELATIONSHIP_YEARS = 5

Adjustment = Callable[[int, NGOProfile, Mapping[str, Any]], int]


def _csr_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    score = score + 5 if profile.has_compliance("csr1") else 0
    if profile.event_capacity >= EVENT_CAPABILITY_THRESHOLD:
        score += 2
    return score


def _endowment_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    return score + 5 if profile.registration_type == "educational" else 0


def _legacy_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    if parse_int(answers.get("ngoDonorRelationshipYears")) >= LEGACY_RELATIONSHIP_YEARS:
        return score + 4
    return 0


def _crowdfunding_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    return score + 3 if is_yes(answers.get("ngoHasProduct")) else 0


def _grants_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    if profile.has_compliance("fcra"):
        score += 3
    if profile.has_compliance("80g"):
        score += 2
    return score


def _individual_giving_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    if profile.has_compliance("80g"):
        score += 3
    if profile.has_compliance("12a"):
        score += 2
    return score


def _default_adjustment(score: int, profile: NGOProfile, answers: Mapping[str, Any]) -> int:
    if profile.has_compliance("80g"):
        score += 2
    if profile.has_compliance("12a"):
        score += 2
    return score


STRATEGY_ADJUSTMENTS: dict[str, Adjustment] = {
    "csr": _csr_adjustment,
    "employeeGiving": _csr_adjustment,
    "endowmentFunds": _endowment_adjustment,
    "legacyGiving": _legacy_adjustment,
    "crowdfunding": _crowdfunding_adjustment,
    "grants": _grants_adjustment,
    "hniGiving": _individual_giving_adjustment,
    "digitalFundraising": _individual_giving_adjustment,
}


def calculate_compliance_readiness(
    strategy: Strategy, profile: NGOProfile, answers: Mapping[str, Any]
) -> ComplianceReadiness:
    """Compliance readiness of the organisation for one strategy."""
    score = 0
    if profile.has_compliance("pan"):
        score += 1
    if profile.has_compliance("12a"):
        score += 2
    if profile.has_compliance("80g"):
        score += 2

    adjust = STRATEGY_ADJUSTMENTS.get(strategy.id, _default_adjustment)
    score = adjust(score, profile, answers)

    if profile.has_compliance("darpan"):
        score += 1
    if profile.has_compliance("itr") and profile.has_compliance("form10b"):
        score += 2
    audit_status = as_str(answers.get("ngoAuditStatus"))
    if audit_status == "current":
        score += 2
    if as_str(answers.get("ngoComplianceTeam")) in ("yes", "outsourced"):
        score += 1

    def registered_or_processing(registration: str) -> bool:
        return profile.has_compliance(registration) or profile.is_processing(registration)

    return ComplianceReadiness(
        score=max(0, min(MAX_COMPLIANCE_SCORE, score)),
        has_essentials=(
            profile.has_compliance("pan") and registered_or_processing("12a") and registered_or_processing("80g")
        ),
        ready_for_csr=profile.has_compliance("csr1"),
        ready_for_fcra=registered_or_processing("fcra"),
        audit_status=audit_status,
        has_event_capability=profile.event_capacity >= EVENT_CAPABILITY_THRESHOLD,
    )
