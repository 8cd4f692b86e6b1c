"""
Mission and beneficiary alignment scorers.

Three independent 0-5 signals:
- calculate_mission_alignment: structural fit (mission depth and beneficiary
  breadth for institutional funders, relatable causes for public appeals,
  the educational prerequisite for endowments)
- analyze_mission_alignment: keyword overlap between the mission text and a
  per-strategy vocabulary
- calculate_beneficiary_alignment: fit between beneficiary groups and the
  strategy's donor psychology
"""

from fundraising_advisor.constants import MAX_MISSION_ALIGNMENT
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.strategy import Strategy

INSTITUTIONAL_STRATEGIES = frozenset({"csr", "grants"})
PUBLIC_APPEAL_STRATEGIES = frozenset({"p2p", "crowdfunding", "digitalFundraising", "doorToDoor"})
INSTANT_CONNECT_CAUSES = frozenset({"children", "animals", "education", "health", "environment", "disaster"})

LONG_MISSION_CHARS = 200
BROAD_BENEFICIARY_COUNT = 4

MISSION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "csr": ("impact", "sustainable", "development", "community", "social", "responsibility"),
    "grants": ("research", "project", "program", "impact", "outcomes", "evaluation"),
    "p2p": ("community", "grassroots", "people", "social", "change", "support"),
    "crowdfunding": ("project", "creative", "innovative", "community", "impact"),
    "hniGiving": ("legacy", "impact", "transformation", "leadership", "vision"),
    "endowmentFunds": (
        "education",
        "academic",
        "learning",
        "school",
        "college",
        "university",
        "research",
        "sustainability",
    ),
}

BROAD_IMPACT_STRATEGIES = frozenset({"grants", "csr", "endowmentFunds"})
RELATABLE_CAUSE_STRATEGIES = frozenset({"p2p", "crowdfunding"})
RELATABLE_CAUSES = frozenset({"children", "education", "health", "environment"})
MAJOR_GIFT_STRATEGIES = frozenset({"hniGiving", "legacyGiving"})


def calculate_mission_alignment(strategy: Strategy, profile: NGOProfile) -> int:
    score = 0

    if strategy.id in INSTITUTIONAL_STRATEGIES:
        if len(profile.mission) > LONG_MISSION_CHARS:
            score += 2
        if len(profile.primary_beneficiaries) + len(profile.secondary_beneficiaries) >= BROAD_BENEFICIARY_COUNT:
            score += 2

    if strategy.id in PUBLIC_APPEAL_STRATEGIES:
        if INSTANT_CONNECT_CAUSES.intersection(profile.primary_beneficiaries):
            score += 3

    if strategy.id == "endowmentFunds":
        score = score + 5 if profile.registration_type == "educational" else 0

    return min(MAX_MISSION_ALIGNMENT, score)


def analyze_mission_alignment(mission_text: str, strategy_id: str) -> float:
    """Share of the strategy's keywords found in the mission text, scaled to 0-5.

    Matching is case-insensitive substring search; strategies without a
    vocabulary score 0.
    """
    keywords = MISSION_KEYWORDS.get(strategy_id)
    if not mission_text or not keywords:
        return 0.0
    text = mission_text.lower()
    match_count = sum(1 for word in keywords if word in text)
    return min(MAX_MISSION_ALIGNMENT, match_count / len(keywords) * MAX_MISSION_ALIGNMENT)


def calculate_beneficiary_alignment(strategy: Strategy, profile: NGOProfile) -> float:
    score: float = 0

    if strategy.id in BROAD_IMPACT_STRATEGIES:
        total = (
            len(profile.primary_beneficiaries)
            + len(profile.secondary_beneficiaries)
            + len(profile.indirect_beneficiaries)
        )
        score += min(3, total / 2)

    if strategy.id in RELATABLE_CAUSE_STRATEGIES:
        if RELATABLE_CAUSES.intersection(profile.primary_beneficiaries):
            score += 2

    if strategy.id in MAJOR_GIFT_STRATEGIES:
        if len(profile.indirect_beneficiaries) >= 2:
            score += 2
        if len(profile.primary_beneficiaries) >= 2:
            score += 1

    return min(MAX_MISSION_ALIGNMENT, score)
