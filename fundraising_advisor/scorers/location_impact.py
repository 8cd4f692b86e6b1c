"""
Location impact per strategy.

Each selected location tier earns a strategy-specific number of points; the
impact is the rounded mean over all selected locations (0 when none).
"""

from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.utils.numbers import round_half_up

LOCATION_LABELS = {
    "tier1": "Tier 1 city",
    "tier2": "Tier 2 city",
    "tier3": "Tier 3 city",
    "rural": "Rural Area",
}

_CORPORATE_URBAN = {"tier1": 15, "tier2": 8, "tier3": 3}
_DIGITAL = {"tier1": 10, "tier2": 8, "tier3": 5, "rural": 2}

# Points per location tier, keyed by strategy id
LOCATION_POINTS: dict[str, dict[str, int]] = {
    "csr": _CORPORATE_URBAN,
    "employeeGiving": _CORPORATE_URBAN,
    "governmentGrants": {"rural": 15, "tier3": 10, "tier2": 5},
    "crowdfunding": _DIGITAL,
    "p2p": _DIGITAL,
    "digitalFundraising": _DIGITAL,
    "eventBased": {"tier1": 12, "tier2": 8, "tier3": 4},
    "doorToDoor": {"rural": 10, "tier3": 8, "tier2": 6, "tier1": 4},
    "hniGiving": {"tier1": 12, "tier2": 6},
    "checkoutCharity": {"tier1": 10, "tier2": 7, "tier3": 4},
    "grants": {"tier1": 8, "tier2": 6, "tier3": 4, "rural": 2},
    "foreignGrants": {"tier1": 10, "tier2": 7, "tier3": 4},
}
DEFAULT_LOCATION_POINTS = {"tier1": 5, "tier2": 4, "tier3": 3, "rural": 2}

URBAN_TIERS = frozenset({"tier1", "tier2"})
RURAL_TIERS = frozenset({"rural", "tier3"})


def calculate_location_impact(strategy: Strategy, profile: NGOProfile) -> int:
    locations = profile.locations
    if not locations:
        return 0
    points = LOCATION_POINTS.get(strategy.id, DEFAULT_LOCATION_POINTS)
    total = sum(points.get(location, 0) for location in locations)
    return round_half_up(total / len(locations))


def get_location_insights(strategy: Strategy, profile: NGOProfile, location_impact: int) -> list[str]:
    """Textual strengths and cautions derived from the location profile."""
    locations = profile.locations
    if not locations:
        return []

    insights = []
    labels = ", ".join(LOCATION_LABELS.get(location, location) for location in locations)
    if location_impact >= 10:
        insights.append(f"Strong alignment with your location profile ({labels})")
    elif location_impact >= 5:
        insights.append(f"Moderate alignment with your location profile ({labels})")
    elif location_impact <= 0:
        insights.append(f"May face challenges due to your location profile ({labels})")

    present = set(locations)
    has_urban = bool(present & URBAN_TIERS)
    has_rural = bool(present & RURAL_TIERS)

    if strategy.id == "csr":
        if "tier1" in present:
            insights.append("Presence in Tier 1 city provides strong advantage for CSR funding")
        elif not has_urban:
            insights.append("Consider partnerships with NGOs in Tier 1/2 cities to improve CSR access")
    elif strategy.id == "governmentGrants":
        if has_rural:
            insights.append("Rural/Tier 3 presence aligns well with government grant priorities")
    elif strategy.id == "digitalFundraising":
        if has_urban:
            insights.append("Urban presence provides good infrastructure for digital initiatives")
        else:
            insights.append("Consider infrastructure requirements for digital fundraising")
    elif strategy.id == "doorToDoor":
        if has_rural:
            insights.append("Rural/Tier 3 presence is advantageous for door-to-door fundraising")
    elif strategy.id == "foreignGrants":
        if not has_urban:
            insights.append("Consider establishing presence in a major city to facilitate foreign funding")

    return insights
