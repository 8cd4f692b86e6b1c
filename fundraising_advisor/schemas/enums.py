"""Enumerations shared across profile derivation, scoring and output."""

from enum import Enum


class DonorCategory(str, Enum):
    """Funding-source classification of a strategy."""

    INDIVIDUAL = "individual"
    CORPORATE = "corporate"
    FOUNDATION_DOMESTIC = "foundation_domestic"
    FOUNDATION_FOREIGN = "foundation_foreign"
    FOUNDATION_RESTRICTED = "foundation_restricted"
    GOVERNMENT = "government"
    EDUCATIONAL = "educational"

    @property
    def is_foundation(self) -> bool:
        return self.value.startswith("foundation_")

    @property
    def label(self) -> str:
        return {
            "individual": "Individual Donors",
            "corporate": "Corporate",
            "foundation_domestic": "Domestic Foundations",
            "foundation_foreign": "Foreign Foundations",
            "foundation_restricted": "Restricted Foundation Pools",
            "government": "Government",
            "educational": "Educational",
        }[self.value]


class MaturityStage(str, Enum):
    """Organisational age band."""

    STARTUP = "startup"  # < 3 years
    GROWTH = "growth"  # 3-6 years
    MATURE = "mature"  # 7-14 years
    ESTABLISHED = "established"  # 15+ years


class SizeClass(str, Enum):
    """Budget and headcount band."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class AlgorithmType(str, Enum):
    """Independent recommender variants."""

    SCORING = "scoring"
    RULE = "rule"
    COLLABORATIVE = "collaborative"


class RecommendationMode(str, Enum):
    """Algorithm selection passed to the engine on every call."""

    SCORING = "scoring"
    RULE = "rule"
    COLLABORATIVE = "collaborative"
    COMBINED = "combined"

    @classmethod
    def parse(cls, mode: "str | RecommendationMode") -> "RecommendationMode":
        """Accept an enum member or its string value; unknown modes raise ValueError."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown recommendation mode {mode!r} (expected one of: {valid})") from None


class RiskTolerance(str, Enum):
    """Self-declared appetite for execution risk."""

    RISK_AVERSE = "riskaverse"
    MODERATE = "moderate"
    RISK_SEEKING = "riskseeking"
    DEPENDS = "depends"


class RiskLevel(str, Enum):
    """Qualitative band of a 0-20 risk-profile score."""

    OPTIMAL = "Optimal"  # >= 15
    ACCEPTABLE = "Acceptable"  # >= 10
    CAUTIOUS = "Cautious"  # < 10


class ForeignFundingTier(str, Enum):
    """Readiness tier of a 0-10 foreign-funding score."""

    FULL_ACCESS = "Full Access"  # >= 8
    LIMITED_ACCESS = "Limited Access"  # >= 6
    RESTRICTED_ACCESS = "Restricted Access"  # >= 4
    DOMESTIC_ONLY = "Domestic Only"
