"""NGO profile schemas.

NGOProfile is derived from a raw answer set on every request and never
persisted. Per-strategy assessments (compliance readiness, risk profile) are
separate models because they depend on the strategy as well as the profile.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fundraising_advisor.constants import (
    NORMALIZED_CAPACITY_CAP,
    VOLUNTEER_CAPACITY_DIVISOR,
)
from fundraising_advisor.schemas.enums import (
    DonorCategory,
    ForeignFundingTier,
    MaturityStage,
    RiskLevel,
    SizeClass,
)


class NetworkStrengths(BaseModel):
    """Relationship strength per donor segment (0-6 each)."""

    model_config = ConfigDict(frozen=True)

    corporate: int = Field(0, ge=0, le=6)
    individual: int = Field(0, ge=0, le=6)
    foundation: int = Field(0, ge=0, le=6)

    def for_category(self, category: DonorCategory) -> Optional[int]:
        """Strength relevant to a donor category, or None when no network applies."""
        if category == DonorCategory.INDIVIDUAL:
            return self.individual
        if category == DonorCategory.CORPORATE:
            return self.corporate
        if category in (DonorCategory.FOUNDATION_DOMESTIC, DonorCategory.FOUNDATION_FOREIGN):
            return self.foundation
        return None


class ForeignFundingCapability(BaseModel):
    """Readiness to receive foreign contributions."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(0, ge=0, le=10, description="0-10; fractional when readiness ratings are averaged")
    tier: ForeignFundingTier = ForeignFundingTier.DOMESTIC_ONLY
    has_valid_fcra: bool = False
    has_501c: bool = False
    processing_fcra: bool = False
    processing_501c: bool = False


class NGOProfile(BaseModel):
    """Derived features of an organisation, recomputed per request."""

    model_config = ConfigDict(frozen=True)

    # ========================================================================
    # Identity and scale
    # ========================================================================
    founding_year: int = 0
    age_years: int = 0
    maturity: MaturityStage
    size: SizeClass
    budget: float = Field(0, description="Annual budget in local currency, as answered")
    budget_usd: float = Field(0, description="Budget converted with the configured factor")
    staff_count: int = 0
    registration_type: str = ""

    # ========================================================================
    # Capacities (raw scales)
    # ========================================================================
    digital_capacity: int = Field(0, ge=0, le=8)
    volunteer_capacity: int = Field(0, ge=0, le=10)
    event_capacity: int = Field(0, ge=0, le=10)
    fundraising_capacity: int = Field(0, ge=0, le=12)
    networks: NetworkStrengths = Field(default_factory=NetworkStrengths)

    # ========================================================================
    # Regulatory and context
    # ========================================================================
    compliance_status: frozenset[str] = frozenset()
    compliance_in_process: frozenset[str] = frozenset()
    foreign_funding: ForeignFundingCapability = Field(default_factory=ForeignFundingCapability)
    risk_tolerance: str = "moderate"
    locations: tuple[str, ...] = ()
    scope: str = ""
    primary_beneficiaries: tuple[str, ...] = ()
    secondary_beneficiaries: tuple[str, ...] = ()
    indirect_beneficiaries: tuple[str, ...] = ()
    mission: str = ""

    @property
    def normalized_volunteer_capacity(self) -> float:
        return min(NORMALIZED_CAPACITY_CAP, self.volunteer_capacity / VOLUNTEER_CAPACITY_DIVISOR)

    def has_compliance(self, registration: str) -> bool:
        return registration in self.compliance_status

    def is_processing(self, registration: str) -> bool:
        return registration in self.compliance_in_process


class ComplianceReadiness(BaseModel):
    """Regulatory readiness for one strategy."""

    score: int = Field(0, ge=0, le=10)
    has_essentials: bool = False
    ready_for_csr: bool = False
    ready_for_fcra: bool = False
    audit_status: str = ""
    has_event_capability: bool = False


class RiskProfile(BaseModel):
    """Execution-risk fit of one strategy for this organisation."""

    score: int = Field(0, ge=0, le=20)
    level: RiskLevel = RiskLevel.CAUTIOUS
    execution_risk: int = 3
    maturity_aligned: bool = False
    insights: list[str] = Field(default_factory=list)
