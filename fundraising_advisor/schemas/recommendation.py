"""Recommendation output schemas.

ScoredStrategy is the uniform currency exchanged between recommenders and the
ensemble. RecommendationRecord is the enriched, presentation-ready result the
engine returns.
"""

from typing import Optional

from pydantic import BaseModel, Field

from fundraising_advisor.schemas.enums import AlgorithmType, DonorCategory
from fundraising_advisor.schemas.profile import ComplianceReadiness, ForeignFundingCapability, RiskProfile


class ConsensusScore(BaseModel):
    """How the ensemble arrived at a merged result."""

    num_algorithms_agreeing: int = Field(..., ge=1, le=3)
    algorithm_types: list[AlgorithmType]
    avg_original_confidence: float
    original_scores: list[int]


class ScoredStrategy(BaseModel):
    """One recommender's verdict on one strategy."""

    strategy_id: str
    score: int = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0, le=1)
    algorithm_type: AlgorithmType

    # Attribution (set by the algorithm that produced the result)
    rule: Optional[str] = Field(None, description="Triggering rule name (rule algorithm)")
    archetype: Optional[str] = Field(None, description="Matched archetype name (collaborative algorithm)")
    match_percentage: Optional[int] = Field(None, ge=0, le=100)
    consensus: Optional[ConsensusScore] = Field(None, description="Set by the ensemble only")


class ConfidenceLevel(BaseModel):
    """Four-tier confidence label with its presentation class."""

    label: str
    css_class: str


class SimilarityDetails(BaseModel):
    """Relation of a result to the top-ranked strategy."""

    similarity_score: float = Field(..., ge=0, le=1)
    synergies: list[str] = Field(default_factory=list)


class StrategyFit(BaseModel):
    """Detailed composite fit of a strategy for the organisation (0-100)."""

    score: int = Field(..., ge=0, le=100)
    network_alignment: float = 0
    stage_alignment: float = 0
    resource_score: float = 0
    location_impact: int = 0
    funding_score: float = 0
    mission_alignment: int = 0
    keyword_alignment: float = 0
    beneficiary_alignment: float = 0
    platform_bonus: float = 0


class RecommendationRecord(BaseModel):
    """A ranked, presentation-ready recommendation."""

    id: str
    name: str
    description: str
    donor_category: DonorCategory
    score: int = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0, le=1)
    confidence_level: ConfidenceLevel
    criteria: dict[str, int] = Field(default_factory=dict)

    # Per-strategy assessments
    risk_profile: RiskProfile
    compliance: ComplianceReadiness
    foreign_funding: Optional[ForeignFundingCapability] = Field(
        None, description="Only present for foundation-category strategies"
    )
    foreign_funding_insights: list[str] = Field(default_factory=list)
    fit: StrategyFit
    timeline_context: str
    implementation_phase: str
    reasons: list[str] = Field(default_factory=list)

    # Attribution
    algorithm_type: Optional[AlgorithmType] = None
    rule: Optional[str] = None
    archetype: Optional[str] = None
    match_percentage: Optional[int] = None
    consensus: Optional[ConsensusScore] = None

    similarity: Optional[SimilarityDetails] = None
