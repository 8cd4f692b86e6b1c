from fundraising_advisor.schemas.enums import (
    AlgorithmType,
    DonorCategory,
    ForeignFundingTier,
    MaturityStage,
    RecommendationMode,
    RiskLevel,
    RiskTolerance,
    SizeClass,
)
from fundraising_advisor.schemas.profile import (
    ComplianceReadiness,
    ForeignFundingCapability,
    NetworkStrengths,
    NGOProfile,
    RiskProfile,
)
from fundraising_advisor.schemas.recommendation import (
    ConfidenceLevel,
    ConsensusScore,
    RecommendationRecord,
    ScoredStrategy,
    SimilarityDetails,
    StrategyFit,
)
from fundraising_advisor.schemas.strategy import CRITERION_NAMES, ScoringCriteria, Strategy, SuitabilityConstraints

__all__ = [
    "AlgorithmType",
    "CRITERION_NAMES",
    "ComplianceReadiness",
    "ConfidenceLevel",
    "ConsensusScore",
    "DonorCategory",
    "ForeignFundingCapability",
    "ForeignFundingTier",
    "MaturityStage",
    "NGOProfile",
    "NetworkStrengths",
    "RecommendationMode",
    "RecommendationRecord",
    "RiskLevel",
    "RiskProfile",
    "RiskTolerance",
    "ScoredStrategy",
    "ScoringCriteria",
    "SimilarityDetails",
    "SizeClass",
    "Strategy",
    "StrategyFit",
    "SuitabilityConstraints",
]
