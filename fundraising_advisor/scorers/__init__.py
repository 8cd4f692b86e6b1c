from fundraising_advisor.scorers.compliance_readiness import calculate_compliance_readiness
from fundraising_advisor.scorers.eligibility import check_eligibility
from fundraising_advisor.scorers.fit_scorer import FitAssessment, calculate_strategy_fit
from fundraising_advisor.scorers.location_impact import calculate_location_impact, get_location_insights
from fundraising_advisor.scorers.mission_alignment import (
    analyze_mission_alignment,
    calculate_beneficiary_alignment,
    calculate_mission_alignment,
)
from fundraising_advisor.scorers.risk_profile import calculate_risk_profile
from fundraising_advisor.scorers.similarity import (
    calculate_similarity_score,
    find_similar_strategies,
    get_synergies,
    similarity,
)
from fundraising_advisor.scorers.strategy_catalog import (
    StrategyCatalog,
    get_strategy,
    list_strategies,
    load_catalog,
    strategies_by_donor_category,
)

__all__ = [
    "FitAssessment",
    "StrategyCatalog",
    "analyze_mission_alignment",
    "calculate_beneficiary_alignment",
    "calculate_compliance_readiness",
    "calculate_location_impact",
    "calculate_mission_alignment",
    "calculate_risk_profile",
    "calculate_similarity_score",
    "calculate_strategy_fit",
    "check_eligibility",
    "find_similar_strategies",
    "get_location_insights",
    "get_strategy",
    "get_synergies",
    "list_strategies",
    "load_catalog",
    "similarity",
    "strategies_by_donor_category",
]
