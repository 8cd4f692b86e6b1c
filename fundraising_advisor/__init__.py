"""Multi-algorithm fundraising strategy recommendations for NGOs."""

from fundraising_advisor.config import EngineSettings, load_settings
from fundraising_advisor.engine import RecommendationEngine, RecommendationRun, recommend

__version__ = "0.1.0"

__all__ = [
    "EngineSettings",
    "RecommendationEngine",
    "RecommendationRun",
    "load_settings",
    "recommend",
]
