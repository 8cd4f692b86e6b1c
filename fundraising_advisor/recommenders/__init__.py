from fundraising_advisor.recommenders.archetypes import Archetype, CollaborativeRecommender, load_archetypes
from fundraising_advisor.recommenders.base import Recommender
from fundraising_advisor.recommenders.ensemble import EnsembleRecommender, merge_results
from fundraising_advisor.recommenders.rules import DECISION_RULES, DecisionRule, RuleRecommender
from fundraising_advisor.recommenders.scoring import ScoringRecommender

__all__ = [
    "Archetype",
    "CollaborativeRecommender",
    "DECISION_RULES",
    "DecisionRule",
    "EnsembleRecommender",
    "Recommender",
    "RuleRecommender",
    "ScoringRecommender",
    "load_archetypes",
    "merge_results",
]
