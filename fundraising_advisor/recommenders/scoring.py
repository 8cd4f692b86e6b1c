"""
Criteria-weighted recommender.

Every eligible strategy gets:
- Base (max 40): macroTrends x3 + fundingScale x3 + fundingTimeline x2
- Digital bonus (max 15) for digital-leaning strategies: digital capacity x3
- Volunteer bonus (max 15) for volunteer-leaning strategies: raw volunteer capacity x3
- Network bonus (max 15) keyed by donor category
- Risk-tolerance bonus: exact match +15, adjacent tier +7

Confidence = min(0.95, score / 100 + 0.3).
"""

from typing import Any, Mapping, Optional

from fundraising_advisor.constants import (
    CONTEXT_BONUS_CAP,
    MAX_CONFIDENCE,
    MAX_SCORE,
    RISK_FULL_MATCH_BONUS,
    RISK_PARTIAL_MATCH_BONUS,
    SCORING_CONFIDENCE_OFFSET,
)
from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import ScoredStrategy
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.scorers.eligibility import check_eligibility
from fundraising_advisor.scorers.risk_profile import DIGITAL_LEANING_STRATEGIES, tolerance_adjacent, tolerance_matches
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog
from fundraising_advisor.utils.logger import get_logger
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

logger = get_logger(__name__)

VOLUNTEER_LEANING_STRATEGIES = frozenset({"p2p", "doorToDoor", "eventBased"})


class ScoringRecommender:
    """Scores every eligible catalog strategy on intrinsic and contextual criteria."""

    algorithm_type = AlgorithmType.SCORING

    def __init__(self, catalog: Optional[StrategyCatalog] = None):
        self.catalog = catalog or load_catalog()

    def recommend(
        self,
        answers: Mapping[str, Any],
        profile: NGOProfile,
        audit_log: Optional[RecommendationAuditLog] = None,
    ) -> list[ScoredStrategy]:
        results = []
        for strategy in self.catalog:
            gate = check_eligibility(strategy, profile)
            if gate is not None:
                logger.debug("Strategy excluded", algorithm=self.algorithm_type.value, strategy=strategy.id, gate=gate)
                if audit_log is not None:
                    audit_log.log(self.algorithm_type.value, strategy.id, AuditDecision.EXCLUDED, reason=gate)
                continue

            score = min(MAX_SCORE, self.score_strategy(strategy, profile))
            results.append(
                ScoredStrategy(
                    strategy_id=strategy.id,
                    score=score,
                    confidence=min(MAX_CONFIDENCE, score / 100 + SCORING_CONFIDENCE_OFFSET),
                    algorithm_type=self.algorithm_type,
                )
            )

        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug("Scoring recommender finished", results=len(results))
        return results

    def score_strategy(self, strategy: Strategy, profile: NGOProfile) -> int:
        """Unclamped score of one strategy (eligibility is not checked here)."""
        score = 0
        score += strategy.criterion("macroTrends") * 3
        score += strategy.criterion("fundingScale") * 3
        score += strategy.criterion("fundingTimeline") * 2

        if strategy.id in DIGITAL_LEANING_STRATEGIES:
            score += min(CONTEXT_BONUS_CAP, profile.digital_capacity * 3)

        if strategy.id in VOLUNTEER_LEANING_STRATEGIES:
            score += min(CONTEXT_BONUS_CAP, profile.volunteer_capacity * 3)

        network = profile.networks.for_category(strategy.donor_category)
        if network is not None:
            score += min(CONTEXT_BONUS_CAP, network * 3)

        execution_risk = strategy.criterion("executionRisk")
        if tolerance_matches(profile.risk_tolerance, execution_risk):
            score += RISK_FULL_MATCH_BONUS
        elif tolerance_adjacent(profile.risk_tolerance, execution_risk):
            score += RISK_PARTIAL_MATCH_BONUS

        return score
