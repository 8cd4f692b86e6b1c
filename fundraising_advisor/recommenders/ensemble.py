"""
Ensemble combiner.

Runs the independent recommenders and merges their verdicts per strategy:

- score = confidence-weighted mean of the contributing scores
- confidence = mean confidence x (0.7 + distinct algorithms / 10), capped at 0.95

Agreement across algorithms therefore lifts confidence even when each
individual confidence is moderate. Results are sorted by merged score.
"""

from typing import Any, Mapping, Optional, Sequence

from fundraising_advisor.constants import ENSEMBLE_BASE_MULTIPLIER, ENSEMBLE_PER_ALGORITHM_BONUS, MAX_CONFIDENCE
from fundraising_advisor.recommenders.archetypes import CollaborativeRecommender
from fundraising_advisor.recommenders.base import Recommender
from fundraising_advisor.recommenders.rules import RuleRecommender
from fundraising_advisor.recommenders.scoring import ScoringRecommender
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import ConsensusScore, ScoredStrategy
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog
from fundraising_advisor.utils.logger import get_logger
from fundraising_advisor.utils.numbers import clamp, round_half_up
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

logger = get_logger(__name__)

ENSEMBLE_AUDIT_NAME = "ensemble"


def merge_results(results: list[ScoredStrategy]) -> ScoredStrategy:
    """Merge one strategy's verdicts from several algorithms.

    The first verdict supplies the attribution fields (rule, archetype,
    algorithm type) of the merged result.

    Args:
        results: Non-empty verdicts for a single strategy id, in algorithm order

    Returns:
        Merged verdict carrying consensus metadata
    """
    scores = [r.score for r in results]
    confidences = [r.confidence for r in results]

    total_confidence = sum(confidences)
    if total_confidence > 0:
        weighted_score = sum(s * c for s, c in zip(scores, confidences)) / total_confidence
    else:
        weighted_score = sum(scores) / len(scores)

    algorithm_types = list(dict.fromkeys(r.algorithm_type for r in results))
    avg_confidence = total_confidence / len(confidences)
    multiplier = ENSEMBLE_BASE_MULTIPLIER + len(algorithm_types) * ENSEMBLE_PER_ALGORITHM_BONUS

    return results[0].model_copy(
        update={
            "score": int(clamp(round_half_up(weighted_score), 0, 100)),
            "confidence": min(MAX_CONFIDENCE, avg_confidence * multiplier),
            "consensus": ConsensusScore(
                num_algorithms_agreeing=len(algorithm_types),
                algorithm_types=algorithm_types,
                avg_original_confidence=avg_confidence,
                original_scores=scores,
            ),
        }
    )


class EnsembleRecommender:
    """Combines scoring, rule and collaborative recommendations into one ranking."""

    def __init__(
        self,
        recommenders: Optional[Sequence[Recommender]] = None,
        catalog: Optional[StrategyCatalog] = None,
    ):
        if recommenders is None:
            catalog = catalog or load_catalog()
            recommenders = (
                ScoringRecommender(catalog),
                RuleRecommender(catalog),
                CollaborativeRecommender(catalog),
            )
        self.recommenders = tuple(recommenders)

    def recommend(
        self,
        answers: Mapping[str, Any],
        profile: NGOProfile,
        audit_log: Optional[RecommendationAuditLog] = None,
    ) -> list[ScoredStrategy]:
        grouped: dict[str, list[ScoredStrategy]] = {}
        for recommender in self.recommenders:
            results = recommender.recommend(answers, profile, audit_log=audit_log)
            logger.debug("Algorithm results", algorithm=recommender.algorithm_type.value, count=len(results))
            for result in results:
                grouped.setdefault(result.strategy_id, []).append(result)

        merged = []
        for strategy_id, results in grouped.items():
            combined = merge_results(results)
            merged.append(combined)
            if audit_log is not None:
                audit_log.log(
                    ENSEMBLE_AUDIT_NAME,
                    strategy_id,
                    AuditDecision.MERGED,
                    algorithms=[t.value for t in combined.consensus.algorithm_types],
                    score=combined.score,
                    confidence=round(combined.confidence, 4),
                )

        merged.sort(key=lambda r: r.score, reverse=True)
        return merged
