"""
Recommendation engine.

Orchestrates one recommendation run:

    answers -> NGOProfile -> recommender for the requested mode -> top N
            -> enriched RecommendationRecords (fit, risk, compliance,
               similarity to the top result)

The engine is a pure function of (answers, mode, settings, catalog). It holds
no per-run state; every run gets a fresh audit log.

Usage:
    from fundraising_advisor.engine import RecommendationEngine

    engine = RecommendationEngine()
    run = engine.run(answers, mode="combined")
    for record in run.recommendations:
        print(record.name, record.score, record.confidence_level.label)
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fundraising_advisor.config import EngineSettings
from fundraising_advisor.constants import CONFIDENCE_LEVELS
from fundraising_advisor.parsers.ngo_profile_aggregator import NGOProfileAggregator
from fundraising_advisor.recommenders.archetypes import CollaborativeRecommender, load_archetypes
from fundraising_advisor.recommenders.ensemble import EnsembleRecommender
from fundraising_advisor.recommenders.rules import RuleRecommender
from fundraising_advisor.recommenders.scoring import ScoringRecommender
from fundraising_advisor.schemas.enums import RecommendationMode
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import (
    ConfidenceLevel,
    RecommendationRecord,
    ScoredStrategy,
    SimilarityDetails,
)
from fundraising_advisor.schemas.strategy import Strategy
from fundraising_advisor.scorers.fit_scorer import calculate_strategy_fit
from fundraising_advisor.scorers.similarity import get_synergies, similarity
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog
from fundraising_advisor.utils.logger import get_logger
from fundraising_advisor.utils.scoring_audit import RecommendationAuditLog

logger = get_logger(__name__)


# =============================================================================
# Presentation helpers
# =============================================================================


def confidence_level(confidence: float) -> ConfidenceLevel:
    """Map a confidence to its label: >=0.85 Very High, >=0.7 High, >=0.5 Medium, else Low."""
    for threshold, label, css_class in CONFIDENCE_LEVELS:
        if confidence >= threshold:
            return ConfidenceLevel(label=label, css_class=css_class)
    _, label, css_class = CONFIDENCE_LEVELS[-1]
    return ConfidenceLevel(label=label, css_class=css_class)


def timeline_context(strategy: Strategy) -> str:
    timeline = strategy.criterion("fundingTimeline", default=0)
    if timeline >= 4:
        return "Quick Win"
    if timeline == 3:
        return "Medium-term"
    return "Long-term"


def implementation_phase(strategy: Strategy) -> str:
    timeline = strategy.criterion("fundingTimeline", default=0)
    if timeline >= 4:
        return "Immediate"
    if timeline == 3:
        return "3-6 months"
    return "6+ months"


def fit_reasons(strategy: Strategy, profile: NGOProfile) -> list[str]:
    """Plain-language reasons the strategy suits the organisation.

    Unrated criteria never produce a reason.
    """
    reasons = []
    if profile.maturity in strategy.suitable_for.maturity:
        reasons.append(f"Aligns with your {profile.maturity.value} stage maturity level")
    if profile.size in strategy.suitable_for.size:
        reasons.append("Matches your organizational size and capacity")
    if strategy.criterion("implementationFeasibility", default=0) >= 3:
        reasons.append("Implementation complexity matches your current capabilities")
    if strategy.criterion("scalabilityPotential", default=0) >= 4:
        reasons.append("Offers strong potential for scaling and growth")
    if strategy.criterion("donorEngagement", default=0) >= 4:
        reasons.append("Provides high donor engagement opportunities")
    if strategy.criterion("macroTrends", default=0) >= 4:
        reasons.append("Aligns with current fundraising trends and donor preferences")
    if strategy.criterion("resourceRequirements", default=6) <= 3:
        reasons.append("Resource requirements align with your current capacity")
    return reasons


# =============================================================================
# Engine
# =============================================================================


@dataclass
class RecommendationRun:
    """Result of one engine run."""

    mode: RecommendationMode
    profile: NGOProfile
    recommendations: list[RecommendationRecord]
    audit: RecommendationAuditLog

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "profile": self.profile.model_dump(mode="json"),
            "recommendations": [r.model_dump(mode="json") for r in self.recommendations],
            "audit": self.audit.to_dict(),
        }


class RecommendationEngine:
    """Derives the NGO profile and runs the recommender for the requested mode."""

    def __init__(self, settings: Optional[EngineSettings] = None, catalog: Optional[StrategyCatalog] = None):
        self.settings = settings or EngineSettings()
        self.catalog = catalog or load_catalog(self.settings.data_dir)
        self.aggregator = NGOProfileAggregator(self.settings)

        scoring = ScoringRecommender(self.catalog)
        rule = RuleRecommender(self.catalog)
        collaborative = CollaborativeRecommender(self.catalog, load_archetypes(self.settings.data_dir))
        self.recommenders = {
            RecommendationMode.SCORING: scoring,
            RecommendationMode.RULE: rule,
            RecommendationMode.COLLABORATIVE: collaborative,
            RecommendationMode.COMBINED: EnsembleRecommender([scoring, rule, collaborative]),
        }

    def build_profile(self, answers: Optional[Mapping[str, Any]], current_year: Optional[int] = None) -> NGOProfile:
        return self.aggregator.build(answers, current_year=current_year)

    def run(
        self,
        answers: Optional[Mapping[str, Any]],
        mode: "str | RecommendationMode" = RecommendationMode.COMBINED,
        top_n: Optional[int] = None,
        current_year: Optional[int] = None,
    ) -> RecommendationRun:
        """
        Produce ranked recommendations for an answer set.

        Args:
            answers: Raw answer set; missing or malformed answers default safely
            mode: scoring, rule, collaborative or combined
            top_n: Number of records to return (default: settings.top_n)
            current_year: Override the reference year for maturity

        Returns:
            RecommendationRun with the profile, records and audit log

        Raises:
            ValueError: Unknown mode or top_n below 1
        """
        mode = RecommendationMode.parse(mode)
        top_n = self.settings.top_n if top_n is None else top_n
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")

        answers = answers or {}
        audit_log = RecommendationAuditLog()
        profile = self.build_profile(answers, current_year=current_year)

        results = self.recommenders[mode].recommend(answers, profile, audit_log=audit_log)
        top = results[:top_n]
        records = self._build_records(top, profile, answers)

        logger.info(
            "Recommendation run complete",
            mode=mode.value,
            maturity=profile.maturity.value,
            size=profile.size.value,
            candidates=len(results),
            returned=len(records),
            top=records[0].id if records else None,
        )
        return RecommendationRun(mode=mode, profile=profile, recommendations=records, audit=audit_log)

    def recommend(
        self,
        answers: Optional[Mapping[str, Any]],
        mode: "str | RecommendationMode" = RecommendationMode.COMBINED,
        top_n: Optional[int] = None,
        current_year: Optional[int] = None,
    ) -> list[RecommendationRecord]:
        return self.run(answers, mode=mode, top_n=top_n, current_year=current_year).recommendations

    def _build_records(
        self, results: list[ScoredStrategy], profile: NGOProfile, answers: Mapping[str, Any]
    ) -> list[RecommendationRecord]:
        if not results:
            return []

        top_strategy = self.catalog[results[0].strategy_id]
        return [
            self._build_record(result, self.catalog[result.strategy_id], top_strategy, profile, answers)
            for result in results
        ]

    def _build_record(
        self,
        result: ScoredStrategy,
        strategy: Strategy,
        top_strategy: Strategy,
        profile: NGOProfile,
        answers: Mapping[str, Any],
    ) -> RecommendationRecord:
        assessment = calculate_strategy_fit(strategy, profile, answers)

        if strategy.id == top_strategy.id:
            similarity_details = SimilarityDetails(similarity_score=1.0, synergies=[])
        else:
            similarity_details = SimilarityDetails(
                similarity_score=similarity(top_strategy, strategy),
                synergies=get_synergies(top_strategy, strategy),
            )

        return RecommendationRecord(
            id=strategy.id,
            name=strategy.name,
            description=strategy.description,
            donor_category=strategy.donor_category,
            score=result.score,
            confidence=result.confidence,
            confidence_level=confidence_level(result.confidence),
            criteria=strategy.criteria.snapshot(),
            risk_profile=assessment.risk_profile,
            compliance=assessment.compliance,
            foreign_funding=profile.foreign_funding if strategy.donor_category.is_foundation else None,
            foreign_funding_insights=assessment.foreign_funding_insights,
            fit=assessment.fit,
            timeline_context=timeline_context(strategy),
            implementation_phase=implementation_phase(strategy),
            reasons=fit_reasons(strategy, profile),
            algorithm_type=result.algorithm_type,
            rule=result.rule,
            archetype=result.archetype,
            match_percentage=result.match_percentage,
            consensus=result.consensus,
            similarity=similarity_details,
        )


def recommend(
    answers: Optional[Mapping[str, Any]],
    mode: "str | RecommendationMode" = RecommendationMode.COMBINED,
    top_n: int = 5,
    current_year: Optional[int] = None,
) -> list[RecommendationRecord]:
    """One-shot convenience wrapper around RecommendationEngine."""
    engine = RecommendationEngine(EngineSettings(current_year=current_year, top_n=top_n))
    return engine.recommend(answers, mode=mode)
