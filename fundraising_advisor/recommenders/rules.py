"""
Rule-based recommender.

An ordered set of condition -> strategy-set rules. Matched strategies score 90
and carry the rule's confidence; a strategy matched by several rules keeps the
highest confidence (and that rule's name). When fewer than five strategies
match, the list is topped up in catalog order with eligible strategies that
suit the organisation's maturity and size (score 70, confidence 0.6).
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from fundraising_advisor.constants import (
    HIGH_BUDGET_THRESHOLD,
    RULE_FILL_CONFIDENCE,
    RULE_FILL_SCORE,
    RULE_MATCH_SCORE,
    RULE_MIN_RESULTS,
)
from fundraising_advisor.parsers.answer_values import is_yes
from fundraising_advisor.schemas.enums import AlgorithmType, MaturityStage, SizeClass
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import ScoredStrategy
from fundraising_advisor.scorers.eligibility import check_eligibility, failed_categorical_gate
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog
from fundraising_advisor.utils.logger import get_logger
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

logger = get_logger(__name__)

FILL_RULE_NAME = "maturityAndSizeMatch"


@dataclass(frozen=True)
class DecisionRule:
    """A condition over (answers, profile) that recommends a set of strategies."""

    name: str
    description: str
    condition: Callable[[Mapping[str, Any], NGOProfile], bool]
    strategy_ids: tuple[str, ...]
    confidence: float

    def matches(self, answers: Mapping[str, Any], profile: NGOProfile) -> bool:
        return self.condition(answers, profile)


DECISION_RULES: tuple[DecisionRule, ...] = (
    DecisionRule(
        name="smallStartup",
        description="Small startups",
        condition=lambda a, p: p.maturity == MaturityStage.STARTUP and p.size == SizeClass.SMALL,
        strategy_ids=("p2p", "digitalFundraising", "crowdfunding"),
        confidence=0.85,
    ),
    DecisionRule(
        name="smallDigitallyCapable",
        description="Small NGOs with good digital capacity",
        condition=lambda a, p: p.size == SizeClass.SMALL and p.digital_capacity >= 4,
        strategy_ids=("digitalFundraising", "p2p", "crowdfunding"),
        confidence=0.8,
    ),
    DecisionRule(
        name="educationalInstitution",
        description="Registered educational institutions",
        condition=lambda a, p: p.registration_type == "educational",
        strategy_ids=("endowmentFunds", "grants", "eventBased"),
        confidence=0.9,
    ),
    DecisionRule(
        name="establishedWithCSR",
        description="Established NGOs with CSR-1 registration",
        condition=lambda a, p: p.maturity == MaturityStage.ESTABLISHED and p.has_compliance("csr1"),
        strategy_ids=("csr", "employeeGiving", "hniGiving"),
        confidence=0.85,
    ),
    DecisionRule(
        name="fcraRegistered",
        description="Medium or large NGOs with FCRA registration",
        condition=lambda a, p: p.size in (SizeClass.MEDIUM, SizeClass.LARGE) and p.has_compliance("fcra"),
        strategy_ids=("foreignGrants", "foreignRFPs", "grants"),
        confidence=0.9,
    ),
    DecisionRule(
        name="highBudget",
        description="Annual budget above 1 crore",
        condition=lambda a, p: p.budget > HIGH_BUDGET_THRESHOLD,
        strategy_ids=("hniGiving", "grants", "csr"),
        confidence=0.8,
    ),
    DecisionRule(
        name="governmentRelations",
        description="Existing government relationships",
        condition=lambda a, p: is_yes(a.get("ngoGovernmentRelations")),
        strategy_ids=("governmentGrants", "grants"),
        confidence=0.75,
    ),
)


class RuleRecommender:
    """Applies explicit decision rules, then tops up with suitable strategies."""

    algorithm_type = AlgorithmType.RULE

    def __init__(
        self,
        catalog: Optional[StrategyCatalog] = None,
        rules: tuple[DecisionRule, ...] = DECISION_RULES,
    ):
        self.catalog = catalog or load_catalog()
        self.rules = rules

    def recommend(
        self,
        answers: Mapping[str, Any],
        profile: NGOProfile,
        audit_log: Optional[RecommendationAuditLog] = None,
    ) -> list[ScoredStrategy]:
        algorithm = self.algorithm_type.value
        matched: dict[str, ScoredStrategy] = {}

        for rule in self.rules:
            if not rule.matches(answers, profile):
                continue
            for strategy_id in rule.strategy_ids:
                strategy = self.catalog.get(strategy_id)
                if strategy is None:
                    logger.warning("Rule references unknown strategy", rule=rule.name, strategy=strategy_id)
                    continue

                gate = failed_categorical_gate(strategy, profile)
                if gate is not None:
                    logger.debug("Strategy excluded", algorithm=algorithm, strategy=strategy_id, gate=gate)
                    if audit_log is not None:
                        audit_log.log(algorithm, strategy_id, AuditDecision.EXCLUDED, reason=gate)
                    continue

                existing = matched.get(strategy_id)
                if existing is not None:
                    if rule.confidence <= existing.confidence:
                        continue
                    # The first matching rule stays attributed; only the confidence rises.
                    matched[strategy_id] = existing.model_copy(update={"confidence": rule.confidence})
                else:
                    matched[strategy_id] = ScoredStrategy(
                        strategy_id=strategy_id,
                        score=RULE_MATCH_SCORE,
                        confidence=rule.confidence,
                        algorithm_type=self.algorithm_type,
                        rule=rule.name,
                    )
                if audit_log is not None:
                    audit_log.log(algorithm, strategy_id, AuditDecision.MATCHED, reason=rule.name, confidence=rule.confidence)

        results = list(matched.values())

        if len(results) < RULE_MIN_RESULTS:
            for strategy in self.catalog:
                if len(results) >= RULE_MIN_RESULTS:
                    break
                if strategy.id in matched or check_eligibility(strategy, profile) is not None:
                    continue
                results.append(
                    ScoredStrategy(
                        strategy_id=strategy.id,
                        score=RULE_FILL_SCORE,
                        confidence=RULE_FILL_CONFIDENCE,
                        algorithm_type=self.algorithm_type,
                        rule=FILL_RULE_NAME,
                    )
                )
                if audit_log is not None:
                    audit_log.log(algorithm, strategy.id, AuditDecision.FILLED, reason=FILL_RULE_NAME)

        results.sort(key=lambda r: r.confidence, reverse=True)
        logger.debug("Rule recommender finished", matched=len(matched), results=len(results))
        return results
