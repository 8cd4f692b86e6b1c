"""Tests for merging per-algorithm verdicts."""

import pytest
from fundraising_advisor.recommenders.ensemble import ENSEMBLE_AUDIT_NAME, EnsembleRecommender, merge_results
from fundraising_advisor.recommenders.rules import RuleRecommender
from fundraising_advisor.recommenders.scoring import ScoringRecommender
from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.schemas.recommendation import ScoredStrategy
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

# ─── Helpers ─────────────────────────────────────────────────────────────────


def _verdict(score, confidence, algorithm_type=AlgorithmType.SCORING, **extra):
    return ScoredStrategy(
        strategy_id="p2p",
        score=score,
        confidence=confidence,
        algorithm_type=algorithm_type,
        **extra,
    )


# ─── merge_results ───────────────────────────────────────────────────────────


class TestMergeResults:
    def test_single_verdict(self):
        merged = merge_results([_verdict(80, 0.9)])
        assert merged.score == 80
        assert merged.confidence == pytest.approx(0.72)
        assert merged.consensus.num_algorithms_agreeing == 1
        assert merged.consensus.original_scores == [80]

    def test_confidence_weighted_score(self):
        merged = merge_results(
            [
                _verdict(58, 0.88),
                _verdict(90, 0.85, AlgorithmType.RULE, rule="smallStartup"),
                _verdict(57, 0.85 * 2 / 3, AlgorithmType.COLLABORATIVE, archetype="Digital-First Small NGO"),
            ]
        )
        assert merged.score == 70
        assert merged.confidence == pytest.approx(0.7656, abs=1e-4)
        assert merged.consensus.algorithm_types == [
            AlgorithmType.SCORING,
            AlgorithmType.RULE,
            AlgorithmType.COLLABORATIVE,
        ]

    def test_confidence_capped(self):
        merged = merge_results(
            [
                _verdict(90, 0.95),
                _verdict(90, 0.95, AlgorithmType.RULE),
                _verdict(90, 0.95, AlgorithmType.COLLABORATIVE),
            ]
        )
        assert merged.confidence == pytest.approx(0.95)

    def test_zero_confidence_falls_back_to_mean(self):
        merged = merge_results([_verdict(40, 0.0), _verdict(60, 0.0, AlgorithmType.RULE)])
        assert merged.score == 50
        assert merged.confidence == 0

    def test_first_verdict_supplies_attribution(self):
        merged = merge_results(
            [
                _verdict(90, 0.85, AlgorithmType.RULE, rule="smallStartup"),
                _verdict(57, 0.5, AlgorithmType.COLLABORATIVE, archetype="Digital-First Small NGO"),
            ]
        )
        assert merged.algorithm_type == AlgorithmType.RULE
        assert merged.rule == "smallStartup"
        assert merged.archetype is None

    def test_agreement_never_far_below_weakest_input(self):
        """Agreement across algorithms keeps confidence near or above the weakest verdict."""
        inputs = [_verdict(60, 0.6), _verdict(70, 0.7, AlgorithmType.RULE), _verdict(80, 0.8, AlgorithmType.COLLABORATIVE)]
        merged = merge_results(inputs)
        assert merged.confidence >= 0.9 * min(r.confidence for r in inputs)

    def test_inputs_untouched(self):
        verdict = _verdict(80, 0.9)
        merge_results([verdict])
        assert verdict.consensus is None


# ─── EnsembleRecommender ─────────────────────────────────────────────────────


class TestEnsembleRecommender:
    def test_startup_consensus(self, catalog, build_profile, startup_answers):
        results = EnsembleRecommender(catalog=catalog).recommend(startup_answers, build_profile(**startup_answers))

        assert [r.strategy_id for r in results] == ["digitalFundraising", "p2p", "crowdfunding"]
        assert [r.score for r in results] == [70, 68, 64]
        for r in results:
            assert r.consensus.num_algorithms_agreeing == 3
            assert r.algorithm_type == AlgorithmType.SCORING

    def test_audit_records_every_merge(self, catalog, build_profile, established_csr_answers):
        audit_log = RecommendationAuditLog()
        results = EnsembleRecommender(catalog=catalog).recommend(
            established_csr_answers, build_profile(**established_csr_answers), audit_log
        )
        merged = audit_log.filter(algorithm=ENSEMBLE_AUDIT_NAME, decision=AuditDecision.MERGED)
        assert len(merged) == len(results)
        assert {e.strategy_id for e in merged} == {r.strategy_id for r in results}

    def test_sorted_by_score(self, catalog, build_profile, educational_answers):
        results = EnsembleRecommender(catalog=catalog).recommend(educational_answers, build_profile(**educational_answers))
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert len({r.strategy_id for r in results}) == len(results)

    def test_custom_recommenders(self, catalog, build_profile, startup_answers):
        ensemble = EnsembleRecommender(recommenders=[RuleRecommender(catalog), ScoringRecommender(catalog)])
        results = ensemble.recommend(startup_answers, build_profile(**startup_answers))
        top = results[0]
        assert top.algorithm_type == AlgorithmType.RULE
        assert top.consensus.num_algorithms_agreeing == 2
