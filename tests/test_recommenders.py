"""
Tests for the criteria-weighted and rule-based recommenders.

Expected scores are worked by hand from the packaged catalog.
"""

import pytest
from fundraising_advisor.recommenders.base import Recommender
from fundraising_advisor.recommenders.rules import DECISION_RULES, FILL_RULE_NAME, DecisionRule, RuleRecommender
from fundraising_advisor.recommenders.scoring import ScoringRecommender
from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

# ─── Helpers ─────────────────────────────────────────────────────────────────


def _ids(results):
    return [r.strategy_id for r in results]


def _by_id(results):
    return {r.strategy_id: r for r in results}


# ─── Scoring ─────────────────────────────────────────────────────────────────


class TestScoringRecommender:
    def test_satisfies_protocol(self, catalog):
        assert isinstance(ScoringRecommender(catalog), Recommender)

    def test_startup_scores(self, catalog, build_profile, startup_answers):
        """Only three strategies admit startups; each is scored from its criteria."""
        results = ScoringRecommender(catalog).recommend(startup_answers, build_profile(**startup_answers))

        assert _ids(results) == ["digitalFundraising", "p2p", "crowdfunding"]
        assert [r.score for r in results] == [58, 53, 39]
        assert [r.confidence for r in results] == pytest.approx([0.88, 0.83, 0.69])
        assert all(r.algorithm_type == AlgorithmType.SCORING for r in results)

    def test_excludes_gated_strategies(self, catalog, build_profile, educational_answers):
        audit_log = RecommendationAuditLog()
        results = ScoringRecommender(catalog).recommend(
            educational_answers, build_profile(**educational_answers), audit_log
        )
        ids = _ids(results)
        assert "endowmentFunds" in ids
        assert "csr" not in ids
        assert "foreignGrants" not in ids
        reasons = {e.strategy_id: e.reason for e in audit_log.excluded("scoring")}
        assert reasons["csr"] == "csr1"
        assert reasons["foreignGrants"] == "fcra"
        assert reasons["crowdfunding"] == "maturity"

    def test_endowment_needs_educational_registration(self, catalog, build_profile, established_csr_answers):
        results = ScoringRecommender(catalog).recommend(
            established_csr_answers, build_profile(**established_csr_answers)
        )
        assert "endowmentFunds" not in _ids(results)

    def test_sorted_and_bounded(self, catalog, build_profile, established_csr_answers):
        results = ScoringRecommender(catalog).recommend(
            established_csr_answers, build_profile(**established_csr_answers)
        )
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        for r in results:
            assert 0 <= r.score <= 100
            assert r.confidence <= 0.95

    def test_confidence_capped(self, catalog, build_profile):
        """A fully capable volunteer org pushes p2p over 65, so confidence hits the cap."""
        answers = {
            "ngoYear": 2024,
            "ngoVolunteers": "yes",
            "ngoVolunteersCount": "60",
            "ngoVolunteerFundraising": "yes",
            "ngoWebsite": "yes",
            "ngoSocialMedia": "yes",
            "ngoDonationPage": "yes",
            "ngoEmailMarketing": "yes",
            "ngoOnlinePlatforms": "yes",
        }
        results = _by_id(ScoringRecommender(catalog).recommend(answers, build_profile(**answers)))
        assert results["p2p"].score == 77
        assert results["p2p"].confidence == pytest.approx(0.95)

    WEB_PRESENCE_FLAGS = ("ngoWebsite", "ngoSocialMedia", "ngoDonationPage", "ngoEmailMarketing")

    @staticmethod
    def _digital_score(catalog, build_profile, answers):
        results = _by_id(ScoringRecommender(catalog).recommend(answers, build_profile(**answers)))
        return results["digitalFundraising"].score

    @pytest.mark.parametrize("flag", WEB_PRESENCE_FLAGS)
    def test_web_presence_never_lowers_digital_score(self, catalog, build_profile, startup_answers, flag):
        base = {**startup_answers, **{f: "no" for f in self.WEB_PRESENCE_FLAGS}}
        before = self._digital_score(catalog, build_profile, base)
        after = self._digital_score(catalog, build_profile, {**base, flag: "yes"})
        assert after >= before

    def test_web_presence_cumulative(self, catalog, build_profile, startup_answers):
        answers = {**startup_answers, **{f: "no" for f in self.WEB_PRESENCE_FLAGS}}
        scores = [self._digital_score(catalog, build_profile, answers)]
        for flag in self.WEB_PRESENCE_FLAGS:
            answers = {**answers, flag: "yes"}
            scores.append(self._digital_score(catalog, build_profile, answers))
        assert scores == sorted(scores)
        assert scores[-1] > scores[0]


# ─── Rules ───────────────────────────────────────────────────────────────────


class TestRuleRecommender:
    def test_rule_order(self):
        assert [r.name for r in DECISION_RULES] == [
            "smallStartup",
            "smallDigitallyCapable",
            "educationalInstitution",
            "establishedWithCSR",
            "fcraRegistered",
            "highBudget",
            "governmentRelations",
        ]

    def test_small_startup(self, catalog, build_profile, startup_answers):
        """No other strategy suits a startup, so no gap filling happens."""
        results = RuleRecommender(catalog).recommend(startup_answers, build_profile(**startup_answers))
        assert _ids(results) == ["p2p", "digitalFundraising", "crowdfunding"]
        assert all(r.score == 90 and r.confidence == 0.85 for r in results)
        assert {r.rule for r in results} == {"smallStartup"}

    def test_established_with_csr(self, catalog, build_profile, established_csr_answers):
        audit_log = RecommendationAuditLog()
        results = RuleRecommender(catalog).recommend(
            established_csr_answers, build_profile(**established_csr_answers), audit_log
        )
        assert _ids(results) == ["csr", "employeeGiving", "hniGiving", "grants", "p2p"]
        by_id = _by_id(results)
        assert by_id["csr"].rule == "establishedWithCSR"
        assert by_id["csr"].confidence == 0.85
        assert by_id["grants"].rule == "highBudget"
        assert by_id["grants"].confidence == 0.8
        assert by_id["p2p"].rule == FILL_RULE_NAME
        assert by_id["p2p"].score == 70
        assert by_id["p2p"].confidence == 0.6
        assert [e.strategy_id for e in audit_log.filter(decision=AuditDecision.FILLED)] == ["p2p"]

    def test_educational_excludes_csr(self, catalog, build_profile, educational_answers):
        audit_log = RecommendationAuditLog()
        results = RuleRecommender(catalog).recommend(
            educational_answers, build_profile(**educational_answers), audit_log
        )
        assert _ids(results) == ["endowmentFunds", "grants", "eventBased", "hniGiving", "p2p"]
        assert _by_id(results)["grants"].rule == "educationalInstitution"
        excluded = audit_log.excluded("rule")
        assert [(e.strategy_id, e.reason) for e in excluded] == [("csr", "csr1")]

    def test_fcra_rule_requires_registration_gate(self, catalog, build_profile, established_csr_answers):
        answers = {**established_csr_answers, "ngoComplianceStatus": ["pan", "fcra"]}
        results = _by_id(RuleRecommender(catalog).recommend(answers, build_profile(**answers)))
        assert results["foreignGrants"].confidence == 0.9
        assert results["foreignGrants"].rule == "fcraRegistered"
        assert "csr" not in results

    def test_government_relations(self, catalog, build_profile, established_csr_answers):
        answers = {**established_csr_answers, "ngoGovernmentRelations": "yes"}
        results = _by_id(RuleRecommender(catalog).recommend(answers, build_profile(**answers)))
        assert results["governmentGrants"].rule == "governmentRelations"
        assert results["governmentGrants"].confidence == 0.75

    def test_custom_rules_and_unknown_strategy(self, catalog, build_profile):
        rules = (
            DecisionRule(
                name="always",
                description="Matches everything",
                condition=lambda a, p: True,
                strategy_ids=("doesNotExist", "p2p"),
                confidence=0.7,
            ),
        )
        answers = {"ngoYear": 2024}
        results = RuleRecommender(catalog, rules=rules).recommend(answers, build_profile(**answers))
        assert results[0].strategy_id == "p2p"
        assert results[0].rule == "always"
        assert "doesNotExist" not in _ids(results)

    def test_higher_confidence_keeps_first_rule(self, catalog, build_profile):
        rules = (
            DecisionRule(
                name="first",
                description="Weaker rule listed first",
                condition=lambda a, p: True,
                strategy_ids=("p2p",),
                confidence=0.6,
            ),
            DecisionRule(
                name="second",
                description="Stronger rule listed later",
                condition=lambda a, p: True,
                strategy_ids=("p2p",),
                confidence=0.9,
            ),
        )
        audit_log = RecommendationAuditLog()
        answers = {"ngoYear": 2024}
        results = _by_id(RuleRecommender(catalog, rules=rules).recommend(answers, build_profile(**answers), audit_log))
        assert results["p2p"].rule == "first"
        assert results["p2p"].confidence == 0.9
        assert results["p2p"].score == 90
        matched = audit_log.filter(decision=AuditDecision.MATCHED, strategy_id="p2p")
        assert [e.reason for e in matched] == ["first", "second"]

    def test_no_duplicates(self, catalog, build_profile, established_csr_answers):
        answers = {
            **established_csr_answers,
            "ngoComplianceStatus": ["pan", "csr1", "fcra"],
            "ngoGovernmentRelations": "yes",
        }
        ids = _ids(RuleRecommender(catalog).recommend(answers, build_profile(**answers)))
        assert len(ids) == len(set(ids))
