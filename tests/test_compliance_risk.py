"""Tests for per-strategy compliance readiness and risk profiles."""

from fundraising_advisor.schemas.enums import RiskLevel
from fundraising_advisor.scorers.compliance_readiness import calculate_compliance_readiness
from fundraising_advisor.scorers.risk_profile import (
    HIGH_EXECUTION_RISK_INSIGHT,
    LOW_EXECUTION_RISK_INSIGHT,
    calculate_risk_profile,
    risk_level,
    tolerance_adjacent,
    tolerance_matches,
)

# ─── Helpers ─────────────────────────────────────────────────────────────────

ESSENTIALS = ["pan", "12a", "80g"]


def _readiness(catalog, aggregator, strategy_id, **answers):
    profile = aggregator.build(answers)
    return calculate_compliance_readiness(catalog[strategy_id], profile, answers)


def _risk(catalog, aggregator, strategy_id, answers):
    profile = aggregator.build(answers)
    return calculate_risk_profile(catalog[strategy_id], profile, answers)


# ─── Compliance readiness ────────────────────────────────────────────────────


class TestComplianceReadiness:
    """Base registrations, strategy prerequisites and general factors."""

    def test_csr_without_csr1_resets(self, catalog, aggregator):
        readiness = _readiness(catalog, aggregator, "csr", ngoComplianceStatus=ESSENTIALS)
        assert readiness.score == 0
        assert not readiness.ready_for_csr

    def test_csr_with_csr1_is_capped(self, catalog, aggregator):
        readiness = _readiness(
            catalog,
            aggregator,
            "csr",
            ngoComplianceStatus=ESSENTIALS + ["csr1"],
            ngoAuditStatus="current",
        )
        assert readiness.score == 10
        assert readiness.ready_for_csr
        assert readiness.audit_status == "current"

    def test_endowment_needs_educational_registration(self, catalog, aggregator):
        """General factors still count after the reset."""
        readiness = _readiness(
            catalog,
            aggregator,
            "endowmentFunds",
            ngoRegistrationType="trust",
            ngoComplianceStatus=["pan", "darpan"],
            ngoAuditStatus="current",
        )
        assert readiness.score == 3

    def test_legacy_with_long_relationships(self, catalog, aggregator):
        readiness = _readiness(
            catalog, aggregator, "legacyGiving", ngoComplianceStatus=ESSENTIALS, ngoDonorRelationshipYears="6"
        )
        assert readiness.score == 9

    def test_legacy_with_short_relationships(self, catalog, aggregator):
        readiness = _readiness(
            catalog, aggregator, "legacyGiving", ngoComplianceStatus=ESSENTIALS, ngoDonorRelationshipYears="2"
        )
        assert readiness.score == 0

    def test_crowdfunding_product(self, catalog, aggregator):
        assert _readiness(catalog, aggregator, "crowdfunding", ngoComplianceStatus=["pan"], ngoHasProduct="yes").score == 4
        assert _readiness(catalog, aggregator, "crowdfunding", ngoComplianceStatus=["pan"]).score == 0

    def test_default_adjustment(self, catalog, aggregator):
        assert _readiness(catalog, aggregator, "eventBased", ngoComplianceStatus=ESSENTIALS).score == 9

    def test_general_factors(self, catalog, aggregator):
        readiness = _readiness(
            catalog,
            aggregator,
            "eventBased",
            ngoComplianceStatus=["itr", "form10b", "darpan"],
            ngoComplianceTeam="outsourced",
        )
        assert readiness.score == 4

    def test_itr_requires_form10b(self, catalog, aggregator):
        assert _readiness(catalog, aggregator, "eventBased", ngoComplianceStatus=["itr"]).score == 0

    def test_essentials_accept_in_process(self, catalog, aggregator):
        readiness = _readiness(
            catalog,
            aggregator,
            "eventBased",
            ngoComplianceStatus=["pan", "12a"],
            ngoComplianceInProcess=["80g", "fcra"],
        )
        assert readiness.has_essentials
        assert readiness.ready_for_fcra

    def test_essentials_need_pan(self, catalog, aggregator):
        readiness = _readiness(catalog, aggregator, "eventBased", ngoComplianceStatus=["12a", "80g"])
        assert not readiness.has_essentials

    def test_never_negative_or_above_ten(self, catalog, aggregator):
        everything = ESSENTIALS + ["csr1", "fcra", "darpan", "itr", "form10b"]
        for strategy in catalog:
            readiness = _readiness(
                catalog,
                aggregator,
                strategy.id,
                ngoComplianceStatus=everything,
                ngoAuditStatus="current",
                ngoComplianceTeam="yes",
            )
            assert 0 <= readiness.score <= 10


# ─── Risk profile ────────────────────────────────────────────────────────────


class TestToleranceMatching:
    def test_exact_tiers(self):
        assert tolerance_matches("riskaverse", 1)
        assert tolerance_matches("riskaverse", 2)
        assert tolerance_matches("moderate", 3)
        assert tolerance_matches("riskseeking", 5)
        assert not tolerance_matches("depends", 3)

    def test_adjacent_tiers(self):
        assert tolerance_adjacent("riskaverse", 3)
        assert tolerance_adjacent("moderate", 2)
        assert tolerance_adjacent("moderate", 4)
        assert not tolerance_adjacent("moderate", 3)

    def test_levels(self):
        assert risk_level(15) == RiskLevel.OPTIMAL
        assert risk_level(10) == RiskLevel.ACCEPTABLE
        assert risk_level(9) == RiskLevel.CAUTIOUS


class TestRiskProfile:
    def test_startup_digital_strategies(self, catalog, aggregator, startup_answers):
        digital = _risk(catalog, aggregator, "digitalFundraising", startup_answers)
        assert digital.score == 11
        assert digital.level == RiskLevel.ACCEPTABLE
        assert digital.maturity_aligned
        assert _risk(catalog, aggregator, "p2p", startup_answers).score == 11

    def test_startup_crowdfunding_is_cautious(self, catalog, aggregator, startup_answers):
        risk = _risk(catalog, aggregator, "crowdfunding", startup_answers)
        assert risk.score == 1
        assert risk.level == RiskLevel.CAUTIOUS
        assert risk.insights == [LOW_EXECUTION_RISK_INSIGHT]

    def test_csr_without_corporate_experience(self, catalog, aggregator, established_csr_answers):
        assert _risk(catalog, aggregator, "csr", established_csr_answers).score == 9

    def test_csr_with_corporate_experience(self, catalog, aggregator, established_csr_answers):
        answers = {
            **established_csr_answers,
            "ngoCSRExperience": "yes",
            "ngoCorporateRelations": "yes",
            "ngoCorporatePartnersCount": "4to10",
        }
        risk = _risk(catalog, aggregator, "csr", answers)
        assert risk.score == 14
        assert risk.level == RiskLevel.ACCEPTABLE

    def test_grants_with_writing_and_compliance_system(self, catalog, aggregator, established_csr_answers):
        answers = {**established_csr_answers, "ngoGrantWriting": "yes", "ngoComplianceSystem": "yes"}
        assert _risk(catalog, aggregator, "grants", answers).score == 14

    def test_clamped_at_zero(self, catalog, aggregator, startup_answers):
        answers = {**startup_answers, "ngoRiskTolerance": "riskseeking"}
        assert _risk(catalog, aggregator, "csr", answers).score == 0

    def test_high_execution_risk_insight(self, catalog, aggregator, startup_answers):
        risk = _risk(catalog, aggregator, "employeeGiving", startup_answers)
        assert risk.execution_risk == 4
        assert HIGH_EXECUTION_RISK_INSIGHT in risk.insights
        assert not risk.maturity_aligned

    def test_bounded_for_every_strategy(self, catalog, aggregator, established_csr_answers):
        for strategy in catalog:
            risk = _risk(catalog, aggregator, strategy.id, established_csr_answers)
            assert 0 <= risk.score <= 20
