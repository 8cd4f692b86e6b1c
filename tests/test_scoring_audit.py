"""Tests for the recommendation audit trail."""

import json

from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.utils.scoring_audit import AuditDecision, AuditEntry, RecommendationAuditLog


class TestAuditEntry:
    def test_serializes_nested_values(self):
        entry = AuditEntry(
            algorithm="ensemble",
            strategy_id="p2p",
            decision=AuditDecision.MERGED,
            details={"algorithms": (AlgorithmType.SCORING, AlgorithmType.RULE), "extra": {"ids": {"a"}}},
        )
        data = entry.to_dict()
        assert data["decision"] == "merged"
        assert data["details"]["algorithms"] == ["scoring", "rule"]
        assert data["details"]["extra"] == {"ids": ["a"]}


class TestRecommendationAuditLog:
    def test_filter_and_summary(self):
        audit_log = RecommendationAuditLog()
        audit_log.log("rule", "csr", AuditDecision.EXCLUDED, reason="csr1")
        audit_log.log("rule", "p2p", AuditDecision.FILLED, reason="maturityAndSizeMatch")
        audit_log.log("scoring", "csr", AuditDecision.EXCLUDED, reason="csr1")

        assert len(audit_log) == 3
        assert [e.algorithm for e in audit_log.excluded()] == ["rule", "scoring"]
        assert len(audit_log.excluded("rule")) == 1
        assert audit_log.filter(strategy_id="p2p")[0].reason == "maturityAndSizeMatch"
        assert audit_log.get_summary() == {"excluded": 2, "matched": 0, "filled": 1, "merged": 0}

    def test_entries_is_a_copy(self):
        audit_log = RecommendationAuditLog()
        audit_log.log("rule", "csr", AuditDecision.MATCHED, reason="establishedWithCSR", confidence=0.85)
        audit_log.entries.clear()
        assert len(audit_log) == 1
        assert audit_log.entries[0].details == {"confidence": 0.85}

    def test_export(self, tmp_path):
        audit_log = RecommendationAuditLog()
        audit_log.log("collaborative", "grants", AuditDecision.MATCHED, reason="International Development NGO")
        path = tmp_path / "nested" / "audit.json"
        audit_log.export_to_json(path)

        data = json.loads(path.read_text())
        assert data["summary"]["matched"] == 1
        assert data["entries"][0]["reason"] == "International Development NGO"
