"""
Recommendation Audit Trail - Captures the decisions behind a recommendation run.

Each recommender can record why a strategy was dropped or added:
- Which eligibility gate excluded it
- Which rule or archetype matched it
- Whether it was a gap fill rather than a real match
- How the ensemble merged per-algorithm results

A fresh log is created per engine run, so nothing leaks between requests.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AuditDecision(Enum):
    """What happened to a strategy at a given step."""

    EXCLUDED = "excluded"  # Failed an eligibility gate
    MATCHED = "matched"  # Triggered by a rule or archetype
    FILLED = "filled"  # Added to reach the minimum rule result count
    MERGED = "merged"  # Combined across algorithms by the ensemble


@dataclass
class AuditEntry:
    """A single decision recorded during a run."""

    algorithm: str
    strategy_id: str
    decision: AuditDecision
    reason: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "algorithm": self.algorithm,
            "strategy_id": self.strategy_id,
            "decision": self.decision.value,
            "reason": self.reason,
            "details": self._serialize_value(self.details),
        }

    def _serialize_value(self, value: Any) -> Any:
        """Serialize value for JSON output."""
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return str(value)


class RecommendationAuditLog:
    """Collects audit entries for one recommendation run.

    Usage:
        audit_log = RecommendationAuditLog()

        # Inside a recommender
        audit_log.log(
            algorithm="rule",
            strategy_id="csr",
            decision=AuditDecision.EXCLUDED,
            reason="csr1",
        )

        # After the run
        exclusions = audit_log.excluded("rule")
        audit_log.export_to_json("/tmp/recommendation_audit.json")
    """

    def __init__(self):
        self._entries: list[AuditEntry] = []

    def log(
        self,
        algorithm: str,
        strategy_id: str,
        decision: AuditDecision,
        reason: str = "",
        **details: Any,
    ) -> AuditEntry:
        """Record a decision.

        Args:
            algorithm: Algorithm type that made the decision
            strategy_id: Strategy the decision concerns
            decision: What happened
            reason: Gate, rule or archetype name
            **details: Extra values (confidence, score, ...)

        Returns:
            The created AuditEntry
        """
        entry = AuditEntry(
            algorithm=algorithm,
            strategy_id=strategy_id,
            decision=decision,
            reason=reason,
            details=details,
        )
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> list[AuditEntry]:
        return list(self._entries)

    def filter(
        self,
        algorithm: Optional[str] = None,
        decision: Optional[AuditDecision] = None,
        strategy_id: Optional[str] = None,
    ) -> list[AuditEntry]:
        """Entries matching every given criterion."""
        return [
            e
            for e in self._entries
            if (algorithm is None or e.algorithm == algorithm)
            and (decision is None or e.decision == decision)
            and (strategy_id is None or e.strategy_id == strategy_id)
        ]

    def excluded(self, algorithm: Optional[str] = None) -> list[AuditEntry]:
        return self.filter(algorithm=algorithm, decision=AuditDecision.EXCLUDED)

    def get_summary(self) -> dict[str, int]:
        """Count of entries per decision type."""
        summary = {d.value: 0 for d in AuditDecision}
        for entry in self._entries:
            summary[entry.decision.value] += 1
        return summary

    def to_dict(self) -> dict:
        return {
            "summary": self.get_summary(),
            "entries": [e.to_dict() for e in self._entries],
        }

    def export_to_json(self, path: str | Path) -> None:
        """Write the audit log to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Exported {len(self._entries)} audit entries to {path}")

    def __len__(self) -> int:
        return len(self._entries)
