from fundraising_advisor.utils.logger import configure_global_logging, get_logger
from fundraising_advisor.utils.numbers import clamp, round_half_up
from fundraising_advisor.utils.scoring_audit import AuditDecision, AuditEntry, RecommendationAuditLog

__all__ = [
    "AuditDecision",
    "AuditEntry",
    "RecommendationAuditLog",
    "clamp",
    "configure_global_logging",
    "get_logger",
    "round_half_up",
]
