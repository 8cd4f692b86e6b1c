"""Shared contract for the independent recommenders."""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import ScoredStrategy
from fundraising_advisor.utils.scoring_audit import RecommendationAuditLog


@runtime_checkable
class Recommender(Protocol):
    """A recommendation algorithm.

    Implementations are stateless between calls: everything they need comes
    from the answer set, the derived profile and their catalog.
    """

    algorithm_type: AlgorithmType

    def recommend(
        self,
        answers: Mapping[str, Any],
        profile: NGOProfile,
        audit_log: Optional[RecommendationAuditLog] = None,
    ) -> list[ScoredStrategy]: ...
