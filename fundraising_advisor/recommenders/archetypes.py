"""Archetype (collaborative) recommender.

Named NGO archetypes act like user clusters: the organisation is compared
against each archetype's declared predicates, and archetypes it matches at
least halfway contribute their recommended strategies.

Usage:
    from fundraising_advisor.recommenders.archetypes import load_archetypes

    archetypes = load_archetypes()
    # archetypes[0].name == "Digital-First Small NGO"
"""

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fundraising_advisor.config import get_data_dir
from fundraising_advisor.constants import ARCHETYPE_MIN_MATCH, ARCHETYPE_SCORE_SCALE
from fundraising_advisor.parsers.answer_values import is_yes
from fundraising_advisor.schemas.enums import AlgorithmType
from fundraising_advisor.schemas.profile import NGOProfile
from fundraising_advisor.schemas.recommendation import ScoredStrategy
from fundraising_advisor.scorers.eligibility import failed_categorical_gate
from fundraising_advisor.scorers.strategy_catalog import StrategyCatalog, load_catalog
from fundraising_advisor.utils.numbers import round_half_up
from fundraising_advisor.utils.scoring_audit import AuditDecision, RecommendationAuditLog

logger = logging.getLogger(__name__)

ARCHETYPES_FILENAME = "archetypes.yaml"

Predicate = Callable[[Any, NGOProfile, Mapping[str, Any]], bool]


def _any_of(expected: list, actual) -> bool:
    return any(value in actual for value in expected)


# Predicate key -> (expected value, profile, answers) -> satisfied
PREDICATES: dict[str, Predicate] = {
    "size": lambda expected, p, a: p.size.value in expected,
    "maturity": lambda expected, p, a: p.maturity.value in expected,
    "registration_type": lambda expected, p, a: p.registration_type in expected,
    "scope": lambda expected, p, a: p.scope in expected,
    "focus": lambda expected, p, a: _any_of(expected, p.primary_beneficiaries),
    "beneficiaries": lambda expected, p, a: _any_of(expected, p.primary_beneficiaries),
    "location": lambda expected, p, a: _any_of(expected, p.locations),
    "digital_presence": lambda expected, p, a: is_yes(a.get("ngoWebsite")) == expected,
    "volunteers": lambda expected, p, a: is_yes(a.get("ngoVolunteers")) == expected,
    "csr_compliance": lambda expected, p, a: p.has_compliance("csr1") == expected,
    "fcra_compliance": lambda expected, p, a: p.has_compliance("fcra") == expected,
}

BOOLEAN_PREDICATES = frozenset({"digital_presence", "volunteers", "csr_compliance", "fcra_compliance"})


class Archetype(BaseModel):
    """A named cluster of NGO characteristics with its recommended strategies."""

    model_config = ConfigDict(frozen=True)

    name: str
    matches: dict[str, Any] = Field(..., description="Predicate key -> expected value(s)")
    recommended_strategies: tuple[str, ...]
    confidence: float = Field(..., ge=0, le=1)

    @field_validator("matches")
    @classmethod
    def _check_predicates(cls, matches: dict[str, Any]) -> dict[str, Any]:
        if not matches:
            raise ValueError("archetype declares no predicates")
        unknown = set(matches) - set(PREDICATES)
        if unknown:
            raise ValueError(f"unknown predicates: {sorted(unknown)}")
        for key, expected in matches.items():
            if key in BOOLEAN_PREDICATES:
                if not isinstance(expected, bool):
                    raise ValueError(f"predicate {key} expects a boolean")
            elif not isinstance(expected, list) or not expected:
                raise ValueError(f"predicate {key} expects a non-empty list")
        return matches

    def match_percentage(self, profile: NGOProfile, answers: Mapping[str, Any]) -> float:
        """Share of declared predicates the organisation satisfies (0-1)."""
        satisfied = sum(1 for key, expected in self.matches.items() if PREDICATES[key](expected, profile, answers))
        return satisfied / len(self.matches)


def load_archetypes_file(path: Path, catalog: Optional[StrategyCatalog] = None) -> tuple[Archetype, ...]:
    """Parse an archetype YAML file and check its strategy references."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    entries = raw.get("archetypes")
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"Archetype file {path} has no 'archetypes' list")

    archetypes = []
    for index, entry in enumerate(entries):
        try:
            archetypes.append(Archetype.model_validate(entry))
        except ValidationError as e:
            name = entry.get("name", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            raise ValueError(f"Invalid archetype {name} in {path}: {e}") from e

    names = [a.name for a in archetypes]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate archetype names in {path}")

    if catalog is not None:
        for archetype in archetypes:
            unknown = [s for s in archetype.recommended_strategies if s not in catalog]
            if unknown:
                raise ValueError(f"Archetype {archetype.name} recommends unknown strategies: {unknown}")

    return tuple(archetypes)


# Module-level cache, keyed by data directory
_archetype_cache: dict[Path, tuple[Archetype, ...]] = {}


def load_archetypes(data_dir: Optional[Path] = None) -> tuple[Archetype, ...]:
    """Load and cache archetypes, validated against the catalog in the same directory."""
    data_dir = Path(data_dir) if data_dir is not None else get_data_dir()
    cached = _archetype_cache.get(data_dir)
    if cached is not None:
        return cached

    path = data_dir / ARCHETYPES_FILENAME
    if not path.exists():
        raise FileNotFoundError(f"Archetype definitions not found at {path}")

    archetypes = load_archetypes_file(path, catalog=load_catalog(data_dir))
    _archetype_cache[data_dir] = archetypes
    logger.info(f"Loaded {len(archetypes)} NGO archetypes from {path}")
    return archetypes


def clear_cache():
    """Clear the archetype cache (useful for testing)."""
    _archetype_cache.clear()


class CollaborativeRecommender:
    """Recommends what archetypes resembling the organisation typically use.

    confidence = archetype confidence x match percentage
    score      = round(85 x match percentage)

    A strategy suggested by several archetypes keeps the highest-confidence
    attribution.
    """

    algorithm_type = AlgorithmType.COLLABORATIVE

    def __init__(
        self,
        catalog: Optional[StrategyCatalog] = None,
        archetypes: Optional[tuple[Archetype, ...]] = None,
    ):
        self.catalog = catalog or load_catalog()
        self.archetypes = archetypes if archetypes is not None else load_archetypes()

    def recommend(
        self,
        answers: Mapping[str, Any],
        profile: NGOProfile,
        audit_log: Optional[RecommendationAuditLog] = None,
    ) -> list[ScoredStrategy]:
        algorithm = self.algorithm_type.value
        matched: dict[str, ScoredStrategy] = {}

        for archetype in self.archetypes:
            pct = archetype.match_percentage(profile, answers)
            if pct < ARCHETYPE_MIN_MATCH:
                continue

            confidence = archetype.confidence * pct
            for strategy_id in archetype.recommended_strategies:
                strategy = self.catalog.get(strategy_id)
                if strategy is None:
                    continue

                gate = failed_categorical_gate(strategy, profile)
                if gate is not None:
                    logger.debug(f"{algorithm}: {strategy_id} excluded by {gate}")
                    if audit_log is not None:
                        audit_log.log(algorithm, strategy_id, AuditDecision.EXCLUDED, reason=gate)
                    continue

                existing = matched.get(strategy_id)
                if existing is not None:
                    if confidence <= existing.confidence:
                        continue
                    # Score stays from the first archetype that matched.
                    matched[strategy_id] = existing.model_copy(
                        update={
                            "confidence": confidence,
                            "archetype": archetype.name,
                            "match_percentage": round_half_up(pct * 100),
                        }
                    )
                else:
                    matched[strategy_id] = ScoredStrategy(
                        strategy_id=strategy_id,
                        score=round_half_up(ARCHETYPE_SCORE_SCALE * pct),
                        confidence=confidence,
                        algorithm_type=self.algorithm_type,
                        archetype=archetype.name,
                        match_percentage=round_half_up(pct * 100),
                    )
                if audit_log is not None:
                    audit_log.log(
                        algorithm,
                        strategy_id,
                        AuditDecision.MATCHED,
                        reason=archetype.name,
                        match_percentage=round_half_up(pct * 100),
                    )

        results = sorted(matched.values(), key=lambda r: r.confidence, reverse=True)
        logger.debug(f"Collaborative recommender matched {len(results)} strategies")
        return results
