"""Shared fixtures for fundraising advisor tests.

All profiles are derived against a pinned reference year so that maturity
does not drift with the wall clock.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path so tests run without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from fundraising_advisor.config import EngineSettings  # noqa: E402
from fundraising_advisor.engine import RecommendationEngine  # noqa: E402
from fundraising_advisor.parsers.ngo_profile_aggregator import NGOProfileAggregator  # noqa: E402
from fundraising_advisor.scorers.strategy_catalog import load_catalog  # noqa: E402

CURRENT_YEAR = 2025


@pytest.fixture
def settings():
    return EngineSettings(current_year=CURRENT_YEAR)


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def aggregator(settings):
    return NGOProfileAggregator(settings)


@pytest.fixture
def build_profile(aggregator):
    """Derive a profile from keyword answers: build_profile(ngoYear=2020, ...)."""

    def _build(**answers):
        return aggregator.build(answers)

    return _build


@pytest.fixture
def engine(settings):
    return RecommendationEngine(settings)


@pytest.fixture
def startup_answers():
    """One-year-old, two-person trust with a basic web presence."""
    return {
        "ngoYear": CURRENT_YEAR - 1,
        "ngoBudget": "50000",
        "ngoStaff": "2",
        "ngoRegistrationType": "trust",
        "ngoComplianceStatus": ["pan"],
        "ngoWebsite": "yes",
        "ngoSocialMedia": "yes",
    }


@pytest.fixture
def established_csr_answers():
    """25-year-old, large trust registered for CSR funding (budget: 5 crore)."""
    return {
        "ngoYear": CURRENT_YEAR - 25,
        "ngoBudget": "50000000",
        "ngoStaff": "120",
        "ngoRegistrationType": "trust",
        "ngoComplianceStatus": ["pan", "12a", "80g", "csr1"],
        "ngoScope": "national",
    }


@pytest.fixture
def educational_answers(established_csr_answers):
    """Established, large educational institution without CSR-1."""
    return {
        **established_csr_answers,
        "ngoRegistrationType": "educational",
        "ngoComplianceStatus": ["pan", "12a", "80g"],
    }
