"""Tests for mission, beneficiary and location alignment."""

import pytest
from fundraising_advisor.scorers.location_impact import calculate_location_impact, get_location_insights
from fundraising_advisor.scorers.mission_alignment import (
    analyze_mission_alignment,
    calculate_beneficiary_alignment,
    calculate_mission_alignment,
)

LONG_MISSION = "We work with families across districts to improve learning outcomes. " * 4


class TestMissionAlignment:
    def test_endowment_requires_educational(self, catalog, build_profile):
        endowment = catalog["endowmentFunds"]
        assert calculate_mission_alignment(endowment, build_profile(ngoRegistrationType="educational")) == 5
        assert calculate_mission_alignment(endowment, build_profile(ngoRegistrationType="trust")) == 0

    def test_institutional_depth_and_breadth(self, catalog, build_profile):
        profile = build_profile(
            ngoMission=LONG_MISSION,
            ngoPrimaryBeneficiaries=["children", "women"],
            ngoSecondaryBeneficiaries=["elderly", "youth"],
        )
        assert len(LONG_MISSION) > 200
        assert calculate_mission_alignment(catalog["csr"], profile) == 4

    def test_short_mission_narrow_beneficiaries(self, catalog, build_profile):
        profile = build_profile(ngoMission="Help kids", ngoPrimaryBeneficiaries=["children"])
        assert calculate_mission_alignment(catalog["grants"], profile) == 0

    def test_public_appeal_cause(self, catalog, build_profile):
        profile = build_profile(ngoPrimaryBeneficiaries=["children"])
        assert calculate_mission_alignment(catalog["p2p"], profile) == 3
        assert calculate_mission_alignment(catalog["csr"], profile) == 0


class TestMissionKeywords:
    def test_keyword_share(self):
        score = analyze_mission_alignment("Sustainable community development with social impact", "csr")
        assert score == pytest.approx(25 / 6)

    def test_case_insensitive(self):
        assert analyze_mission_alignment("RESEARCH PROGRAM", "grants") == pytest.approx(5 / 3)

    def test_no_vocabulary(self):
        assert analyze_mission_alignment("community impact", "doorToDoor") == 0.0

    def test_empty_text(self):
        assert analyze_mission_alignment("", "csr") == 0.0


class TestBeneficiaryAlignment:
    def test_broad_impact_capped(self, catalog, build_profile):
        profile = build_profile(
            ngoPrimaryBeneficiaries=["children", "women"],
            ngoSecondaryBeneficiaries=["elderly", "youth"],
            ngoIndirectBeneficiaries=["families", "teachers"],
        )
        assert calculate_beneficiary_alignment(catalog["grants"], profile) == pytest.approx(3)

    def test_broad_impact_partial(self, catalog, build_profile):
        profile = build_profile(ngoPrimaryBeneficiaries=["children"])
        assert calculate_beneficiary_alignment(catalog["csr"], profile) == pytest.approx(0.5)

    def test_major_gifts(self, catalog, build_profile):
        profile = build_profile(
            ngoPrimaryBeneficiaries=["children", "women"],
            ngoIndirectBeneficiaries=["families", "teachers"],
        )
        assert calculate_beneficiary_alignment(catalog["hniGiving"], profile) == pytest.approx(3)

    def test_relatable_cause(self, catalog, build_profile):
        profile = build_profile(ngoPrimaryBeneficiaries=["education"])
        assert calculate_beneficiary_alignment(catalog["p2p"], profile) == pytest.approx(2)
        assert calculate_beneficiary_alignment(catalog["digitalFundraising"], profile) == 0


class TestLocationImpact:
    @pytest.mark.parametrize(
        "strategy_id,locations,expected",
        [
            ("csr", ["tier1", "rural"], 8),
            ("digitalFundraising", ["tier1"], 10),
            ("matchingDonations", ["tier2"], 4),
            ("governmentGrants", ["rural"], 15),
            ("hniGiving", ["rural"], 0),
            ("csr", [], 0),
        ],
    )
    def test_mean_points(self, catalog, build_profile, strategy_id, locations, expected):
        profile = build_profile(ngoLocation=locations)
        assert calculate_location_impact(catalog[strategy_id], profile) == expected

    def test_unknown_tier_counts_as_zero(self, catalog, build_profile):
        profile = build_profile(ngoLocation=["tier1", "abroad"])
        assert calculate_location_impact(catalog["digitalFundraising"], profile) == 5


class TestLocationInsights:
    def test_no_locations(self, catalog, build_profile):
        assert get_location_insights(catalog["csr"], build_profile(), 0) == []

    def test_government_rural(self, catalog, build_profile):
        profile = build_profile(ngoLocation=["rural"])
        strategy = catalog["governmentGrants"]
        insights = get_location_insights(strategy, profile, calculate_location_impact(strategy, profile))
        assert insights == [
            "Strong alignment with your location profile (Rural Area)",
            "Rural/Tier 3 presence aligns well with government grant priorities",
        ]

    def test_csr_outside_cities(self, catalog, build_profile):
        profile = build_profile(ngoLocation=["tier3"])
        insights = get_location_insights(catalog["csr"], profile, 3)
        assert "Consider partnerships with NGOs in Tier 1/2 cities to improve CSR access" in insights

    def test_challenging_profile(self, catalog, build_profile):
        profile = build_profile(ngoLocation=["rural"])
        insights = get_location_insights(catalog["hniGiving"], profile, 0)
        assert insights == ["May face challenges due to your location profile (Rural Area)"]

    def test_digital_without_urban_presence(self, catalog, build_profile):
        profile = build_profile(ngoLocation=["rural"])
        insights = get_location_insights(catalog["digitalFundraising"], profile, 2)
        assert insights == ["Consider infrastructure requirements for digital fundraising"]
