"""
Seeded answer-set generator.

Produces realistic questionnaire answers for demos and property tests: four
named scenarios (educational institution, rural development, urban
healthcare, a large established multi-city NGO) plus fully random profiles.
The same seed always yields the same answers.

Usage:
    from fundraising_advisor.scenarios import ScenarioGenerator

    generator = ScenarioGenerator(seed=7)
    name, answers = generator.random_scenario()
"""

import random
from typing import Any, Callable, Optional

Answers = dict[str, Any]

NGO_NAMES = [
    "Hope Foundation",
    "Green Earth Initiative",
    "Education First",
    "Rural Development Trust",
    "Urban Healthcare Alliance",
    "Children First",
    "Women Empowerment Network",
    "Digital Literacy Mission",
]

LOCATIONS = [
    ["tier1"],
    ["tier2"],
    ["tier3"],
    ["rural"],
    ["tier1", "tier2"],
    ["tier2", "tier3"],
    ["tier3", "rural"],
    ["tier1", "rural"],
    ["tier1", "tier2", "tier3"],
]

REGISTRATION_TYPES = ["trust", "society", "section8", "educational", "hospital"]

PRIMARY_BENEFICIARIES = [
    "children",
    "women",
    "elderly",
    "disabilities",
    "lgbtq",
    "minorities",
    "refugees",
    "rural",
    "urban",
    "environment",
    "health",
    "education",
]

MISSION_STATEMENTS = [
    "Empowering communities through sustainable development and education",
    "Providing quality healthcare access to underserved populations",
    "Creating environmental awareness and promoting conservation",
    "Supporting women and children through education and skill development",
    "Building sustainable livelihoods in rural communities",
]

BASE_COMPLIANCE = ["pan", "12a", "80g"]
ADDITIONAL_COMPLIANCE = ["darpan", "gst", "fcra", "501c", "csr1"]

DIGITAL_SKILLS = ["digitalMarketing", "contentCreation", "websiteManagement", "dataAnalysis"]
EVENT_SKILLS = ["eventPlanning", "eventMarketing", "eventTicketing", "eventVolunteers", "eventFollowup"]
FOREIGN_READINESS = ["docPreparation", "reportingCapacity", "bankAccounts", "complianceTracking"]


class ScenarioGenerator:
    """Deterministic generator of questionnaire answer sets."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def _yes(self, threshold: float) -> str:
        return "yes" if self.rng.random() > threshold else "no"

    def _pick(self, options: list):
        return self.rng.choice(options)

    def _prefix(self, options: list[str], minimum: int = 1) -> list[str]:
        """A random-length leading slice of options (at least `minimum` long)."""
        return options[: self.rng.randint(minimum, len(options))]

    def _ratings(self, keys: list[str]) -> dict[str, int]:
        return {key: self.rng.randint(1, 5) for key in keys}

    def founding_year(self) -> int:
        return self.rng.randint(1990, 2021)

    def compliance(self) -> list[str]:
        return BASE_COMPLIANCE + [item for item in ADDITIONAL_COMPLIANCE if self.rng.random() > 0.6]

    def beneficiaries(self, maximum: int = 3) -> list[str]:
        shuffled = list(PRIMARY_BENEFICIARIES)
        self.rng.shuffle(shuffled)
        return shuffled[: self.rng.randint(1, maximum)]

    # -------------------------------------------------------------------------
    # Answer sets
    # -------------------------------------------------------------------------

    def base_answers(self) -> Answers:
        """Capacity, network, resource and compliance answers shared by all scenarios."""
        answers: Answers = {
            "ngoMission": self._pick(MISSION_STATEMENTS),
            "ngoPrimaryBeneficiaries": self.beneficiaries(),
            "ngoSecondaryBeneficiaries": self._prefix(["families", "communities", "institutions"]),
            "ngoIndirectBeneficiaries": self._prefix(["broader_community", "economy", "environment"]),
            # Digital presence
            "ngoWebsite": self._yes(0.3),
            "ngoSocialMedia": self._yes(0.3),
            "ngoDonationPage": self._yes(0.5),
            "ngoEmailMarketing": self._yes(0.5),
            "ngoDigitalSkills": self._ratings(DIGITAL_SKILLS),
            "ngoOnlinePlatforms": self._yes(0.5),
            "ngoOnlinePlatformsUsed": self._prefix(["benevity", "caf", "globalgiving", "giveindia", "ketto"]),
            "ngoOnlineCampaigns": self._yes(0.4),
            "ngoDigitalBudget": self._yes(0.5),
            # Volunteers
            "ngoVolunteers": self._yes(0.3),
            "ngoVolunteersCount": self.rng.randint(10, 109),
            "ngoVolunteerOperations": self._yes(0.4),
            "ngoVolunteerPercentage": self._pick(["less25", "25to50", "51to75", "over75"]),
            "ngoVolunteerManagement": self._yes(0.5),
            "ngoVolunteerCapacity": str(self.rng.randint(1, 5)),
            "ngoVolunteerFundraising": self._yes(0.4),
            # Events
            "ngoEventExperience": self._yes(0.3),
            "ngoEventCount": self._pick(["1to2", "3to5", "6to10", "over10"]),
            "ngoEventTypes": self._prefix(["galas", "concerts", "sports", "auctions", "community", "online"]),
            "ngoEventCapacity": self._ratings(EVENT_SKILLS),
            "ngoEventVenues": self._yes(0.5),
            "ngoVirtualEvents": self._yes(0.4),
            "ngoEventBudget": self._yes(0.5),
            # Networks
            "ngoDonorDatabase": self._yes(0.4),
            "ngoDonorCount": self._pick(["under100", "100to500", "500to1000", "over1000"]),
            "ngoDonorRelationship": str(self.rng.randint(1, 5)),
            "ngoDonorStewardship": self._yes(0.5),
            "ngoCorporateRelations": self._yes(0.5),
            "ngoCorporatePartnersCount": self._pick(["1to3", "4to10", "over10"]),
            "ngoCSRExperience": self._yes(0.6),
            "ngoFoundationRelations": self._yes(0.5),
            "ngoFoundationCount": self._pick(["1to3", "4to10", "over10"]),
            "ngoFoundationRelationshipStrength": str(self.rng.randint(1, 5)),
            "ngoGrantWriting": self._yes(0.5),
            "ngoGovernmentRelations": self._yes(0.6),
            # Resources
            "ngoFundraisingDept": self._yes(0.5),
            "ngoFundraisingStaffCount": self.rng.randint(1, 10),
            "ngoFundraisingSkill": self._pick(["general", "some", "mix", "specialized"]),
            "ngoVolunteerFundraisingSupport": self._yes(0.5),
            "ngoFundraisingBudgetPercent": self.rng.randint(5, 19),
            "ngoFundraisingCapital": self._pick(["yes", "no", "limited"]),
            "ngoCRM": self._yes(0.5),
            "ngoFinancialSystems": self._yes(0.4),
            "ngoRiskTolerance": self._pick(["riskaverse", "moderate", "riskseeking", "depends"]),
            # Compliance
            "ngoComplianceInProcess": ["12a", "80g", "darpan", "fcra", "csr1"][: self.rng.randint(0, 2)],
            "ngoAuditStatus": self._pick(["current", "partial", "pending"]),
            "ngoComplianceTeam": self._pick(["yes", "no", "outsourced"]),
            "ngoForeignComplianceReadiness": self._ratings(FOREIGN_READINESS),
        }
        if answers["ngoSocialMedia"] == "yes":
            answers["ngoSocialMediaPlatforms"] = self._prefix(["facebook", "instagram", "linkedin", "twitter"])
        return answers

    def random_answers(self) -> Answers:
        """A completely random organisation."""
        answers: Answers = {
            "ngoName": self._pick(NGO_NAMES),
            "ngoLocation": list(self._pick(LOCATIONS)),
            "ngoRegistrationType": self._pick(REGISTRATION_TYPES),
            "ngoYear": self.founding_year(),
            "ngoComplianceStatus": self.compliance(),
            "ngoForeignFundingIntent": self._pick(["yes", "no", "future"]),
            "ngoScope": self._pick(["local", "regional", "national", "international"]),
            "ngoBudget": self.rng.randint(100_000, 100_099_999),
            "ngoStaff": self.rng.randint(1, 200),
        }
        answers.update(self.base_answers())
        return answers

    def educational_institution(self) -> Answers:
        answers: Answers = {
            "ngoName": "Academic Excellence Foundation",
            "ngoLocation": ["tier1"],
            "ngoRegistrationType": "educational",
            "ngoYear": self.founding_year(),
            "ngoComplianceStatus": sorted(set(self.compliance()) | {"80g", "12a"}),
            "ngoForeignFundingIntent": "yes",
            "ngoScope": "national",
            "ngoBudget": self.rng.randint(1_000_000, 50_999_999),
            "ngoStaff": self.rng.randint(20, 119),
        }
        answers.update(self.base_answers())
        answers.update(
            {
                "ngoPrimaryBeneficiaries": ["education", "children", "youth"],
                "ngoMission": "Providing quality education and fostering academic excellence",
                "ngoEventTypes": ["seminars", "workshops", "conferences"],
            }
        )
        return answers

    def rural_development(self) -> Answers:
        answers: Answers = {
            "ngoName": "Rural Empowerment Trust",
            "ngoLocation": ["rural", "tier3"],
            "ngoRegistrationType": "trust",
            "ngoYear": self.founding_year(),
            "ngoComplianceStatus": self.compliance(),
            "ngoForeignFundingIntent": "no",
            "ngoScope": "regional",
            "ngoBudget": self.rng.randint(100_000, 2_099_999),
            "ngoStaff": self.rng.randint(5, 24),
        }
        answers.update(self.base_answers())
        answers.update(
            {
                "ngoPrimaryBeneficiaries": ["rural", "farmers", "women"],
                "ngoMission": "Empowering rural communities through sustainable development initiatives",
                "ngoEventTypes": ["community_meetings", "training_workshops"],
            }
        )
        return answers

    def urban_healthcare(self) -> Answers:
        answers: Answers = {
            "ngoName": "Urban Health Initiative",
            "ngoLocation": ["tier1", "tier2"],
            "ngoRegistrationType": "hospital",
            "ngoYear": self.founding_year(),
            "ngoComplianceStatus": sorted(set(self.compliance()) | {"csr1"}),
            "ngoForeignFundingIntent": "future",
            "ngoScope": "national",
            "ngoBudget": self.rng.randint(5_000_000, 104_999_999),
            "ngoStaff": self.rng.randint(50, 249),
        }
        answers.update(self.base_answers())
        answers.update(
            {
                "ngoPrimaryBeneficiaries": ["health", "urban", "elderly"],
                "ngoMission": "Providing accessible and quality healthcare to urban communities",
                "ngoEventTypes": ["medical_camps", "health_awareness", "fundraising_galas"],
            }
        )
        return answers

    def established_multi_city(self) -> Answers:
        """A large, fully compliant, volunteer-driven NGO with no random parts."""
        return {
            "ngoName": "Bhumi",
            "ngoLocation": ["tier1", "tier2", "tier3"],
            "ngoRegistrationType": "trust",
            "ngoYear": 2006,
            "ngoComplianceStatus": ["pan", "12a", "80g", "darpan", "fcra", "csr1", "gst", "501c"],
            "ngoForeignFundingIntent": "yes",
            "ngoScope": "national",
            "ngoBudget": 500_000_000,
            "ngoStaff": 100,
            "ngoMission": (
                "Transforming India through quality education for underprivileged children, "
                "environmental conservation, and volunteer engagement"
            ),
            "ngoPrimaryBeneficiaries": ["education", "environment", "children", "youth"],
            "ngoSecondaryBeneficiaries": ["communities", "institutions", "volunteers"],
            "ngoIndirectBeneficiaries": ["broader_community", "economy", "environment"],
            "ngoWebsite": "yes",
            "ngoSocialMedia": "yes",
            "ngoSocialMediaPlatforms": ["facebook", "instagram", "linkedin", "twitter", "youtube"],
            "ngoDonationPage": "yes",
            "ngoEmailMarketing": "yes",
            "ngoDigitalSkills": {"digitalMarketing": 5, "contentCreation": 5, "websiteManagement": 5, "dataAnalysis": 4},
            "ngoOnlinePlatforms": "yes",
            "ngoOnlinePlatformsUsed": ["giveindia", "ketto", "globalgiving", "danamojo", "razorpay"],
            "ngoOnlineCampaigns": "yes",
            "ngoDigitalBudget": "yes",
            "ngoVolunteers": "yes",
            "ngoVolunteersCount": 250_000,
            "ngoVolunteerOperations": "yes",
            "ngoVolunteerPercentage": "over75",
            "ngoVolunteerManagement": "yes",
            "ngoVolunteerCapacity": "5",
            "ngoVolunteerFundraising": "yes",
            "ngoEventExperience": "yes",
            "ngoEventCount": "over10",
            "ngoEventTypes": ["community", "online", "educational", "fundraising", "awareness", "environmental"],
            "ngoEventCapacity": {key: 5 for key in EVENT_SKILLS},
            "ngoEventVenues": "yes",
            "ngoVirtualEvents": "yes",
            "ngoEventBudget": "yes",
            "ngoDonorDatabase": "yes",
            "ngoDonorCount": "over1000",
            "ngoDonorRelationship": "5",
            "ngoDonorStewardship": "yes",
            "ngoCorporateRelations": "yes",
            "ngoCorporatePartnersCount": "over10",
            "ngoCSRExperience": "yes",
            "ngoCorporateRelationshipStrength": "5",
            "ngoFoundationRelations": "yes",
            "ngoFoundationCount": "over10",
            "ngoFoundationRelationshipStrength": "5",
            "ngoGrantWriting": "yes",
            "ngoFundraisingDept": "yes",
            "ngoFundraisingStaffCount": 15,
            "ngoFundraisingSkill": "specialized",
            "ngoVolunteerFundraisingSupport": "yes",
            "ngoFundraisingBudgetPercent": 5,
            "ngoFundraisingCapital": "yes",
            "ngoCRM": "yes",
            "ngoFinancialSystems": "yes",
            "ngoRiskTolerance": "moderate",
            "ngoFCRAValidity": "yes",
            "ngoForeignComplianceReadiness": {key: 5 for key in FOREIGN_READINESS},
            "ngoAuditStatus": "current",
            "ngoComplianceTeam": "yes",
        }

    # -------------------------------------------------------------------------
    # Named scenarios
    # -------------------------------------------------------------------------

    @property
    def scenarios(self) -> dict[str, Callable[[], Answers]]:
        return {
            "Educational Institution": self.educational_institution,
            "Rural Development": self.rural_development,
            "Urban Healthcare": self.urban_healthcare,
            "Established Multi-City NGO": self.established_multi_city,
        }

    def scenario(self, name: str) -> Answers:
        """Generate a named scenario; unknown names raise KeyError."""
        generators = self.scenarios
        if name not in generators:
            raise KeyError(f"Unknown scenario {name!r} (expected one of: {', '.join(generators)})")
        return generators[name]()

    def random_scenario(self) -> tuple[str, Answers]:
        name = self._pick(list(self.scenarios))
        return name, self.scenario(name)
