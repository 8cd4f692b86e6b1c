"""
Global constants for the recommendation engine.

Centralizes thresholds and bands that are not per-strategy catalog data,
for easier maintenance and tuning.
"""

# Maturity stages (years since founding)
STARTUP_MAX_AGE_YEARS = 3  # age < 3 = startup
GROWTH_MAX_AGE_YEARS = 7  # age < 7 = growth
MATURE_MAX_AGE_YEARS = 15  # age < 15 = mature, else established

# Size classes (USD budget + staff headcount)
SMALL_BUDGET_USD = 500_000
SMALL_MAX_STAFF = 10
MEDIUM_BUDGET_USD = 5_000_000
MEDIUM_MAX_STAFF = 50

# Numeric answers are clamped to +/- this bound when parsed
MAX_ANSWER_NUMBER = 10**15

# Rule algorithm: "high budget" means 1 crore+ in local currency
HIGH_BUDGET_THRESHOLD = 10_000_000

# Feature caps
MAX_DIGITAL_CAPACITY = 8
MAX_VOLUNTEER_CAPACITY = 10
MAX_EVENT_CAPACITY = 10
MAX_NETWORK_STRENGTH = 6
MAX_FUNDRAISING_CAPACITY = 12
MAX_COMPLIANCE_SCORE = 10
MAX_RISK_SCORE = 20
MAX_MISSION_ALIGNMENT = 5
MAX_FOREIGN_FUNDING_SCORE = 10

# Volunteer capacity is halved for the fit composite (result capped at 5)
VOLUNTEER_CAPACITY_DIVISOR = 2
NORMALIZED_CAPACITY_CAP = 5

# Rating thresholds (1-5 scale)
RATING_THRESHOLD = 3

# Risk profile levels
RISK_OPTIMAL_THRESHOLD = 15
RISK_ACCEPTABLE_THRESHOLD = 10
RISK_ALIGNMENT_BONUS = 7

# Foreign funding readiness tiers
FOREIGN_FULL_ACCESS_THRESHOLD = 8
FOREIGN_LIMITED_ACCESS_THRESHOLD = 6
FOREIGN_RESTRICTED_ACCESS_THRESHOLD = 4

# Scores and confidence
MAX_SCORE = 100
MAX_CONFIDENCE = 0.95
SCORING_CONFIDENCE_OFFSET = 0.3
RISK_FULL_MATCH_BONUS = 15
RISK_PARTIAL_MATCH_BONUS = 7
CONTEXT_BONUS_CAP = 15

RULE_MATCH_SCORE = 90
RULE_FILL_SCORE = 70
RULE_FILL_CONFIDENCE = 0.6
RULE_MIN_RESULTS = 5

ARCHETYPE_MIN_MATCH = 0.5
ARCHETYPE_SCORE_SCALE = 85

ENSEMBLE_BASE_MULTIPLIER = 0.7
ENSEMBLE_PER_ALGORITHM_BONUS = 0.1

# Confidence labels: (threshold, label, css class), checked in order
CONFIDENCE_LEVELS = [
    (0.85, "Very High", "very-high"),
    (0.7, "High", "high"),
    (0.5, "Medium", "medium"),
    (0.0, "Low", "low"),
]

# Similarity
SIMILARITY_CATEGORY_WEIGHT = 0.5
SIMILARITY_LISTED_WEIGHT = 0.5
SIMILARITY_RESOURCE_WEIGHT = 0.3
SIMILARITY_NETWORK_WEIGHT = 0.2
SIMILAR_STRATEGY_THRESHOLD = 0.7

DEFAULT_TOP_N = 5
DEFAULT_CRITERION_VALUE = 3
DEFAULT_LOCAL_CURRENCY_PER_USD = 75.0
