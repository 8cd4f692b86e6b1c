from fundraising_advisor.parsers.answer_values import as_list, as_ratings, as_str, is_yes, parse_float, parse_int
from fundraising_advisor.parsers.ngo_profile_aggregator import NGOProfileAggregator

__all__ = [
    "NGOProfileAggregator",
    "as_list",
    "as_ratings",
    "as_str",
    "is_yes",
    "parse_float",
    "parse_int",
]
