"""Turn an admin's free-text winner declaration into a strict Option.

Accepted forms, case-insensitive and whitespace-trimmed:
  - the letter "a" / "b"
  - either option's label text
A letter match wins over a label match. A label equal to both options
cannot name a single side and is rejected.
"""

from src.uni_common.enums import Option
from src.uni_common.errors import InvalidOutcomeError


def _fold(value: str) -> str:
    return value.strip().casefold()


def normalize_outcome(declared: str, option_a_label: str, option_b_label: str) -> Option:
    key = _fold(declared)
    if not key:
        raise InvalidOutcomeError(declared)

    if key == "a":
        return Option.A
    if key == "b":
        return Option.B

    matches_a = key == _fold(option_a_label)
    matches_b = key == _fold(option_b_label)
    if matches_a and not matches_b:
        return Option.A
    if matches_b and not matches_a:
        return Option.B
    raise InvalidOutcomeError(declared)
