from enum import Enum


class ProblemStatus(str, Enum):
    """Per-user progress on a problem. UNTOUCHED is never stored as a row."""

    UNTOUCHED = "untouched"
    ATTEMPTING = "attempting"
    SOLVED = "solved"
    REVISIT = "revisit"
    SKIPPED = "skipped"


class Platform(str, Enum):
    LEETCODE = "leetcode"
    CODEFORCES = "codeforces"
    CSES = "cses"
    ATCODER = "atcoder"
    OTHER = "other"


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


def is_valid_status(value) -> bool:
    return value in enum_values(ProblemStatus)
