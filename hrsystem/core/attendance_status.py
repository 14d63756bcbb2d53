"""
Attendance Status Classifier - clock exception code to display label
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

NOT_CLOCKED_LABEL = "應刷未刷"
UNKNOWN_LABEL = "未知"


class AttendanceCode(str, Enum):
    """Clock exception codes written by the HR store (CARD_DATA_CODE)"""

    NORMAL = ""
    NOT_CLOCKED = "0"
    LATE = "1"
    EARLY_LEAVE = "2"
    OVERTIME = "3"
    ABSENT = "4"


@dataclass(frozen=True)
class UnrecognizedCode:
    """A code outside the closed set, kept verbatim"""

    raw: str


ParsedCode = Union[AttendanceCode, UnrecognizedCode]

_LABELS = {
    AttendanceCode.NORMAL: "正常",
    AttendanceCode.NOT_CLOCKED: NOT_CLOCKED_LABEL,
    AttendanceCode.LATE: "遲到",
    AttendanceCode.EARLY_LEAVE: "早退",
    AttendanceCode.OVERTIME: "超時出勤",
    AttendanceCode.ABSENT: "曠職",
}

_FOLLOW_UP = frozenset({AttendanceCode.NOT_CLOCKED, AttendanceCode.ABSENT})


def parse(code: Optional[str]) -> ParsedCode:
    """Map a raw code onto the closed enumeration; None counts as normal."""
    if code is None:
        return AttendanceCode.NORMAL
    try:
        return AttendanceCode(code)
    except ValueError:
        return UnrecognizedCode(raw=code)


def describe(code: Optional[str]) -> str:
    parsed = parse(code)
    if isinstance(parsed, UnrecognizedCode):
        return UNKNOWN_LABEL
    return _LABELS[parsed]


def requires_follow_up(code: Optional[str]) -> bool:
    """True only for not-clocked (0) and absent (4)."""
    return parse(code) in _FOLLOW_UP


def display_status(code: Optional[str], punched: bool) -> str:
    """
    Status shown on an attendance record side

    Rules:
    1. not-clocked (0) and absent (4) always show the not-clocked sentinel
    2. normal and overtime (3) show "正常" when a punch exists, else the sentinel
    3. anything else (late, early leave, unknown) shows its own label
    """
    parsed = parse(code)
    if parsed in _FOLLOW_UP:
        return NOT_CLOCKED_LABEL
    if parsed in (AttendanceCode.NORMAL, AttendanceCode.OVERTIME):
        return _LABELS[AttendanceCode.NORMAL] if punched else NOT_CLOCKED_LABEL
    return describe(code)
