import pytest

from hrsystem.core.attendance_status import (
    AttendanceCode,
    UnrecognizedCode,
    describe,
    display_status,
    parse,
    requires_follow_up,
)


@pytest.mark.parametrize("code,label", [
    (None, "正常"),
    ("", "正常"),
    ("0", "應刷未刷"),
    ("1", "遲到"),
    ("2", "早退"),
    ("3", "超時出勤"),
    ("4", "曠職"),
])
def test_describe_known_codes(code, label):
    assert describe(code) == label


@pytest.mark.parametrize("code", ["9", "5", "abc", " 1", "01"])
def test_describe_unknown_code_never_raises(code):
    assert describe(code) == "未知"


def test_requires_follow_up_only_for_not_clocked_and_absent():
    assert requires_follow_up("0") is True
    assert requires_follow_up("4") is True
    for code in (None, "", "1", "2", "3", "9"):
        assert requires_follow_up(code) is False


def test_parse_keeps_unrecognized_code_verbatim():
    assert parse("7") == UnrecognizedCode(raw="7")
    assert parse(None) is AttendanceCode.NORMAL
    assert parse("3") is AttendanceCode.OVERTIME


def test_display_status_rules():
    assert display_status("0", punched=True) == "應刷未刷"
    assert display_status("4", punched=True) == "應刷未刷"
    assert display_status("", punched=True) == "正常"
    assert display_status("", punched=False) == "應刷未刷"
    assert display_status("3", punched=True) == "正常"
    assert display_status("3", punched=False) == "應刷未刷"
    assert display_status("1", punched=True) == "遲到"
    assert display_status("2", punched=False) == "早退"
    assert display_status("8", punched=True) == "未知"
