from datetime import date, datetime

import pytest
from pydantic import ValidationError

from atams.exceptions import NotFoundException
from hrsystem.schemas.attendance import AttendanceQueryRequest, AttendanceRecord, CardDataMatch
from hrsystem.services.attendance_service import AttendanceService

DAY = date(2025, 10, 28)


def test_build_record_with_both_punches(card_row):
    rows = [
        card_row(0, datetime(2025, 10, 28, 8, 55, 12)),
        card_row(1, datetime(2025, 10, 28, 18, 2, 0), code="3"),
    ]
    record = AttendanceService().build_record(rows, DAY)

    data = record.model_dump(by_alias=True)
    assert data["date"] == "2025/10/28"
    assert data["clockInTime"] == "2025/10/28 08:55:12"
    assert data["clockInStatus"] == "正常"
    assert data["clockOutTime"] == "2025/10/28 18:02:00"
    assert data["clockOutStatus"] == "正常"
    assert "workDate" not in data
    assert "clockInAt" not in data


def test_sentinel_year_counts_as_missing_punch(card_row):
    rows = [card_row(0, datetime(1900, 1, 1)), card_row(1, datetime(2025, 10, 28, 17, 0), code="2")]
    record = AttendanceService().build_record(rows, DAY)

    assert record.clock_in_time == "應刷未刷"
    assert record.clock_in_status == "應刷未刷"
    assert record.clock_out_time == "2025/10/28 17:00:00"
    assert record.clock_out_status == "早退"


def test_follow_up_code_hides_punch_time(card_row):
    rows = [card_row(0, datetime(2025, 10, 28, 9, 0), code="0")]
    record = AttendanceService().build_record(rows, DAY)

    assert record.clock_in_time == "應刷未刷"
    assert record.clock_in_status == "應刷未刷"
    # no clock-out row at all
    assert record.clock_out_code is None
    assert record.clock_out_status == "應刷未刷"


def test_late_clock_in(card_row):
    record = AttendanceService().build_record([card_row(0, datetime(2025, 10, 28, 9, 31), code="1")], DAY)
    assert record.clock_in_status == "遲到"
    assert record.clock_in_time == "2025/10/28 09:31:00"


def test_derived_fields_are_stable_across_reads(card_row):
    record = AttendanceService().build_record([card_row(0, datetime(2025, 10, 28, 9, 0))], DAY)
    assert record.model_dump(by_alias=True) == record.model_dump(by_alias=True)
    with pytest.raises(ValidationError):
        record.clock_in_code = "4"


def test_build_record_without_rows_is_none():
    assert AttendanceService().build_record([], DAY) is None


def test_build_records_groups_by_employee_in_first_seen_order(card_row):
    rows = [
        card_row(0, datetime(2025, 10, 28, 8, 0), employee_id="2"),
        card_row(0, datetime(2025, 10, 28, 9, 0), employee_id="1"),
        card_row(1, datetime(2025, 10, 28, 18, 0), employee_id="2"),
    ]
    records = AttendanceService().build_records(rows, DAY)

    assert [r.clock_in_time for r in records] == ["2025/10/28 08:00:00", "2025/10/28 09:00:00"]
    assert records[0].clock_out_time == "2025/10/28 18:00:00"
    assert records[1].clock_out_status == "應刷未刷"


def test_query_record_not_found():
    request = AttendanceQueryRequest(employee_no="E1001", date="2025-10-28")
    with pytest.raises(NotFoundException):
        AttendanceService().query_record(request, [])


def test_query_request_validation():
    request = AttendanceQueryRequest.model_validate({"employeeNo": " E1 ", "date": "2025-10-28"})
    assert request.employee_no == "E1"
    assert request.query_date == DAY

    with pytest.raises(ValidationError):
        AttendanceQueryRequest(employee_no="E1", date="2025/10/28")
    with pytest.raises(ValidationError):
        AttendanceQueryRequest(employee_no="   ", date="2025-10-28")


def test_card_row_from_upper_case_columns():
    row = CardDataMatch.from_row({
        "EMPLOYEE_ID": 1001,
        "EMPLOYEE_NO": "E1001",
        "WORK_CARD_TYPE": 1,
        "CARD_DATA_DATE": "2025-10-28T18:00:00+08",
        "CARD_DATA_CODE": " 2 ",
    })
    assert row.employee_id == "1001"
    assert row.card_data_code == "2"
    assert row.card_data_date.hour == 18
    assert row.punched
