"""
Attendance Service - Builds daily attendance records from clock-card rows
"""
from typing import Dict, Iterable, List, Optional
from datetime import date

from hrsystem.schemas.attendance import (
    AttendanceQueryRequest,
    AttendanceRecord,
    CardDataMatch,
    CARD_TYPE_CLOCK_IN,
    CARD_TYPE_CLOCK_OUT,
)
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class AttendanceService:
    def build_record(self, rows: Iterable[CardDataMatch], query_date: date) -> Optional[AttendanceRecord]:
        """
        Build one employee's record for one day

        Args:
            rows: Clock-card rows of a single employee for query_date
            query_date: Day being reported

        Returns:
            AttendanceRecord, or None when there are no rows
        """
        rows = list(rows)
        if not rows:
            return None

        clock_in = self._first_of_type(rows, CARD_TYPE_CLOCK_IN)
        clock_out = self._first_of_type(rows, CARD_TYPE_CLOCK_OUT)

        return AttendanceRecord(
            work_date=query_date,
            clock_in_at=clock_in.card_data_date if clock_in else None,
            clock_in_code=(clock_in.card_data_code or "") if clock_in else None,
            clock_out_at=clock_out.card_data_date if clock_out else None,
            clock_out_code=(clock_out.card_data_code or "") if clock_out else None,
        )

    def build_records(self, rows: Iterable[CardDataMatch], query_date: date) -> List[AttendanceRecord]:
        """Group rows by employee (first-seen order) and build a record for each"""
        grouped: Dict[Optional[str], List[CardDataMatch]] = {}
        for row in rows:
            grouped.setdefault(row.employee_id, []).append(row)

        records = []
        for employee_rows in grouped.values():
            record = self.build_record(employee_rows, query_date)
            if record is not None:
                records.append(record)

        logger.info(
            f"Built {len(records)} attendance records for {query_date.isoformat()}",
            extra={'extra_data': {'employees': len(grouped)}}
        )
        return records

    def query_record(self, request: AttendanceQueryRequest, rows: Iterable[CardDataMatch]) -> AttendanceRecord:
        """
        Record for the employee and day named by the request

        Raises:
            NotFoundException: If no clock-card rows exist
        """
        record = self.build_record(rows, request.query_date)
        if record is None:
            logger.info(f"No attendance rows: employee={request.employee_no}, date={request.date}")
            raise NotFoundException(
                "查無出勤記錄",
                details={"employeeNo": request.employee_no, "date": request.date}
            )
        return record

    @staticmethod
    def _first_of_type(rows: List[CardDataMatch], card_type: int) -> Optional[CardDataMatch]:
        for row in rows:
            if row.work_card_type == card_type:
                return row
        return None
