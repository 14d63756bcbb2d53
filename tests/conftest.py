import os

# Settings require these before hrsystem.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ATLAS_APP_CODE", "HRSYSTEM")
os.environ.setdefault("LOGGING_ENABLED", "false")

from datetime import datetime

import pytest

from hrsystem.schemas.attendance import CardDataMatch


@pytest.fixture
def card_row():
    def _make(card_type, at, code="", employee_id="1001"):
        return CardDataMatch(
            employee_id=employee_id,
            employee_no=f"E{employee_id}",
            employee_cname="王小明",
            work_date=datetime(2025, 10, 28),
            work_card_type=card_type,
            work_card_date=at,
            card_data_date=at,
            card_data_code=code,
        )
    return _make
