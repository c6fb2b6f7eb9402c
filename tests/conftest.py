import pytest
from fastapi.testclient import TestClient

from laborpay.main import app
from laborpay.models.labor import WorkShift
from laborpay.services.calendar_service import COLOMBIA_2024, ColombianHolidayCalendar

# Reference dates in 2024
TUESDAY = "2024-01-02"
WEDNESDAY = "2024-01-03"
THURSDAY = "2024-01-04"
SUNDAY = "2024-01-07"
NEW_YEAR = "2024-01-01"
CHRISTMAS = "2024-12-25"


@pytest.fixture
def static_calendar():
    return COLOMBIA_2024


@pytest.fixture
def computed_calendar():
    return ColombianHolidayCalendar()


@pytest.fixture
def make_shift():
    def _make(date=TUESDAY, start="08:00", end="16:00", salary=80000, **kwargs):
        return WorkShift(date=date, start_time=start, end_time=end, base_salary=salary, **kwargs)
    return _make


@pytest.fixture
def client():
    return TestClient(app)
