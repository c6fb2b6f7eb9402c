from enum import Enum
from pydantic import BaseModel
from typing import List, Optional

from laborpay.models.labor import WorkShift
from laborpay.models.schedule import ScheduleWarning

class SundayWorkType(str, Enum):
    OCCASIONAL = "occasional"  # up to 2 Sundays/holidays in the month
    HABITUAL = "habitual"

class AlertPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class CompensatoryAlert(BaseModel):
    """Compensatory rest day owed for working a Sunday or holiday"""
    employee_id: str
    employee_name: str
    work_date: str  # YYYY-MM-DD
    type: SundayWorkType
    compensatory_due: bool = True
    payment_due: bool = False
    expiration_date: str
    days_until_expiry: int
    priority: AlertPriority
    resolved: bool = False

class RestDayCompliance(BaseModel):
    """Weekly rest check for one employee"""
    employee_id: str
    employee_name: str = ""
    has_shifts: bool
    work_days_count: int
    rest_days_count: int
    needs_rest_day: bool
    has_weekly_rest: bool
    compliant: bool
    reason: str = ""

class CompensatoryAlertRequest(BaseModel):
    employee_id: str
    employee_name: str
    shifts: List[WorkShift]
    rest_days: List[str] = []  # YYYY-MM-DD
    today: Optional[str] = None  # YYYY-MM-DD, defaults to the server date

class CompensatoryReport(BaseModel):
    alerts: List[CompensatoryAlert]
    compliance: RestDayCompliance
    schedule_warnings: List[ScheduleWarning] = []
