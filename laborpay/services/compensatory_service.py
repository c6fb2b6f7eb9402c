# laborpay/services/compensatory_service.py
import logging
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, List, Optional

from laborpay.models.compensatory import AlertPriority, CompensatoryAlert, RestDayCompliance, SundayWorkType
from laborpay.models.labor import WorkShift
from laborpay.services.calendar_service import (
    DateLike,
    HolidayCalendar,
    get_holiday_calendar,
    is_sunday,
    parse_date,
)

logger = logging.getLogger(__name__)

OCCASIONAL_SUNDAY_LIMIT = 2        # Sundays/holidays per month before work becomes habitual
COMPENSATORY_EXPIRATION_DAYS = 30  # days to take the compensatory rest
WEEKLY_REST_THRESHOLD_DAYS = 6     # work days in a week that require a rest day
URGENT_EXPIRY_DAYS = 7

def get_sunday_work_type(sunday_works_in_month: int) -> SundayWorkType:
    """Occasional up to 2 Sundays/holidays worked in the month, habitual from 3"""
    if sunday_works_in_month <= OCCASIONAL_SUNDAY_LIMIT:
        return SundayWorkType.OCCASIONAL
    return SundayWorkType.HABITUAL

def get_compensatory_expiration_date(work_date: DateLike) -> date:
    return parse_date(work_date) + timedelta(days=COMPENSATORY_EXPIRATION_DAYS)

def generate_compensatory_alert(employee_id: str, employee_name: str, work_date: DateLike,
                                monthly_work_count: int, today: Optional[date] = None) -> CompensatoryAlert:
    """Build the alert for one Sunday/holiday worked"""
    today = today or date.today()
    work_type = get_sunday_work_type(monthly_work_count)
    expiration = get_compensatory_expiration_date(work_date)
    days_until_expiry = max(0, (expiration - today).days)

    if work_type == SundayWorkType.HABITUAL or days_until_expiry <= URGENT_EXPIRY_DAYS:
        priority = AlertPriority.HIGH
    else:
        priority = AlertPriority.MEDIUM

    return CompensatoryAlert(
        employee_id=employee_id,
        employee_name=employee_name,
        work_date=parse_date(work_date).isoformat(),
        type=work_type,
        compensatory_due=True,
        # Habitual Sunday work owes both the rest day and the payment
        payment_due=work_type == SundayWorkType.HABITUAL,
        expiration_date=expiration.isoformat(),
        days_until_expiry=days_until_expiry,
        priority=priority
    )

def build_compensatory_alerts(employee_id: str, employee_name: str, shifts: Iterable[WorkShift],
                              calendar: Optional[HolidayCalendar] = None,
                              today: Optional[date] = None) -> List[CompensatoryAlert]:
    """One alert per distinct Sunday or holiday the employee worked"""
    calendar = calendar or get_holiday_calendar()

    rest_dates = sorted({
        parse_date(shift.date) for shift in shifts
        if calendar.is_holiday(shift.date) or is_sunday(shift.date)
    })
    per_month = Counter((d.year, d.month) for d in rest_dates)

    alerts = [
        generate_compensatory_alert(
            employee_id, employee_name, work_date, per_month[(work_date.year, work_date.month)], today
        )
        for work_date in rest_dates
    ]

    if alerts:
        logger.info(f"{len(alerts)} compensatory alerts for employee {employee_name} ({employee_id})")

    return alerts

def needs_weekly_rest_day(shifts: List[WorkShift], rest_days: List[str]) -> bool:
    if shifts and not rest_days:
        work_days = len({parse_date(s.date) for s in shifts})
        return work_days >= WEEKLY_REST_THRESHOLD_DAYS
    return False

def check_rest_day_compliance(employee_id: str, shifts: List[WorkShift], rest_days: List[str],
                              employee_name: str = "") -> RestDayCompliance:
    """Weekly rest check: 6+ work days without a rest day is non-compliant"""
    work_days_count = len({parse_date(s.date) for s in shifts})
    rest_days_count = len({parse_date(d) for d in rest_days})
    missing_rest = work_days_count >= WEEKLY_REST_THRESHOLD_DAYS and rest_days_count == 0

    return RestDayCompliance(
        employee_id=employee_id,
        employee_name=employee_name,
        has_shifts=len(shifts) > 0,
        work_days_count=work_days_count,
        rest_days_count=rest_days_count,
        needs_rest_day=needs_weekly_rest_day(shifts, rest_days),
        has_weekly_rest=rest_days_count > 0,
        compliant=not missing_rest,
        reason="Falta día de descanso obligatorio" if missing_rest else ""
    )
