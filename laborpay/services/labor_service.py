import csv
import io
import logging
import math
from typing import Dict, Iterable, List, Optional

from laborpay.core.config import LaborConfig
from laborpay.core.errors import InvalidSalary, LaborCalculationError, ShiftCalculationError
from laborpay.models.labor import LaborCalculation, PayBreakdownLine, PayCategory, WorkShift
from laborpay.services.calendar_service import (
    HolidayCalendar,
    get_holiday_calendar,
    hours_between,
    is_sunday,
    night_hours,
)

logger = logging.getLogger(__name__)

REGULAR_HOURS_PER_DAY = 8

# Surcharge over the plain hourly rate, per category
SURCHARGE_RATES: Dict[PayCategory, float] = {
    PayCategory.REGULAR: 0.0,
    PayCategory.NIGHT: 0.35,
    PayCategory.OVERTIME_DAY: 0.25,
    PayCategory.OVERTIME_NIGHT: 0.75,
    PayCategory.SUNDAY_DAY: 0.75,
    PayCategory.SUNDAY_NIGHT: 1.10,
    PayCategory.HOLIDAY_DAY: 0.75,
    PayCategory.HOLIDAY_NIGHT: 1.10,
}

CATEGORY_DESCRIPTIONS: Dict[PayCategory, str] = {
    PayCategory.REGULAR: "Horas regulares diurnas",
    PayCategory.NIGHT: "Horas nocturnas (21:00 - 06:00)",
    PayCategory.OVERTIME_DAY: "Horas extras diurnas",
    PayCategory.OVERTIME_NIGHT: "Horas extras nocturnas",
    PayCategory.SUNDAY_DAY: "Trabajo dominical diurno",
    PayCategory.SUNDAY_NIGHT: "Trabajo dominical nocturno",
    PayCategory.HOLIDAY_DAY: "Trabajo en festivo diurno",
    PayCategory.HOLIDAY_NIGHT: "Trabajo en festivo nocturno",
}

# Fields summed by the weekly fold
SUMMED_FIELDS = [
    'regular_hours', 'overtime_hours', 'night_shift_hours', 'holiday_hours', 'sunday_hours',
    'overtime_pay', 'night_shift_pay', 'holiday_pay', 'sunday_pay',
    'total_hours', 'total_base_pay', 'total_extra_pay', 'total_pay',
]

def get_hourly_rate(daily_salary: float) -> float:
    """Hourly rate from the daily wage of an 8-hour day"""
    return daily_salary / REGULAR_HOURS_PER_DAY

def _category_hours(total_hours: float, shift_night_hours: float, holiday: bool, sunday: bool) -> List[tuple]:
    """(category, hours) pairs in evaluation order, before filtering empty ones"""
    day_hours = total_hours - shift_night_hours

    if holiday:
        return [
            (PayCategory.HOLIDAY_DAY, day_hours),
            (PayCategory.HOLIDAY_NIGHT, shift_night_hours),
        ]

    if sunday:
        return [
            (PayCategory.SUNDAY_DAY, day_hours),
            (PayCategory.SUNDAY_NIGHT, shift_night_hours),
        ]

    # The first 8 hours are regular, day hours first; the rest is overtime
    regular_night_allotment = max(0, REGULAR_HOURS_PER_DAY - day_hours)
    return [
        (PayCategory.REGULAR, min(day_hours, REGULAR_HOURS_PER_DAY)),
        (PayCategory.NIGHT, min(shift_night_hours, regular_night_allotment)),
        (PayCategory.OVERTIME_DAY, max(0, day_hours - REGULAR_HOURS_PER_DAY)),
        (PayCategory.OVERTIME_NIGHT, max(0, shift_night_hours - regular_night_allotment)),
    ]

def calculate_shift_pay(shift: WorkShift, calendar: Optional[HolidayCalendar] = None) -> LaborCalculation:
    """Split a shift into hour categories and price each one"""
    if not math.isfinite(shift.base_salary) or shift.base_salary < 0:
        raise InvalidSalary(shift.base_salary)

    calendar = calendar or get_holiday_calendar()

    hourly_rate = get_hourly_rate(shift.base_salary)
    total_hours = hours_between(shift.start_time, shift.end_time)
    shift_night_hours = night_hours(shift.start_time, shift.end_time)
    holiday = calendar.is_holiday(shift.date)
    sunday = is_sunday(shift.date)

    breakdown = []
    surcharge_by_category = {}
    total_base_pay = 0.0
    total_extra_pay = 0.0

    for category, hours in _category_hours(total_hours, shift_night_hours, holiday, sunday):
        if hours <= 0:
            continue

        surcharge = SURCHARGE_RATES[category]
        rate = hourly_rate * (1 + surcharge)
        extra = hours * hourly_rate * surcharge

        total_base_pay += hours * hourly_rate
        total_extra_pay += extra
        if surcharge:
            surcharge_by_category[category] = extra

        breakdown.append(PayBreakdownLine(
            category=category,
            description=CATEGORY_DESCRIPTIONS[category],
            hours=hours,
            rate=rate,
            amount=hours * rate
        ))

    logger.debug(
        f"Shift {shift.date} {shift.start_time}-{shift.end_time}: {total_hours:.2f}h "
        f"({shift_night_hours:.2f}h night, holiday={holiday}, sunday={sunday}) -> "
        f"{total_base_pay + total_extra_pay:.2f}"
    )

    return LaborCalculation(
        regular_hours=min(total_hours, REGULAR_HOURS_PER_DAY),
        overtime_hours=max(0, total_hours - REGULAR_HOURS_PER_DAY),
        night_shift_hours=shift_night_hours,
        holiday_hours=total_hours if holiday else 0.0,
        sunday_hours=total_hours if sunday else 0.0,
        overtime_pay=total_extra_pay,
        # Night, Sunday and holiday surcharges are all carried by overtime_pay
        night_shift_pay=0.0,
        holiday_pay=0.0,
        sunday_pay=0.0,
        total_hours=total_hours,
        total_base_pay=total_base_pay,
        total_extra_pay=total_extra_pay,
        total_pay=total_base_pay + total_extra_pay,
        breakdown=breakdown,
        surcharge_by_category=surcharge_by_category
    )

def empty_calculation() -> LaborCalculation:
    """Identity element of the weekly fold"""
    return LaborCalculation()

def combine_calculations(total: LaborCalculation, calc: LaborCalculation) -> LaborCalculation:
    """Sum two calculations; breakdown lines keep left-then-right order"""
    values = {field: getattr(total, field) + getattr(calc, field) for field in SUMMED_FIELDS}

    surcharges = dict(total.surcharge_by_category)
    for category, amount in calc.surcharge_by_category.items():
        surcharges[category] = surcharges.get(category, 0.0) + amount

    return LaborCalculation(
        **values,
        breakdown=list(total.breakdown) + list(calc.breakdown),
        surcharge_by_category=surcharges
    )

def calculate_shifts(shifts: Iterable[WorkShift], calendar: Optional[HolidayCalendar] = None) -> List[LaborCalculation]:
    """Per-shift calculations; the first failing shift aborts the batch"""
    calendar = calendar or get_holiday_calendar()
    calculations = []

    for index, shift in enumerate(shifts):
        try:
            calculations.append(calculate_shift_pay(shift, calendar))
        except LaborCalculationError as e:
            logger.warning(f"Shift #{index} ({shift.date}) rejected: {e}")
            raise ShiftCalculationError(index, shift.date, e) from e

    return calculations

def calculate_weekly_pay(shifts: Iterable[WorkShift], calendar: Optional[HolidayCalendar] = None) -> LaborCalculation:
    """Fold the pay of every shift of a week into one calculation"""
    shifts = list(shifts)
    weekly = empty_calculation()
    for calc in calculate_shifts(shifts, calendar):
        weekly = combine_calculations(weekly, calc)

    if LaborConfig.LOG_CALCULATIONS:
        logger.info(
            f"Weekly pay for {len(shifts)} shifts: {weekly.total_hours:.2f}h, "
            f"base {weekly.total_base_pay:.2f}, extra {weekly.total_extra_pay:.2f}, total {weekly.total_pay:.2f}"
        )

    return weekly

def generate_labor_csv(shifts: List[WorkShift], calculations: List[LaborCalculation],
                       weekly: LaborCalculation) -> str:
    """Generate CSV format for labor cost export"""

    output = io.StringIO()
    writer = csv.writer(output)

    categories = list(PayCategory)

    # Header
    writer.writerow(
        ['Date', 'Position', 'Location', 'Start', 'End', 'Total Hours']
        + [f'{category.value} hours' for category in categories]
        + ['Base Pay', 'Extra Pay', 'Total Pay']
    )

    # Data rows
    for shift, calc in zip(shifts, calculations):
        hours_by_category = {line.category: line.hours for line in calc.breakdown}
        writer.writerow(
            [shift.date, shift.position, shift.location, shift.start_time, shift.end_time,
             round(calc.total_hours, 2)]
            + [round(hours_by_category.get(category, 0.0), 2) for category in categories]
            + [round(calc.total_base_pay, 2), round(calc.total_extra_pay, 2), round(calc.total_pay, 2)]
        )

    # Weekly total
    weekly_hours = {category: 0.0 for category in categories}
    for line in weekly.breakdown:
        weekly_hours[line.category] += line.hours
    writer.writerow(
        ['TOTAL', '', '', '', '', round(weekly.total_hours, 2)]
        + [round(weekly_hours[category], 2) for category in categories]
        + [round(weekly.total_base_pay, 2), round(weekly.total_extra_pay, 2), round(weekly.total_pay, 2)]
    )

    return output.getvalue()
