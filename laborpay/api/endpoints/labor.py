import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from laborpay.api.dependencies import check_batch_size, holiday_calendar
from laborpay.core.errors import LaborCalculationError
from laborpay.models.compensatory import CompensatoryAlertRequest, CompensatoryReport
from laborpay.models.labor import LaborCalculation, WeeklyPayRequest, WorkShift
from laborpay.models.schedule import ScheduleWarning
from laborpay.services.calendar_service import HolidayCalendar, parse_date
from laborpay.services.compensatory_service import build_compensatory_alerts, check_rest_day_compliance
from laborpay.services.labor_service import (
    calculate_shift_pay,
    calculate_shifts,
    calculate_weekly_pay,
    combine_calculations,
    empty_calculation,
    generate_labor_csv,
)
from laborpay.services.schedule_service import validate_week

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/labor/shift", response_model=LaborCalculation)
async def calculate_shift(shift: WorkShift, calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Pay breakdown for a single shift"""
    try:
        return calculate_shift_pay(shift, calendar)
    except LaborCalculationError as e:
        logger.warning(f"Invalid shift {shift.date} {shift.start_time}-{shift.end_time}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating shift pay: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate shift pay")

@router.post("/labor/weekly", response_model=LaborCalculation)
async def calculate_weekly(request: WeeklyPayRequest, calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Week-level totals for a list of shifts"""
    check_batch_size(request.shifts)
    try:
        return calculate_weekly_pay(request.shifts, calendar)
    except LaborCalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating weekly pay: {e}")
        raise HTTPException(status_code=500, detail="Failed to calculate weekly pay")

@router.post("/labor/weekly/csv")
async def export_weekly_csv(request: WeeklyPayRequest, calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Export the per-shift and weekly labor cost as CSV"""
    check_batch_size(request.shifts)
    try:
        calculations = calculate_shifts(request.shifts, calendar)
        weekly = empty_calculation()
        for calc in calculations:
            weekly = combine_calculations(weekly, calc)

        csv_content = generate_labor_csv(request.shifts, calculations, weekly)
    except LaborCalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error exporting labor CSV: {e}")
        raise HTTPException(status_code=500, detail="Failed to export labor CSV")

    filename = f"labor_{request.shifts[0].date}.csv" if request.shifts else "labor.csv"

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

@router.post("/labor/validate", response_model=List[ScheduleWarning])
async def validate_schedule(request: WeeklyPayRequest):
    """Overlaps, weekly hour limit, long continuous work and short rests in a week of shifts"""
    check_batch_size(request.shifts)
    try:
        return validate_week(request.shifts)
    except LaborCalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error validating schedule: {e}")
        raise HTTPException(status_code=500, detail="Failed to validate schedule")

@router.post("/labor/compensatory-alerts", response_model=CompensatoryReport)
async def compensatory_alerts(request: CompensatoryAlertRequest,
                              calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Compensatory rest owed for Sunday/holiday work, plus the weekly rest and schedule checks"""
    check_batch_size(request.shifts)
    try:
        today = parse_date(request.today) if request.today else date.today()
        alerts = build_compensatory_alerts(
            request.employee_id, request.employee_name, request.shifts, calendar, today
        )
        compliance = check_rest_day_compliance(
            request.employee_id, request.shifts, request.rest_days, request.employee_name
        )
        schedule_warnings = validate_week(request.shifts)
    except LaborCalculationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error building compensatory alerts for {request.employee_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to build compensatory alerts")

    return CompensatoryReport(alerts=alerts, compliance=compliance, schedule_warnings=schedule_warnings)
