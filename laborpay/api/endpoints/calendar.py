import logging

from fastapi import APIRouter, Depends, HTTPException
from laborpay.api.dependencies import holiday_calendar
from laborpay.core.errors import InvalidDateFormat
from laborpay.models.calendar import DayInfo, HolidayList
from laborpay.services.calendar_service import HolidayCalendar, is_sunday, parse_date

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/calendar/holidays/{year}", response_model=HolidayList)
async def list_holidays(year: int, calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Public holidays of a year according to the selected calendar"""
    if year < 1583 or year > 9999:
        raise HTTPException(status_code=400, detail="Year must be between 1583 and 9999")

    holidays = calendar.holidays_for_year(year)
    if not holidays:
        logger.info(f"Calendar '{calendar.name}' has no holidays for {year}")

    return HolidayList(
        year=year,
        calendar=calendar.name,
        holidays=[d.isoformat() for d in holidays]
    )

@router.get("/calendar/day/{day}", response_model=DayInfo)
async def day_info(day: str, calendar: HolidayCalendar = Depends(holiday_calendar)):
    """Holiday/Sunday status of a date"""
    try:
        parsed = parse_date(day)
    except InvalidDateFormat as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DayInfo(
        date=parsed.isoformat(),
        is_holiday=calendar.is_holiday(parsed),
        is_sunday=is_sunday(parsed)
    )
