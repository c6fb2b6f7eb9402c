import logging
from typing import List, Optional

from fastapi import HTTPException
from laborpay.core.config import LaborConfig
from laborpay.core.errors import ConfigurationError
from laborpay.models.labor import WorkShift
from laborpay.services.calendar_service import HolidayCalendar, get_holiday_calendar

logger = logging.getLogger(__name__)

async def holiday_calendar(calendar: Optional[str] = None) -> HolidayCalendar:
    """Calendar chosen by the ?calendar= query parameter, or the configured one"""
    try:
        return get_holiday_calendar(calendar)
    except ConfigurationError as e:
        logger.warning(f"Rejected holiday calendar '{calendar}'")
        raise HTTPException(status_code=400, detail=str(e))

def check_batch_size(shifts: List[WorkShift]):
    if len(shifts) > LaborConfig.MAX_SHIFTS_PER_REQUEST:
        raise HTTPException(
            status_code=400,
            detail=f"Too many shifts ({len(shifts)}). Maximum per request is {LaborConfig.MAX_SHIFTS_PER_REQUEST}"
        )
