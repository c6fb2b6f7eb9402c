import logging

from fastapi import APIRouter, HTTPException
from laborpay.core.config import LaborConfig, ServerConfig
from laborpay.core.errors import ConfigurationError
from laborpay.services.calendar_service import get_holiday_calendar
from laborpay.services.labor_service import REGULAR_HOURS_PER_DAY, SURCHARGE_RATES

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/")
async def root():
    return {
        "message": ServerConfig.APP_NAME,
        "version": ServerConfig.APP_VERSION,
        "description": ServerConfig.APP_DESCRIPTION,
        "status": "running",
        "holiday_calendar": LaborConfig.HOLIDAY_CALENDAR,
    }

@router.get("/config")
async def get_public_config():
    """Get public configuration information"""
    return {
        "app_name": ServerConfig.APP_NAME,
        "app_version": ServerConfig.APP_VERSION,
        "holiday_calendar": LaborConfig.HOLIDAY_CALENDAR,
        "max_shifts_per_request": LaborConfig.MAX_SHIFTS_PER_REQUEST,
        "regular_hours_per_day": REGULAR_HOURS_PER_DAY,
        "surcharge_rates": {category.value: rate for category, rate in SURCHARGE_RATES.items()},
    }

@router.get("/health")
async def health_check():
    """Health check, including the configured holiday calendar"""
    try:
        calendar = get_holiday_calendar()
        return {
            "status": "healthy",
            "holiday_calendar": calendar.name,
        }
    except ConfigurationError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unavailable")
