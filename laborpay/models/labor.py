from enum import Enum
from pydantic import BaseModel
from typing import Dict, List

class PayCategory(str, Enum):
    """Mutually exclusive hour categories a shift is split into"""
    REGULAR = "regular"
    NIGHT = "night"
    OVERTIME_DAY = "overtime_day"
    OVERTIME_NIGHT = "overtime_night"
    SUNDAY_DAY = "sunday_day"
    SUNDAY_NIGHT = "sunday_night"
    HOLIDAY_DAY = "holiday_day"
    HOLIDAY_NIGHT = "holiday_night"

class WorkShift(BaseModel):
    """A recorded shift, as supplied by the roster screens"""
    date: str  # YYYY-MM-DD
    start_time: str  # HH:MM
    end_time: str  # HH:MM, earlier than start_time means next day
    base_salary: float  # full daily wage for 8 regular hours (COP)
    position: str = ""
    location: str = ""

class PayBreakdownLine(BaseModel):
    category: PayCategory
    description: str
    hours: float
    rate: float  # hourly rate with surcharge applied
    amount: float

class LaborCalculation(BaseModel):
    """Pay calculation for one shift, or the sum over several shifts"""
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    night_shift_hours: float = 0.0
    holiday_hours: float = 0.0
    sunday_hours: float = 0.0

    # Surcharges. Only overtime_pay is filled; it carries every surcharge.
    overtime_pay: float = 0.0
    night_shift_pay: float = 0.0
    holiday_pay: float = 0.0
    sunday_pay: float = 0.0

    total_hours: float = 0.0
    total_base_pay: float = 0.0
    total_extra_pay: float = 0.0
    total_pay: float = 0.0

    breakdown: List[PayBreakdownLine] = []
    surcharge_by_category: Dict[PayCategory, float] = {}

class WeeklyPayRequest(BaseModel):
    shifts: List[WorkShift]
