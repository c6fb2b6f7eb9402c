from pydantic import BaseModel
from typing import List

class HolidayList(BaseModel):
    year: int
    calendar: str
    holidays: List[str]  # YYYY-MM-DD

class DayInfo(BaseModel):
    date: str
    is_holiday: bool
    is_sunday: bool
