from enum import Enum
from pydantic import BaseModel
from typing import List, Optional

class ScheduleIssue(str, Enum):
    OVERLAP = "overlap"
    OVERTIME = "overtime"
    CONSECUTIVE_HOURS = "consecutive_hours"
    SHIFT_GAP = "shift_gap"

class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

class ScheduleWarning(BaseModel):
    """One problem found in a week of shifts"""
    type: ScheduleIssue
    message: str
    severity: IssueSeverity
    shift_indexes: List[int]  # positions in the submitted shift list
    date: Optional[str] = None  # YYYY-MM-DD
    error_code: str
