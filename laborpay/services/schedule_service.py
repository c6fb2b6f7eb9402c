# laborpay/services/schedule_service.py
import logging
from datetime import date
from typing import Iterable, List, Tuple

from laborpay.core.errors import LaborCalculationError, ShiftCalculationError
from laborpay.models.labor import WorkShift
from laborpay.models.schedule import IssueSeverity, ScheduleIssue, ScheduleWarning
from laborpay.services.calendar_service import MINUTES_PER_DAY, minutes_to_time, parse_date, shift_bounds

logger = logging.getLogger(__name__)

MAX_WEEKLY_HOURS = 48
MAX_CONSECUTIVE_HOURS = 12
MIN_REST_BETWEEN_SHIFTS = 12  # hours off between two working days

def shift_interval(shift: WorkShift) -> Tuple[int, int]:
    """Start and end of a shift in minutes on a timeline shared by every date"""
    start, end = shift_bounds(shift.start_time, shift.end_time)
    offset = parse_date(shift.date).toordinal() * MINUTES_PER_DAY
    return offset + start, offset + end

def _day(minutes: int) -> str:
    return date.fromordinal(minutes // MINUTES_PER_DAY).isoformat()

def _span(start: int, end: int) -> str:
    return f"{minutes_to_time(start)}-{minutes_to_time(end)}"

def _sorted_intervals(shifts: List[WorkShift]) -> List[Tuple[int, int, int]]:
    """(start, end, index) per shift, ordered by start"""
    intervals = []
    for index, shift in enumerate(shifts):
        try:
            start, end = shift_interval(shift)
        except LaborCalculationError as e:
            raise ShiftCalculationError(index, shift.date, e) from e
        intervals.append((start, end, index))
    return sorted(intervals)

def _work_blocks(intervals: List[Tuple[int, int, int]]) -> List[Tuple[int, int, List[int]]]:
    """Merge shifts that touch or overlap into continuous blocks of work"""
    blocks = []
    for start, end, index in intervals:
        if blocks and start <= blocks[-1][1]:
            block_start, block_end, indexes = blocks[-1]
            blocks[-1] = (block_start, max(block_end, end), indexes + [index])
        else:
            blocks.append((start, end, [index]))
    return blocks

def find_overlapping_shifts(intervals: List[Tuple[int, int, int]]) -> List[ScheduleWarning]:
    warnings = []
    for position, (start, end, index) in enumerate(intervals):
        for other_start, other_end, other_index in intervals[position + 1:]:
            if other_start >= end:
                break
            warnings.append(ScheduleWarning(
                type=ScheduleIssue.OVERLAP,
                message=f"Turnos superpuestos el {_day(other_start)}: {_span(start, end)} y {_span(other_start, other_end)}",
                severity=IssueSeverity.ERROR,
                shift_indexes=sorted([index, other_index]),
                date=_day(other_start),
                error_code="SHIFT_OVERLAP"
            ))
    return warnings

def check_weekly_hours(intervals: List[Tuple[int, int, int]],
                       max_weekly_hours: float = MAX_WEEKLY_HOURS) -> List[ScheduleWarning]:
    weekly_hours = sum(end - start for start, end, _ in intervals) / 60
    if weekly_hours <= max_weekly_hours:
        return []

    return [ScheduleWarning(
        type=ScheduleIssue.OVERTIME,
        message=f"Excede las horas máximas semanales ({weekly_hours:g}h / {max_weekly_hours:g}h)",
        severity=IssueSeverity.ERROR,
        shift_indexes=sorted(index for _, _, index in intervals),
        error_code="WEEKLY_HOURS_EXCEEDED"
    )]

def find_long_work_blocks(blocks: List[Tuple[int, int, List[int]]]) -> List[ScheduleWarning]:
    warnings = []
    for start, end, indexes in blocks:
        hours = (end - start) / 60
        if hours > MAX_CONSECUTIVE_HOURS:
            warnings.append(ScheduleWarning(
                type=ScheduleIssue.CONSECUTIVE_HOURS,
                message=f"{hours:g}h consecutivas ({_span(start, end)}), máximo {MAX_CONSECUTIVE_HOURS}h",
                severity=IssueSeverity.WARNING,
                shift_indexes=sorted(indexes),
                date=_day(start),
                error_code="EXCESSIVE_CONSECUTIVE_HOURS"
            ))
    return warnings

def find_short_rests(blocks: List[Tuple[int, int, List[int]]]) -> List[ScheduleWarning]:
    """Rest shorter than the minimum between blocks that start on different days"""
    warnings = []
    for (prev_start, prev_end, prev_indexes), (next_start, _, next_indexes) in zip(blocks, blocks[1:]):
        rest_hours = (next_start - prev_end) / 60
        if _day(next_start) == _day(prev_start) or rest_hours >= MIN_REST_BETWEEN_SHIFTS:
            continue
        warnings.append(ScheduleWarning(
            type=ScheduleIssue.SHIFT_GAP,
            message=(
                f"Tiempo de descanso insuficiente: {rest_hours:.1f}h entre {minutes_to_time(prev_end)} "
                f"y {minutes_to_time(next_start)} (mínimo {MIN_REST_BETWEEN_SHIFTS}h)"
            ),
            severity=IssueSeverity.WARNING,
            shift_indexes=sorted([prev_indexes[-1], next_indexes[0]]),
            date=_day(next_start),
            error_code="INSUFFICIENT_REST"
        ))
    return warnings

def validate_week(shifts: Iterable[WorkShift], max_weekly_hours: float = MAX_WEEKLY_HOURS) -> List[ScheduleWarning]:
    """
    Check a week of shifts against the scheduling limits.

    Reports overlapping shifts, weekly hours over the legal maximum, continuous
    work longer than 12 hours and less than 12 hours of rest between working
    days. Nothing here changes how the shifts are paid.
    """
    shifts = list(shifts)
    intervals = _sorted_intervals(shifts)
    blocks = _work_blocks(intervals)

    warnings = (
        find_overlapping_shifts(intervals)
        + check_weekly_hours(intervals, max_weekly_hours)
        + find_long_work_blocks(blocks)
        + find_short_rests(blocks)
    )

    if warnings:
        logger.info(f"Schedule check found {len(warnings)} problems in {len(shifts)} shifts")

    return warnings
