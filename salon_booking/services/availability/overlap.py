"""
Overlap detection shared by slot generation and slot validation.

Buffers widen each occupying appointment: buffer_before is kept free
before it starts and buffer_after after it ends.
"""
from typing import Iterable, List

from salon_booking.schemas.scheduling import OccupyingAppointment, SchedulingSettings
from salon_booking.utils.time_utils import ranges_overlap


def find_conflicts(
        start_minutes: int,
        end_minutes: int,
        occupying: Iterable[OccupyingAppointment],
        settings: SchedulingSettings
) -> List[OccupyingAppointment]:
    """Occupying appointments that collide with [start, end); none when overlaps are allowed"""
    if settings.allow_overlaps:
        return []

    conflicts = []
    for appointment in occupying:
        blocked_start = appointment.start_minutes - settings.buffer_before_minutes
        blocked_end = appointment.end_minutes + settings.buffer_after_minutes

        if ranges_overlap(start_minutes, end_minutes, blocked_start, blocked_end):
            conflicts.append(appointment)

    return conflicts
