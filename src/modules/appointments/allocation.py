"""Bay (box) allocation for FIXED appointments and driver capacity for DELIVERY ones.

Occupancy is always derived from the appointment list, never stored.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.core.exceptions import BayConflict, RouteCapacityExceeded, ValidationError
from src.modules.appointments.schemas import Appointment, BayOccupancy, BayStatus
from src.shared.enums import AppointmentStatus

ON_ROUTE_STATUSES = frozenset({AppointmentStatus.EM_ROTA, AppointmentStatus.EM_EXECUCAO})


def occupied_bays(appointments: Iterable[Appointment]) -> dict[int, Appointment]:
    """Map bay number to the FIXED appointment currently being serviced in it."""
    occupied: dict[int, Appointment] = {}
    for appointment in appointments:
        if (
            not appointment.is_delivery
            and appointment.status == AppointmentStatus.EM_EXECUCAO
            and appointment.box_id is not None
        ):
            occupied.setdefault(appointment.box_id, appointment)
    return occupied


def bay_occupancy(appointments: Iterable[Appointment], box_capacity: int) -> BayOccupancy:
    occupied = occupied_bays(appointments)
    bays = [BayStatus(box_id=box_id, appointment=occupied.get(box_id)) for box_id in range(1, box_capacity + 1)]
    in_use = sum(1 for bay in bays if bay.in_use)
    return BayOccupancy(
        box_capacity=box_capacity,
        in_use=in_use,
        utilization_rate=round(in_use / box_capacity * 100, 1) if box_capacity else 0.0,
        bays=bays,
    )


def first_free_bay(appointments: Iterable[Appointment], box_capacity: int) -> int | None:
    occupied = occupied_bays(appointments)
    return next((box_id for box_id in range(1, box_capacity + 1) if box_id not in occupied), None)


def ensure_bay_in_range(box_id: int, box_capacity: int) -> None:
    if not 1 <= box_id <= box_capacity:
        raise ValidationError(f"Bay {box_id} does not exist, this studio has bays 1 to {box_capacity}")


def ensure_bay_free(appointments: Iterable[Appointment], box_id: int, appointment_id: str) -> None:
    holder = occupied_bays(item for item in appointments if item.id != appointment_id).get(box_id)
    if holder is not None:
        raise BayConflict(f"Bay {box_id} is already servicing another vehicle, choose another bay")


def ensure_route_capacity(
    appointments: Iterable[Appointment],
    driver_capacity: int | None,
    appointment_id: str,
) -> None:
    if driver_capacity is None:
        return
    on_route = sum(
        1
        for item in appointments
        if item.is_delivery and item.status in ON_ROUTE_STATUSES and item.id != appointment_id
    )
    if on_route >= driver_capacity:
        raise RouteCapacityExceeded(f"All {driver_capacity} drivers are on a route")
