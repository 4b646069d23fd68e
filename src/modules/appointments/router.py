"""Appointments API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from src.core.deps import get_current_tenant, get_store
from src.modules.appointments.schemas import (
    Appointment,
    AppointmentBoard,
    AppointmentDraft,
    BayOccupancy,
    BoxAssignmentRequest,
    StatusTransitionRequest,
)
from src.modules.appointments.service import AppointmentService
from src.modules.studios.store import TenantStore
from src.shared.enums import BusinessModel
from src.shared.schemas import ErrorEnvelope

router = APIRouter(prefix="/api/v1/appointments", tags=["appointments"])

CONFLICT_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorEnvelope},
    status.HTTP_409_CONFLICT: {"model": ErrorEnvelope},
    422: {"model": ErrorEnvelope},
}


def get_service(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> AppointmentService:
    return AppointmentService(store, tenant_key)


@router.get("", response_model=list[Appointment])
async def list_appointments(
    date_value: date = Query(..., alias="date"),
    model: BusinessModel = Query(BusinessModel.FIXED),
    service: AppointmentService = Depends(get_service),
) -> list[Appointment]:
    return await service.list_for_date(date_value, model)


@router.get("/board", response_model=AppointmentBoard)
async def appointment_board(
    model: BusinessModel = Query(BusinessModel.FIXED),
    service: AppointmentService = Depends(get_service),
) -> AppointmentBoard:
    return await service.board(model)


@router.get("/bays", response_model=BayOccupancy)
async def bay_occupancy(service: AppointmentService = Depends(get_service)) -> BayOccupancy:
    return await service.occupancy()


@router.post("", response_model=Appointment, status_code=status.HTTP_201_CREATED, responses=CONFLICT_RESPONSES)
async def create_appointment(
    payload: AppointmentDraft,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.create(payload)


@router.post("/{appointment_id}/status", response_model=Appointment, responses=CONFLICT_RESPONSES)
async def change_status(
    appointment_id: str,
    payload: StatusTransitionRequest,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.transition(appointment_id, payload)


@router.put("/{appointment_id}/box", response_model=Appointment, responses=CONFLICT_RESPONSES)
async def assign_box(
    appointment_id: str,
    payload: BoxAssignmentRequest,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.assign_box(appointment_id, payload.box_id)
