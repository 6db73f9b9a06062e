"""
Vehicle management endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_log_store, get_rem_store, get_veh_store
from src.application.dto.requests import CreateVehicleRequest, UpdateVehicleRequest
from src.application.dto.responses import (
    ErrorResponse,
    LogEntryListResponse,
    LogEntryResponse,
    ReminderListResponse,
    ReminderResponse,
    VehicleListResponse,
    VehicleResponse,
)
from src.core.entities import Vehicle
from src.core.exceptions import VehicleNotFoundError
from src.infrastructure.storage.sqlite import (
    SQLiteLogEntryStore,
    SQLiteReminderStore,
    SQLiteVehicleStore,
)

router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])


async def _get_or_404(store: SQLiteVehicleStore, vehicle_id: int) -> Vehicle:
    vehicle = await store.get(vehicle_id)
    if vehicle is None:
        raise VehicleNotFoundError(vehicle_id)
    return vehicle


@router.post(
    "",
    response_model=VehicleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_vehicle(
    request: CreateVehicleRequest,
    store: SQLiteVehicleStore = Depends(get_veh_store),
) -> VehicleResponse:
    """Register a new vehicle."""
    vehicle = await store.add(Vehicle(**request.model_dump()))
    return VehicleResponse.from_entity(vehicle)


@router.get("", response_model=VehicleListResponse)
async def list_vehicles(
    store: SQLiteVehicleStore = Depends(get_veh_store),
) -> VehicleListResponse:
    """List all vehicles."""
    vehicles = await store.list_all()
    return VehicleListResponse(
        vehicles=[VehicleResponse.from_entity(v) for v in vehicles],
        total=len(vehicles),
    )


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_vehicle(
    vehicle_id: int,
    store: SQLiteVehicleStore = Depends(get_veh_store),
) -> VehicleResponse:
    """Get a vehicle by ID."""
    return VehicleResponse.from_entity(await _get_or_404(store, vehicle_id))


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_vehicle(
    vehicle_id: int,
    request: UpdateVehicleRequest,
    store: SQLiteVehicleStore = Depends(get_veh_store),
) -> VehicleResponse:
    """Update a vehicle's details."""
    existing = await _get_or_404(store, vehicle_id)
    for field, value in request.changes().items():
        setattr(existing, field, value)

    updated = await store.update(existing)
    return VehicleResponse.from_entity(updated)


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_vehicle(
    vehicle_id: int,
    store: SQLiteVehicleStore = Depends(get_veh_store),
) -> None:
    """Delete a vehicle together with its reminders and log entries."""
    if not await store.delete(vehicle_id):
        raise VehicleNotFoundError(vehicle_id)


@router.get(
    "/{vehicle_id}/reminders",
    response_model=ReminderListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_vehicle_reminders(
    vehicle_id: int,
    store: SQLiteVehicleStore = Depends(get_veh_store),
    reminder_store: SQLiteReminderStore = Depends(get_rem_store),
) -> ReminderListResponse:
    """List a vehicle's reminders."""
    await _get_or_404(store, vehicle_id)
    reminders = await reminder_store.list_by_vehicle(vehicle_id)
    return ReminderListResponse(
        reminders=[ReminderResponse.from_entity(r) for r in reminders],
        total=len(reminders),
    )


@router.get(
    "/{vehicle_id}/log-entries",
    response_model=LogEntryListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_vehicle_log_entries(
    vehicle_id: int,
    store: SQLiteVehicleStore = Depends(get_veh_store),
    log_store: SQLiteLogEntryStore = Depends(get_log_store),
) -> LogEntryListResponse:
    """List a vehicle's maintenance history."""
    await _get_or_404(store, vehicle_id)
    entries = await log_store.list_by_vehicle(vehicle_id)
    return LogEntryListResponse(
        log_entries=[LogEntryResponse.from_entity(e) for e in entries],
        total=len(entries),
    )
