"""
Maintenance log endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_log_store, get_veh_store
from src.application.dto.requests import CreateLogEntryRequest, UpdateLogEntryRequest
from src.application.dto.responses import (
    ErrorResponse,
    LogEntryListResponse,
    LogEntryResponse,
)
from src.core.entities import LogEntry
from src.core.exceptions import LogEntryNotFoundError, VehicleNotFoundError
from src.infrastructure.storage.sqlite import SQLiteLogEntryStore, SQLiteVehicleStore

router = APIRouter(prefix="/api/log-entries", tags=["log-entries"])


async def _get_or_404(store: SQLiteLogEntryStore, log_entry_id: int) -> LogEntry:
    entry = await store.get(log_entry_id)
    if entry is None:
        raise LogEntryNotFoundError(log_entry_id)
    return entry


@router.post(
    "",
    response_model=LogEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_log_entry(
    request: CreateLogEntryRequest,
    store: SQLiteLogEntryStore = Depends(get_log_store),
    vehicle_store: SQLiteVehicleStore = Depends(get_veh_store),
) -> LogEntryResponse:
    """Record work done on a vehicle."""
    if await vehicle_store.get(request.vehicle_id) is None:
        raise VehicleNotFoundError(request.vehicle_id)

    created = await store.add(LogEntry(**request.model_dump()))
    # Re-read so the response carries the joined vehicle
    return LogEntryResponse.from_entity(await _get_or_404(store, created.id))


@router.get("", response_model=LogEntryListResponse)
async def list_log_entries(
    vehicle_id: int | None = Query(default=None, gt=0),
    store: SQLiteLogEntryStore = Depends(get_log_store),
) -> LogEntryListResponse:
    """List log entries, optionally for one vehicle."""
    if vehicle_id is not None:
        entries = await store.list_by_vehicle(vehicle_id)
    else:
        entries = await store.list_all()
    return LogEntryListResponse(
        log_entries=[LogEntryResponse.from_entity(e) for e in entries],
        total=len(entries),
    )


@router.get(
    "/{log_entry_id}",
    response_model=LogEntryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_log_entry(
    log_entry_id: int,
    store: SQLiteLogEntryStore = Depends(get_log_store),
) -> LogEntryResponse:
    """Get a log entry by ID."""
    return LogEntryResponse.from_entity(await _get_or_404(store, log_entry_id))


@router.put(
    "/{log_entry_id}",
    response_model=LogEntryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_log_entry(
    log_entry_id: int,
    request: UpdateLogEntryRequest,
    store: SQLiteLogEntryStore = Depends(get_log_store),
) -> LogEntryResponse:
    """Update a log entry."""
    existing = await _get_or_404(store, log_entry_id)
    for field, value in request.changes().items():
        setattr(existing, field, value)

    updated = await store.update(existing)
    return LogEntryResponse.from_entity(updated)


@router.delete(
    "/{log_entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_log_entry(
    log_entry_id: int,
    store: SQLiteLogEntryStore = Depends(get_log_store),
) -> None:
    """Delete a log entry."""
    if not await store.delete(log_entry_id):
        raise LogEntryNotFoundError(log_entry_id)
