"""
Reminder management endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_complete_reminder_use_case,
    get_rem_store,
    get_veh_store,
)
from src.application.dto.requests import (
    CompleteReminderRequest,
    CreateReminderRequest,
    UpdateReminderRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    ReminderListResponse,
    ReminderResponse,
)
from src.application.use_cases import CompleteReminderUseCase
from src.core.entities import Reminder
from src.core.exceptions import (
    ReminderAlreadyCompletedError,
    ReminderNotFoundError,
    VehicleNotFoundError,
)
from src.infrastructure.storage.sqlite import SQLiteReminderStore, SQLiteVehicleStore

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


async def _get_or_404(
    store: SQLiteReminderStore, reminder_id: int, with_vehicle: bool = False
) -> Reminder:
    reminder = await store.get(reminder_id, with_vehicle=with_vehicle)
    if reminder is None:
        raise ReminderNotFoundError(reminder_id)
    return reminder


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_reminder(
    request: CreateReminderRequest,
    store: SQLiteReminderStore = Depends(get_rem_store),
    vehicle_store: SQLiteVehicleStore = Depends(get_veh_store),
) -> ReminderResponse:
    """Schedule a new reminder for a vehicle."""
    if await vehicle_store.get(request.vehicle_id) is None:
        raise VehicleNotFoundError(request.vehicle_id)

    created = await store.add(Reminder(**request.model_dump()))
    return ReminderResponse.from_entity(created)


@router.get("", response_model=ReminderListResponse)
async def list_reminders(
    vehicle_id: int | None = Query(default=None, gt=0),
    include_completed: bool = True,
    store: SQLiteReminderStore = Depends(get_rem_store),
) -> ReminderListResponse:
    """List reminders with their vehicles, optionally for one vehicle."""
    if vehicle_id is not None:
        reminders = await store.list_by_vehicle(vehicle_id)
        if not include_completed:
            reminders = [r for r in reminders if not r.is_completed]
    else:
        reminders = await store.list_all_with_vehicle(
            include_completed=include_completed
        )
    return ReminderListResponse(
        reminders=[ReminderResponse.from_entity(r) for r in reminders],
        total=len(reminders),
    )


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_reminder(
    reminder_id: int,
    store: SQLiteReminderStore = Depends(get_rem_store),
) -> ReminderResponse:
    """Get a reminder by ID."""
    reminder = await _get_or_404(store, reminder_id, with_vehicle=True)
    return ReminderResponse.from_entity(reminder)


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_reminder(
    reminder_id: int,
    request: UpdateReminderRequest,
    store: SQLiteReminderStore = Depends(get_rem_store),
) -> ReminderResponse:
    """Edit an open reminder."""
    existing = await _get_or_404(store, reminder_id)
    if existing.is_completed:
        raise ReminderAlreadyCompletedError(reminder_id)

    for field, value in request.changes().items():
        setattr(existing, field, value)

    updated = await store.update(existing)
    return ReminderResponse.from_entity(updated)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_reminder(
    reminder_id: int,
    store: SQLiteReminderStore = Depends(get_rem_store),
) -> None:
    """Delete a reminder."""
    if not await store.delete(reminder_id):
        raise ReminderNotFoundError(reminder_id)


@router.post(
    "/{reminder_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def complete_reminder(
    reminder_id: int,
    request: CompleteReminderRequest,
    use_case: CompleteReminderUseCase = Depends(get_complete_reminder_use_case),
) -> None:
    """
    Complete a reminder.

    Writes a log entry for the work done and, when requested, schedules
    the next occurrence as a new reminder. All or nothing.
    """
    await use_case.execute(
        reminder_id=reminder_id,
        log_description=request.log_description,
        log_date=request.log_date,
        recreate=request.recreate,
        new_due_date=request.new_due_date,
    )
