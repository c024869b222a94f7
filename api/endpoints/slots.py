"""Endpoints related to bookable slots"""

from typing import Any

from fastapi import APIRouter, status

from api import models
from api.auth import admin_auth
from api.database import db, filter_by, select
from api.exceptions.api_exception import responses
from api.exceptions.auth import admin_responses
from api.exceptions.events import EventNotFoundException
from api.exceptions.slots import SlotNotAvailableException, SlotNotBookedException, SlotNotFoundException
from api.logger import get_logger
from api.schemas.slots import BookSlot, CreateSlot, Slot, SlotRemoved, UpdateSlot
from api.schemas.user import User
from api.services import events
from api.utils.cache import clear_cache, redis_cached


router = APIRouter()

logger = get_logger(__name__)


async def expand(slots: list[models.Slot]) -> list[dict[str, Any]]:
    """Serialize the slots and embed the event each of them belongs to."""

    event_map = {event_id: await events.get_event(event_id) for event_id in {slot.event_id for slot in slots}}
    return [{**slot.serialize, "event": event_map[slot.event_id]} for slot in slots]


async def get_expanded_slot(slot_id: str) -> dict[str, Any]:
    slot = await db.get(models.Slot, id=slot_id)
    if not slot:
        raise SlotNotFoundException

    return (await expand([slot]))[0]


@redis_cached("slots")
async def list_all_slots() -> list[dict[str, Any]]:
    return await expand(await db.all(select(models.Slot).order_by(models.Slot.date, models.Slot.start_time)))


@redis_cached("slots", "event_id")
async def list_event_slots(event_id: str) -> list[dict[str, Any]]:
    return await expand(
        await db.all(filter_by(models.Slot, event_id=event_id).order_by(models.Slot.date, models.Slot.start_time))
    )


@router.get("/slots", responses=responses(list[Slot]))
async def get_slots() -> Any:
    """Return all slots."""

    return await list_all_slots()


@router.get("/slots/event/{event_id}", responses=responses(list[Slot]))
async def get_slots_by_event(event_id: str) -> Any:
    """Return all slots of an event."""

    return await list_event_slots(event_id)


@router.get("/slots/{slot_id}", responses=responses(Slot, SlotNotFoundException))
async def get_slot(slot_id: str) -> Any:
    """Return a single slot."""

    return await get_expanded_slot(slot_id)


@router.post(
    "/slots",
    status_code=status.HTTP_201_CREATED,
    responses=admin_responses(Slot, EventNotFoundException),
)
async def create_slot(data: CreateSlot, admin: User = admin_auth) -> Any:
    """
    Create a new slot for an event.

    Times may be given in 24-hour (`14:30`) or 12-hour (`2:30 PM`) format,
    the date is stored as the UTC calendar day of the given value.

    *Requirements:* **ADMIN**
    """

    if not await events.exists_event(data.event_id):
        raise EventNotFoundException

    slot = await models.Slot.create(
        data.event_id, data.date, data.start_time, data.end_time, data.purpose, created_by=admin.id
    )
    await db.commit()
    logger.info(f"Slot {slot.id} for event {slot.event_id} created by {admin.id}")

    await clear_cache("slots")

    return (await expand([slot]))[0]


@router.put("/slots/{slot_id}", responses=admin_responses(Slot, SlotNotFoundException))
async def update_slot(data: UpdateSlot, slot_id: str, admin: User = admin_auth) -> Any:
    """
    Update a slot. Omitted fields are left untouched.

    *Requirements:* **ADMIN**
    """

    slot = await db.get(models.Slot, id=slot_id)
    if not slot:
        raise SlotNotFoundException

    slot.update(date=data.date, start_time=data.start_time, end_time=data.end_time, purpose=data.purpose)
    await db.commit()
    logger.info(f"Slot {slot.id} updated by {admin.id}")

    await clear_cache("slots")

    return (await expand([slot]))[0]


@router.delete("/slots/{slot_id}", responses=admin_responses(SlotRemoved, SlotNotFoundException))
async def delete_slot(slot_id: str, admin: User = admin_auth) -> Any:
    """
    Delete a slot.

    *Requirements:* **ADMIN**
    """

    slot = await db.get(models.Slot, id=slot_id)
    if not slot:
        raise SlotNotFoundException

    await db.delete(slot)
    await db.commit()
    logger.info(f"Slot {slot_id} deleted by {admin.id}")

    await clear_cache("slots")

    return {"message": "Slot removed successfully"}


@router.post(
    "/slots/{slot_id}/book", responses=responses(Slot, SlotNotFoundException, SlotNotAvailableException)
)
async def book_slot(data: BookSlot, slot_id: str) -> Any:
    """Book an available slot. No authentication is required."""

    if not await models.Slot.book(slot_id, data.name, data.email, data.enrollment):
        if not await db.exists(filter_by(models.Slot, id=slot_id)):
            raise SlotNotFoundException
        raise SlotNotAvailableException

    await db.commit()
    logger.info(f"Slot {slot_id} booked")

    await clear_cache("slots")

    return await get_expanded_slot(slot_id)


@router.put(
    "/slots/{slot_id}/cancel",
    responses=admin_responses(Slot, SlotNotFoundException, SlotNotBookedException),
)
async def cancel_booking(slot_id: str, admin: User = admin_auth) -> Any:
    """
    Cancel the booking of a slot and make it available again.

    *Requirements:* **ADMIN**
    """

    if not await models.Slot.cancel(slot_id):
        if not await db.exists(filter_by(models.Slot, id=slot_id)):
            raise SlotNotFoundException
        raise SlotNotBookedException

    await db.commit()
    logger.info(f"Booking of slot {slot_id} cancelled by {admin.id}")

    await clear_cache("slots")

    return await get_expanded_slot(slot_id)
