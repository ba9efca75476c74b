"""Room inventory seeding"""
import logging
from typing import List, Tuple

from domain.entities import Room
from domain.enums import RoomType, RoomView
from domain.repositories import RoomRepository

logger = logging.getLogger(__name__)

# (type, view, base price, max capacity, count)
DEFAULT_INVENTORY: List[Tuple[RoomType, RoomView, int, int, int]] = [
    (RoomType.SINGLE, RoomView.EXTERIOR, 60000, 1, 5),
    (RoomType.SINGLE, RoomView.INTERIOR, 60000, 1, 5),
    (RoomType.DOUBLE, RoomView.EXTERIOR, 100000, 2, 8),
    (RoomType.DOUBLE, RoomView.INTERIOR, 100000, 2, 7),
    (RoomType.PRESIDENTIAL, RoomView.EXTERIOR, 160000, 4, 3),
    (RoomType.PRESIDENTIAL, RoomView.INTERIOR, 160000, 4, 2),
]


async def seed_rooms(repository: RoomRepository, inventory=DEFAULT_INVENTORY) -> int:
    """Populate an empty room store. Returns the number of rooms created."""
    if await repository.count_rooms() > 0:
        logger.info("Rooms data already exists, skipping seed")
        return 0

    room_id = 0
    for room_type, view, base_price, max_capacity, count in inventory:
        for _ in range(count):
            room_id += 1
            await repository.save(Room(
                id=room_id,
                type=room_type,
                view=view,
                base_price=base_price,
                max_capacity=max_capacity
            ))

    logger.info("Seeded %d rooms", room_id)
    return room_id
