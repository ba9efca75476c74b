import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import FastAPI, HTTPException, Depends, Query

from api.schemas import (
    # Reservation
    CreateReservationRequest, ReservationResponse, PaginatedReservationsResponse,
    # Rooms
    RoomResponse, AvailableRoomResponse, PagedAvailableRoomResponse
)
from api.dependencies import get_current_active_user
from domain.auth import User

from application.services import (
    AvailabilityService, ReservationService, ReservationDetails, AvailableRoom
)
from infrastructure.config import settings
from infrastructure.repositories.in_memory_repositories import (
    InMemoryRoomRepository, InMemoryReservationRepository
)
from infrastructure.seed import seed_rooms
from domain.entities import Room
from domain.enums import RoomType, RoomView, ReservationStatus
from domain.exceptions import (
    ValidationError, NotFoundError, CapacityConflictError,
    ConcurrencyConflictError, InvalidStateTransitionError
)
from domain.value_objects import AvailabilityQuery, Pagination, ReservationRequest

# --- Logging configuration ---
_level = logging.DEBUG if settings.DEBUG else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("app.startup")

# Initialize repositories
room_repo = InMemoryRoomRepository()
reservation_repo = InMemoryReservationRepository(room_repo)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s (DEBUG=%s)", settings.APP_NAME, settings.DEBUG)
    if settings.SEED_ROOMS:
        await seed_rooms(room_repo)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Room availability, stay pricing and reservation lifecycle",
    version="1.0.0",
    lifespan=lifespan
)

# Dependency injection
def get_availability_service() -> AvailabilityService:
    return AvailabilityService(room_repo, reservation_repo)

def get_reservation_service() -> ReservationService:
    return ReservationService(room_repo, reservation_repo)

def get_pagination(
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1)
) -> Pagination:
    return Pagination(offset=offset, limit=limit)

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/room-type", tags=["Enum Reference"])
async def get_room_type_values():
    """Get all RoomType enum values"""
    return {
        "values": [item.name for item in RoomType],
        "description": "Room type values: SINGLE, DOUBLE, PRESIDENTIAL"
    }

@app.get("/api/enums/room-view", tags=["Enum Reference"])
async def get_room_views():
    """Get all RoomView enum values"""
    return {
        "values": [item.name for item in RoomView],
        "description": "Room view values: EXTERIOR, INTERIOR"
    }

@app.get("/api/enums/reservation-status", tags=["Enum Reference"])
async def get_reservation_statuses():
    """Get all ReservationStatus enum values"""
    return {
        "values": [item.name for item in ReservationStatus],
        "description": "Reservation status values: ACTIVE, CANCELLED"
    }

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@app.get("/api/rooms/types", response_model=List[str], tags=["Rooms"])
async def list_room_types(
    service: AvailabilityService = Depends(get_availability_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get room types present in inventory"""
    room_types = await service.list_room_types()
    return [room_type.value for room_type in room_types]

@app.get("/api/rooms/available", response_model=PagedAvailableRoomResponse, tags=["Rooms"])
async def list_available_rooms(
    check_in: date,
    check_out: date,
    people: int = Query(..., ge=1, le=4),
    room_type: Optional[RoomType] = None,
    exterior_view_only: bool = False,
    all_inclusive: bool = False,
    pagination: Pagination = Depends(get_pagination),
    service: AvailabilityService = Depends(get_availability_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get available rooms for a stay with pricing, paginated"""
    query = AvailabilityQuery(
        check_in=check_in,
        check_out=check_out,
        people=people,
        room_type=room_type,
        exterior_view_only=exterior_view_only,
        all_inclusive=all_inclusive
    )
    try:
        page = await service.find_available_rooms_paginated(query, pagination)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PagedAvailableRoomResponse(
        items=[_available_room_to_response(item) for item in page.items],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more
    )

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Create new reservation for the authenticated user"""
    try:
        reservation = await service.create_reservation(
            user_id=current_user.user_id,
            request=ReservationRequest(
                check_in=request.check_in,
                check_out=request.check_out,
                people=request.people,
                room_type=request.room_type,
                all_inclusive=request.all_inclusive
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (CapacityConflictError, ConcurrencyConflictError) as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _reservation_to_response(await service.describe(reservation))

@app.get("/api/reservations", response_model=PaginatedReservationsResponse, tags=["Reservations"])
async def list_reservations(
    pagination: Pagination = Depends(get_pagination),
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get reservations split into past, current and future stays"""
    result = await service.find_paginated_reservations(pagination)

    async def _bucket(reservations):
        return [_reservation_to_response(await service.describe(r)) for r in reservations]

    return PaginatedReservationsResponse(
        past=await _bucket(result.past),
        current=await _bucket(result.current),
        future=await _bucket(result.future),
        total_past=result.total_past,
        total_current=result.total_current,
        total_future=result.total_future
    )

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get reservation by ID"""
    try:
        reservation = await service.get_reservation(reservation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _reservation_to_response(await service.describe(reservation))

@app.post("/api/reservations/{reservation_id}/cancel", response_model=ReservationResponse, tags=["Reservations"])
async def cancel_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Cancel an active reservation"""
    try:
        reservation = await service.cancel_reservation(reservation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _reservation_to_response(await service.describe(reservation))

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _room_to_response(room: Room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        id=room.id,
        type=room.type.value,
        view=room.view.value,
        base_price=room.base_price,
        max_capacity=room.max_capacity,
        is_deleted=room.is_deleted,
        created_at=room.created_at
    )

def _available_room_to_response(item: AvailableRoom) -> AvailableRoomResponse:
    """Convert AvailableRoom read model to AvailableRoomResponse"""
    return AvailableRoomResponse(
        room=_room_to_response(item.room),
        days_count=item.days_count,
        nights_count=item.nights_count,
        base_value=item.base_value,
        weekend_increment=item.weekend_increment,
        days_discount=item.days_discount,
        all_inclusive_total=item.all_inclusive_total,
        total_price=item.total_price
    )

def _reservation_to_response(details: ReservationDetails) -> ReservationResponse:
    """Convert ReservationDetails read model to ReservationResponse"""
    reservation = details.reservation
    return ReservationResponse(
        id=reservation.id,
        check_in=reservation.check_in,
        check_out=reservation.check_out,
        people=reservation.people,
        room_id=reservation.room_id,
        user_id=reservation.user_id,
        total_price=reservation.total_price,
        status=reservation.status.value,
        all_inclusive=reservation.all_inclusive,
        created_at=reservation.created_at,
        room=_room_to_response(details.room) if details.room else None,
        days_count=details.days_count,
        nights_count=details.nights_count,
        base_value=details.base_value,
        weekend_increment=details.weekend_increment,
        days_discount=details.days_discount,
        all_inclusive_total=details.all_inclusive_total
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
