"""
Building and room API router
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from routers.deps import get_building_service, get_current_user, get_room_service
from schemas.auth import CurrentUser
from schemas.building import Building, BuildingCreate, BuildingUpdate
from schemas.room import Room, RoomCreate, RoomOccupancy, RoomUpdate, RoomWithBuilding
from services.building_service import BuildingService
from services.room_service import RoomService

router = APIRouter(tags=["buildings"])


# ==================== Buildings ====================

@router.get("/api/buildings", response_model=List[Building])
def list_buildings(_: CurrentUser = Depends(get_current_user),
                   service: BuildingService = Depends(get_building_service)):
    return service.list_buildings()


@router.get("/api/buildings/{building_id}", response_model=Building)
def get_building(building_id: str,
                 _: CurrentUser = Depends(get_current_user),
                 service: BuildingService = Depends(get_building_service)):
    return service.get_building(building_id)


@router.post("/api/buildings", response_model=Building, status_code=201)
def create_building(data: BuildingCreate,
                    user: CurrentUser = Depends(get_current_user),
                    service: BuildingService = Depends(get_building_service)):
    return service.create_building(data, user)


@router.patch("/api/buildings/{building_id}", response_model=Building)
def update_building(building_id: str, data: BuildingUpdate,
                    user: CurrentUser = Depends(get_current_user),
                    service: BuildingService = Depends(get_building_service)):
    return service.update_building(building_id, data, user)


@router.delete("/api/buildings/{building_id}", status_code=204)
def delete_building(building_id: str,
                    user: CurrentUser = Depends(get_current_user),
                    service: BuildingService = Depends(get_building_service)):
    service.delete_building(building_id, user)
    return Response(status_code=204)


# ==================== Rooms ====================

@router.get("/api/rooms", response_model=List[RoomWithBuilding])
def list_rooms(building_id: Optional[str] = None, available_only: bool = False,
               _: CurrentUser = Depends(get_current_user),
               service: RoomService = Depends(get_room_service)):
    """Rooms, optionally of one building or only those with a free bed"""
    if available_only:
        return service.get_available_rooms(building_id)
    return service.list_rooms(building_id)


@router.get("/api/rooms/{room_id}", response_model=RoomWithBuilding)
def get_room(room_id: str,
             _: CurrentUser = Depends(get_current_user),
             service: RoomService = Depends(get_room_service)):
    return service.get_room(room_id)


@router.get("/api/rooms/{room_id}/occupancy")
def get_room_occupancy(room_id: str,
                       _: CurrentUser = Depends(get_current_user),
                       service: RoomService = Depends(get_room_service)):
    occupancy: RoomOccupancy = service.get_room_occupancy(room_id)
    return {**occupancy.model_dump(), "available": occupancy.available, "is_full": occupancy.is_full}


@router.post("/api/rooms", response_model=Room, status_code=201)
def create_room(data: RoomCreate,
                user: CurrentUser = Depends(get_current_user),
                service: RoomService = Depends(get_room_service)):
    return service.create_room(data, user)


@router.patch("/api/rooms/{room_id}", response_model=Room)
def update_room(room_id: str, data: RoomUpdate,
                user: CurrentUser = Depends(get_current_user),
                service: RoomService = Depends(get_room_service)):
    return service.update_room(room_id, data, user)


@router.delete("/api/rooms/{room_id}", status_code=204)
def delete_room(room_id: str,
                user: CurrentUser = Depends(get_current_user),
                service: RoomService = Depends(get_room_service)):
    service.delete_room(room_id, user)
    return Response(status_code=204)
