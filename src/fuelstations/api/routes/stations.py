from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from ...services.station_service import StationService
from ..deps import parse_station_id, require_token, station_service
from ..schemas.common import Created, ErrorBody, Message
from ..schemas.stations import Station, StationList


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorBody},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorBody},
    status.HTTP_404_NOT_FOUND: {"model": ErrorBody},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody},
}

router = APIRouter(
    prefix="/stations",
    dependencies=[Depends(require_token)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=StationList)
def list_stations(
    service: StationService = Depends(station_service),
) -> StationList:
    return StationList(stations=service.list_all())


@router.post("", response_model=Created, status_code=status.HTTP_201_CREATED)
def create_station(
    payload: Any = Body(default=None),
    service: StationService = Depends(station_service),
) -> Created:
    station_id = service.create(payload)
    return Created(message="Created", id=station_id)


@router.get("/{station_id}", response_model=Station)
def get_station(
    station_id: str, service: StationService = Depends(station_service)
) -> Station:
    return service.get_by_id(parse_station_id(station_id))


@router.put("/{station_id}", response_model=Station)
def update_station(
    station_id: str,
    payload: Any = Body(default=None),
    service: StationService = Depends(station_service),
) -> Station:
    return service.update(parse_station_id(station_id), payload)


@router.delete("/{station_id}", response_model=Message)
def delete_station(
    station_id: str, service: StationService = Depends(station_service)
) -> Message:
    service.delete_by_id(parse_station_id(station_id))
    return Message(message="Station deleted successfully")
