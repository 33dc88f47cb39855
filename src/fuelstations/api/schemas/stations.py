from __future__ import annotations

from pydantic import BaseModel


class Pump(BaseModel):
    id: int
    fuel_type: str
    price: float
    available: bool
    station_id: int


class Station(BaseModel):
    id: int
    id_name: str
    name: str
    latitude: float
    longitude: float
    city: str
    address: str
    pumps: list[Pump] = []


class StationList(BaseModel):
    stations: list[Station]


class StationFields(BaseModel):
    id_name: str
    name: str
    latitude: float
    longitude: float
    city: str
    address: str


class StationPatch(BaseModel):
    id_name: str | None = None
    name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    city: str | None = None
    address: str | None = None


class NewPump(BaseModel):
    fuel_type: str
    price: float
    available: bool


class PumpPricePatch(BaseModel):
    id: int
    price: float
