from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StationRecord:
    id: int
    id_name: str
    name: str
    latitude: float
    longitude: float
    city: str
    address: str


@dataclass(frozen=True)
class PumpRecord:
    id: int
    fuel_type: str
    price: float
    available: bool
    station_id: int
