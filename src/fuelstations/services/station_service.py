from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, TypeVar

import pydantic

from ..api.schemas.stations import (
    NewPump,
    Pump,
    PumpPricePatch,
    Station,
    StationFields,
    StationPatch,
)
from ..core.errors import NotFound, ValidationError
from ..core.payloads import (
    NEW_PUMP,
    NEW_STATION,
    PUMP_PRICE_PATCH,
    STATION_FIELDS,
    pump_entries,
    require_body,
)
from ..db.models import PumpRecord, StationRecord
from ..db.store import StationStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _coerce(model: type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    try:
        return model.model_validate(dict(payload))
    except pydantic.ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "request body"
        raise ValidationError.wrong_type(
            field, f"is invalid: {error['msg']}"
        ) from exc


def _pump(record: PumpRecord) -> Pump:
    return Pump(
        id=record.id,
        fuel_type=record.fuel_type,
        price=record.price,
        available=record.available,
        station_id=record.station_id,
    )


def merge_station(stored: StationRecord, patch: StationPatch) -> StationRecord:
    """Apply ``patch`` over ``stored``, keeping stored values for falsy fields.

    Only truthy values override: an empty string or a zero coordinate in the
    patch leaves the stored value untouched.
    """
    changes: dict[str, Any] = {}
    for field in STATION_FIELDS:
        value = getattr(patch, field)
        if value:
            changes[field] = value
    return replace(stored, **changes)


class StationService:
    def __init__(self, store: StationStore) -> None:
        self._store = store

    def create(self, payload: Mapping[str, Any]) -> int:
        payload = require_body(payload)
        NEW_STATION.check(payload)
        entries = pump_entries(payload)
        for entry in entries:
            NEW_PUMP.check(entry)

        fields = _coerce(StationFields, payload)
        pumps = [_coerce(NewPump, entry) for entry in entries]

        with self._store.transaction():
            station_id = self._store.add_station(
                id_name=fields.id_name,
                name=fields.name,
                latitude=fields.latitude,
                longitude=fields.longitude,
                city=fields.city,
                address=fields.address,
            )
            for pump in pumps:
                self._store.add_pump(
                    fuel_type=pump.fuel_type,
                    price=pump.price,
                    available=pump.available,
                    station_id=station_id,
                )

        logger.info("Created station %s with %d pumps", station_id, len(pumps))
        return station_id

    def list_all(self) -> list[Station]:
        return [self._with_pumps(record) for record in self._store.list_stations()]

    def get_by_id(self, station_id: int) -> Station:
        return self._with_pumps(self._require_station(station_id))

    def update(self, station_id: int, payload: Mapping[str, Any]) -> Station:
        """Merge ``payload`` into the station and upsert the pumps it lists.

        Entries with an ``id`` update that pump's price; entries without one
        are inserted as new pumps of this station. An unknown pump id aborts
        the update and rolls back everything it already applied.
        """
        stored = self._require_station(station_id)

        payload = require_body(payload)
        patch = _coerce(StationPatch, payload)
        pump_changes: list[PumpPricePatch | NewPump] = []
        for entry in pump_entries(payload):
            if entry.get("id"):
                PUMP_PRICE_PATCH.check(entry)
                pump_changes.append(_coerce(PumpPricePatch, entry))
            else:
                NEW_PUMP.check(entry)
                pump_changes.append(_coerce(NewPump, entry))

        merged = merge_station(stored, patch)
        with self._store.transaction():
            self._store.update_station(merged)
            for pump in pump_changes:
                if isinstance(pump, PumpPricePatch):
                    if self._store.get_pump(pump.id) is None:
                        logger.warning(
                            "Update of station %s references unknown pump %s",
                            station_id,
                            pump.id,
                        )
                        raise NotFound.pump(pump.id)
                    self._store.update_pump_price(pump.id, pump.price)
                else:
                    self._store.add_pump(
                        fuel_type=pump.fuel_type,
                        price=pump.price,
                        available=pump.available,
                        station_id=station_id,
                    )

        logger.info("Updated station %s", station_id)
        return self._with_pumps(merged)

    def delete_by_id(self, station_id: int) -> None:
        self._require_station(station_id)
        # Pumps are left in place and keep pointing at the deleted station.
        self._store.delete_station(station_id)
        logger.info("Deleted station %s", station_id)

    def get_pump(self, pump_id: int) -> Pump:
        record = self._store.get_pump(pump_id)
        if record is None:
            raise NotFound.pump(pump_id)
        return _pump(record)

    def _require_station(self, station_id: int) -> StationRecord:
        record = self._store.get_station(station_id)
        if record is None:
            logger.debug("Station %s not found", station_id)
            raise NotFound.station(station_id)
        return record

    def _with_pumps(self, record: StationRecord) -> Station:
        pumps = self._store.list_pumps_for_station(record.id)
        return Station(
            id=record.id,
            id_name=record.id_name,
            name=record.name,
            latitude=record.latitude,
            longitude=record.longitude,
            city=record.city,
            address=record.address,
            pumps=[_pump(pump) for pump in pumps],
        )
