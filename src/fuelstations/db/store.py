from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import cast

from ..core.errors import StoreError
from .engine import IN_MEMORY, connect, create_schema
from .models import PumpRecord, StationRecord

logger = logging.getLogger(__name__)

STATION_COLUMNS = "id, id_name, name, latitude, longitude, city, address"
PUMP_COLUMNS = "id, fuel_type, price, available, station_id"

LIST_STATIONS = f"select {STATION_COLUMNS} from stations order by id"
GET_STATION = f"select {STATION_COLUMNS} from stations where id = ?"
INSERT_STATION = (
    "insert into stations (id_name, name, latitude, longitude, city, address) "
    "values (?, ?, ?, ?, ?, ?)"
)
UPDATE_STATION = (
    "update stations set id_name = ?, name = ?, latitude = ?, longitude = ?, "
    "city = ?, address = ? where id = ?"
)
DELETE_STATION = "delete from stations where id = ?"

LIST_PUMPS_FOR_STATION = (
    f"select {PUMP_COLUMNS} from pumps where station_id = ? order by id"
)
GET_PUMP = f"select {PUMP_COLUMNS} from pumps where id = ?"
INSERT_PUMP = (
    "insert into pumps (fuel_type, price, available, station_id) values (?, ?, ?, ?)"
)
UPDATE_PUMP_PRICE = "update pumps set price = ? where id = ?"

# SQLite integer keys are signed 64-bit.
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def _storable_id(row_id: int) -> bool:
    return MIN_ROW_ID <= row_id <= MAX_ROW_ID


def _station_from_row(row: Sequence[object]) -> StationRecord:
    return StationRecord(
        id=cast(int, row[0]),
        id_name=cast(str, row[1]),
        name=cast(str, row[2]),
        latitude=cast(float, row[3]),
        longitude=cast(float, row[4]),
        city=cast(str, row[5]),
        address=cast(str, row[6]),
    )


def _pump_from_row(row: Sequence[object]) -> PumpRecord:
    return PumpRecord(
        id=cast(int, row[0]),
        fuel_type=cast(str, row[1]),
        price=cast(float, row[2]),
        available=bool(row[3]),
        station_id=cast(int, row[4]),
    )


class StationStore:
    """Persistence primitives for stations and pumps over one SQLite connection.

    Statements outside :meth:`transaction` commit immediately. Inside it they
    commit together when the block exits cleanly and roll back otherwise.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._lock = threading.RLock()
        self._in_transaction = False

    @classmethod
    def open(cls, path: str = IN_MEMORY) -> StationStore:
        connection = connect(path)
        try:
            create_schema(connection)
        except sqlite3.Error as exc:
            connection.close()
            raise StoreError(f"Could not create schema: {exc}") from exc
        return cls(connection)

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            if self._in_transaction:
                yield
                return
            self._in_transaction = True
            try:
                yield
            except BaseException:
                logger.debug("Rolling back station store transaction")
                self._connection.rollback()
                raise
            else:
                self._commit()
            finally:
                self._in_transaction = False

    def list_stations(self) -> list[StationRecord]:
        rows = self._query(LIST_STATIONS, [])
        return [_station_from_row(row) for row in rows]

    def get_station(self, station_id: int) -> StationRecord | None:
        if not _storable_id(station_id):
            return None
        rows = self._query(GET_STATION, [station_id])
        return _station_from_row(rows[0]) if rows else None

    def add_station(
        self,
        id_name: str,
        name: str,
        latitude: float,
        longitude: float,
        city: str,
        address: str,
    ) -> int:
        cursor = self._execute(
            INSERT_STATION, [id_name, name, latitude, longitude, city, address]
        )
        return cast(int, cursor.lastrowid)

    def update_station(self, station: StationRecord) -> bool:
        cursor = self._execute(
            UPDATE_STATION,
            [
                station.id_name,
                station.name,
                station.latitude,
                station.longitude,
                station.city,
                station.address,
                station.id,
            ],
        )
        return cursor.rowcount > 0

    def delete_station(self, station_id: int) -> None:
        self._execute(DELETE_STATION, [station_id])

    def list_pumps_for_station(self, station_id: int) -> list[PumpRecord]:
        rows = self._query(LIST_PUMPS_FOR_STATION, [station_id])
        return [_pump_from_row(row) for row in rows]

    def get_pump(self, pump_id: int) -> PumpRecord | None:
        if not _storable_id(pump_id):
            return None
        rows = self._query(GET_PUMP, [pump_id])
        return _pump_from_row(rows[0]) if rows else None

    def add_pump(
        self, fuel_type: str, price: float, available: bool, station_id: int
    ) -> int:
        cursor = self._execute(
            INSERT_PUMP, [fuel_type, price, 1 if available else 0, station_id]
        )
        return cast(int, cursor.lastrowid)

    def update_pump_price(self, pump_id: int, price: float) -> None:
        self._execute(UPDATE_PUMP_PRICE, [price, pump_id])

    def _query(self, sql: str, params: Sequence[object]) -> list[Sequence[object]]:
        with self._lock:
            try:
                return self._connection.execute(sql, params).fetchall()
            except (sqlite3.Error, OverflowError) as exc:
                raise StoreError(str(exc)) from exc

    def _execute(self, sql: str, params: Sequence[object]) -> sqlite3.Cursor:
        with self._lock:
            try:
                cursor = self._connection.execute(sql, params)
            except (sqlite3.Error, OverflowError) as exc:
                if not self._in_transaction:
                    self._connection.rollback()
                raise StoreError(str(exc)) from exc
            if not self._in_transaction:
                self._commit()
            return cursor

    def _commit(self) -> None:
        try:
            self._connection.commit()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
