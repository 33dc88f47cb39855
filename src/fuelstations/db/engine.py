from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

# Foreign keys stay unenforced: deleting a station leaves its pumps in place.
SCHEMA = (
    "create table if not exists stations ("
    "id integer primary key autoincrement, "
    "id_name text not null, "
    "name text not null, "
    "latitude real not null, "
    "longitude real not null, "
    "city text not null, "
    "address text not null)",
    "create table if not exists pumps ("
    "id integer primary key autoincrement, "
    "fuel_type text not null, "
    "price real not null, "
    "available integer not null default 1, "
    "station_id integer not null references stations (id))",
    "create index if not exists pumps_station_id on pumps (station_id)",
)


def connect(path: str) -> sqlite3.Connection:
    logger.info("Opening station database at %s", path)
    # Sync FastAPI endpoints run in a thread pool; the store serializes access.
    connection = sqlite3.connect(path, check_same_thread=False)
    connection.execute("pragma foreign_keys = off")
    return connection


def create_schema(connection: sqlite3.Connection) -> None:
    for statement in SCHEMA:
        connection.execute(statement)
    connection.commit()
