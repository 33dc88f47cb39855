from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ValidationError


@dataclass(frozen=True)
class PayloadShape:
    owner: str
    required: tuple[str, ...]

    def first_missing(self, payload: Mapping[str, Any]) -> str | None:
        for field in self.required:
            if field not in payload:
                return field
        return None

    def check(self, payload: Mapping[str, Any]) -> None:
        missing = self.first_missing(payload)
        if missing is not None:
            raise ValidationError.missing_field(missing, owner=self.owner)


STATION_FIELDS = ("id_name", "name", "latitude", "longitude", "city", "address")

NEW_STATION = PayloadShape(owner="request body", required=STATION_FIELDS)
NEW_PUMP = PayloadShape(
    owner="pumps property", required=("fuel_type", "price", "available")
)
PUMP_PRICE_PATCH = PayloadShape(owner="pumps property", required=("id", "price"))


def require_object(payload: object, field: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError.wrong_type(field, "must be an object")
    return payload


def pump_entries(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    pumps = payload.get("pumps")
    if pumps is None:
        return []
    if not isinstance(pumps, list):
        raise ValidationError.wrong_type("pumps", "must be an array")
    return [require_object(entry, "pumps") for entry in pumps]


def require_body(payload: object) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            "The request body must be a JSON object",
            kind=ValidationError.WRONG_TYPE,
            field="request body",
        )
    return payload
