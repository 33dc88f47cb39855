from __future__ import annotations

import re

from fastapi import Header, Request

from ..core.errors import ValidationError
from ..core.tokens import TokenService
from ..services.station_service import StationService

STATION_ID_PATTERN = re.compile(r"-?[0-9]+")


def station_service(request: Request) -> StationService:
    return request.app.state.station_service


def token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def require_token(
    request: Request, authorization: str | None = Header(default=None)
) -> str:
    return token_service(request).verify(authorization)


def parse_station_id(raw: str) -> int:
    if STATION_ID_PATTERN.fullmatch(raw) is None:
        raise ValidationError(
            "Invalid station ID", kind=ValidationError.WRONG_TYPE, field="id"
        )
    return int(raw)
