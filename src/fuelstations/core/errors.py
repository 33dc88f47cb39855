from __future__ import annotations


class StationApiError(Exception):
    """Base exception for every error the station API reports to callers."""

    kind = "error"

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message)


class ValidationError(StationApiError):
    """Missing or malformed payload field."""

    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"

    def __init__(self, message: str, *, kind: str, field: str) -> None:
        self.field = field
        super().__init__(message, kind=kind)

    @classmethod
    def missing_field(
        cls, field: str, *, owner: str = "request body"
    ) -> ValidationError:
        return cls(
            f"The {owner} must contain a {field} property",
            kind=cls.MISSING_FIELD,
            field=field,
        )

    @classmethod
    def wrong_type(cls, field: str, detail: str) -> ValidationError:
        return cls(
            f"The {field} property {detail}",
            kind=cls.WRONG_TYPE,
            field=field,
        )


class AuthError(StationApiError):
    """Bearer token absent or rejected."""

    MISSING = "missing"
    INVALID = "invalid"

    @classmethod
    def missing(cls) -> AuthError:
        return cls("No token was provided", kind=cls.MISSING)

    @classmethod
    def invalid(cls) -> AuthError:
        return cls("Invalid token", kind=cls.INVALID)


class NotFound(StationApiError):
    kind = "not_found"

    def __init__(self, message: str, *, resource: str, resource_id: int) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(message)

    @classmethod
    def station(cls, station_id: int) -> NotFound:
        return cls("Station not found", resource="station", resource_id=station_id)

    @classmethod
    def pump(cls, pump_id: int) -> NotFound:
        return cls(
            f"Pump with ID {pump_id} not found", resource="pump", resource_id=pump_id
        )


class StoreError(StationApiError):
    """Underlying persistence failure."""

    kind = "store_error"
