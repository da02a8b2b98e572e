"""Exceptions raised by the odds gateway core.

The core never renders responses; the HTTP layer maps these to status codes.
"""

from typing import Any


class OddsGatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "ODDS_GATEWAY_ERROR"
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dict for API response."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(OddsGatewayError):
    """Missing or invalid upstream configuration (credential, base URL)."""

    def __init__(self, message: str, *, setting: str | None = None):
        details = {}
        if setting is not None:
            details["setting"] = setting
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class InvalidInput(OddsGatewayError):
    """Caller supplied a value the core cannot work with."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "INVALID_INPUT",
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]  # Truncate

        super().__init__(message, code=code, details=details)
        self.field = field
        self.value = value


class UnknownSport(InvalidInput):
    def __init__(self, value: Any):
        super().__init__(f"Unknown sport: {value!r}", code="UNKNOWN_SPORT", field="sport", value=value)


class UnknownPreset(InvalidInput):
    def __init__(self, value: Any):
        super().__init__(f"Unknown market preset: {value!r}", code="UNKNOWN_PRESET", field="preset", value=value)


class DomainMismatch(InvalidInput):
    """Preset is restricted to a sport family the sport key is not part of."""

    def __init__(self, preset: str, sport_key: str, required_prefix: str):
        super().__init__(
            f"Preset {preset!r} requires a {required_prefix}* sport, got {sport_key!r}",
            code="DOMAIN_MISMATCH",
            field="preset",
            value=preset,
        )
        self.details["sport_key"] = sport_key
        self.details["required_prefix"] = required_prefix
        self.sport_key = sport_key
        self.required_prefix = required_prefix


class InvalidLeg(InvalidInput):
    def __init__(self, message: str, *, value: Any = None, index: int | None = None):
        super().__init__(message, code="INVALID_LEG", field="legs", value=value)
        if index is not None:
            self.details["index"] = index
        self.index = index


class UnknownFormat(InvalidInput):
    def __init__(self, value: Any):
        super().__init__(
            f"Unknown odds format: {value!r} (expected 'american' or 'decimal')",
            code="UNKNOWN_FORMAT",
            field="format",
            value=value,
        )


class NoLegs(InvalidInput):
    def __init__(self, message: str = "At least one leg is required"):
        super().__init__(message, code="NO_LEGS", field="legs")


class UpstreamError(OddsGatewayError):
    """Non-2xx response from The Odds API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        response_body: str | None = None,
        endpoint: str | None = None,
        body_limit: int = 500,
    ):
        details: dict[str, Any] = {"status_code": status_code}
        if response_body is not None:
            response_body = response_body[:body_limit]  # Truncate
            details["response_body"] = response_body
        if endpoint is not None:
            details["endpoint"] = endpoint

        super().__init__(message, code="UPSTREAM_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body


class UpstreamUnavailable(OddsGatewayError):
    """Transport-level failure talking to The Odds API."""

    def __init__(
        self,
        message: str = "Upstream provider unavailable",
        *,
        endpoint: str | None = None,
        code: str = "UPSTREAM_UNAVAILABLE",
    ):
        details = {}
        if endpoint is not None:
            details["endpoint"] = endpoint
        super().__init__(message, code=code, details=details)


class UpstreamTimeout(UpstreamUnavailable):
    def __init__(
        self,
        message: str = "Upstream request timed out",
        *,
        timeout_seconds: float | None = None,
        endpoint: str | None = None,
    ):
        super().__init__(message, endpoint=endpoint, code="UPSTREAM_TIMEOUT")
        if timeout_seconds is not None:
            self.details["timeout_seconds"] = timeout_seconds


class UpstreamMalformedResponse(OddsGatewayError):
    """2xx response whose body is not the JSON we expected."""

    def __init__(self, message: str, *, endpoint: str | None = None):
        details = {}
        if endpoint is not None:
            details["endpoint"] = endpoint
        super().__init__(message, code="UPSTREAM_MALFORMED_RESPONSE", details=details)


class MalformedEvent(OddsGatewayError):
    """A raw event could not be normalized."""

    def __init__(self, message: str, *, index: int | None = None):
        details = {}
        if index is not None:
            details["index"] = index
        super().__init__(message, code="MALFORMED_EVENT", details=details)
        self.index = index
