from __future__ import annotations


class ParcelError(Exception):
    """
    Base for deterministic validation failures of parcel operations.

    None of these are transient: retrying the same call gives the same error.
    """

    kind = "ParcelError"


class InvalidGeometry(ParcelError, ValueError):
    kind = "InvalidGeometry"


class InvalidAttributes(ParcelError, ValueError):
    """
    Attributes are a str -> str mapping; other keys or values are refused rather
    than coerced.
    """

    kind = "InvalidAttributes"


class ParcelNotFound(ParcelError, LookupError):
    kind = "ParcelNotFound"

    def __init__(self, *parcel_ids: str):
        self.parcel_ids = tuple(parcel_ids)
        joined = ", ".join(repr(p) for p in self.parcel_ids)
        super().__init__(f"Parcel not registered: {joined}")


class InvalidRadius(ParcelError, ValueError):
    kind = "InvalidRadius"

    def __init__(self, radius: float):
        self.radius = radius
        super().__init__(f"Search radius must be a non-negative number of meters, got {radius!r}")
