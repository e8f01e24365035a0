from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Iterable, Mapping

from shapely.errors import GEOSException
from shapely.geometry import Polygon

from geo.aoi import BBox
from geo.types import as_ring
from parcels.errors import InvalidAttributes, InvalidGeometry, ParcelNotFound
from parcels.types import HighlightState, Parcel
from settings.types import ParcelStyle

logger = logging.getLogger(__name__)

MIN_RING_POINTS = 3


class ParcelRegistry:
    """
    In-memory system of record for cadastral shapes: parcel id -> `Parcel`.

    One instance per map session; nothing here is module-level. A single lock
    covers every mutation and every multi-entry read, so queries always see whole
    parcels even when the HTTP layer calls in from worker threads.
    """

    def __init__(self, *, default_style: ParcelStyle | None = None):
        self._parcels: dict[str, Parcel] = {}
        self._lock = threading.RLock()
        self.default_style = default_style or ParcelStyle()

    def register(
        self,
        parcel_id: str,
        ring: Iterable[Any],
        attributes: Mapping[str, Any] | None = None,
        *,
        style: ParcelStyle | None = None,
    ) -> Parcel:
        """
        Insert or replace the parcel at `parcel_id` (last write wins, no merge).

        Re-registering resets the highlight state. Self-intersecting and
        antimeridian-crossing rings are accepted as-is. Ids must be strings and
        attributes a str -> str mapping; nothing is coerced.
        """
        if not isinstance(parcel_id, str):
            raise TypeError(f"Parcel id must be a str, got {type(parcel_id).__name__}")
        attrs = clean_attributes(parcel_id, attributes)

        try:
            boundary = as_ring(ring)
        except (TypeError, ValueError) as e:
            logger.info("Rejected boundary for parcel %r: %s", parcel_id, e)
            raise InvalidGeometry(f"Parcel {parcel_id!r}: {e}") from e

        if len(boundary) < MIN_RING_POINTS:
            logger.info(
                "Rejected boundary for parcel %r: %d points", parcel_id, len(boundary)
            )
            raise InvalidGeometry(
                f"Parcel {parcel_id!r}: boundary needs at least {MIN_RING_POINTS} points, "
                f"got {len(boundary)}"
            )

        if logger.isEnabledFor(logging.DEBUG) and not _is_simple_ring(boundary):
            logger.debug("Parcel %r has a self-intersecting boundary", parcel_id)

        parcel = Parcel(
            id=parcel_id,
            boundary=boundary,
            attributes=attrs,
            style=style or self.default_style,
        )
        with self._lock:
            replaced = parcel.id in self._parcels
            self._parcels[parcel.id] = parcel
        logger.debug(
            "%s parcel %r (%d points)",
            "Replaced" if replaced else "Registered",
            parcel.id,
            len(boundary),
        )
        return parcel

    def get(self, parcel_id: str) -> Parcel | None:
        with self._lock:
            return self._parcels.get(parcel_id)

    def require(self, *parcel_ids: str) -> list[Parcel]:
        """
        Fetch several parcels atomically; `ParcelNotFound` names every missing id.
        """
        with self._lock:
            missing = [pid for pid in parcel_ids if pid not in self._parcels]
            if missing:
                raise ParcelNotFound(*missing)
            return [self._parcels[pid] for pid in parcel_ids]

    def remove(self, parcel_id: str) -> None:
        with self._lock:
            removed = self._parcels.pop(parcel_id, None)
        if removed is not None:
            logger.debug("Removed parcel %r", parcel_id)

    def bounding_box(self, parcel_id: str) -> BBox | None:
        parcel = self.get(parcel_id)
        return parcel.bbox if parcel is not None else None

    def set_highlight_state(self, parcel_id: str, state: HighlightState) -> Parcel:
        with self._lock:
            current = self._parcels.get(parcel_id)
            if current is None:
                raise ParcelNotFound(parcel_id)
            if current.highlight_state is state:
                return current
            updated = replace(current, highlight_state=state)
            self._parcels[parcel_id] = updated
        logger.debug("Parcel %r -> %s", parcel_id, state.value)
        return updated

    def snapshot(self) -> list[Parcel]:
        with self._lock:
            return list(self._parcels.values())

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._parcels.keys())

    def clear(self) -> None:
        with self._lock:
            n = len(self._parcels)
            self._parcels.clear()
        logger.debug("Cleared %d parcels", n)

    def __len__(self) -> int:
        with self._lock:
            return len(self._parcels)

    def __contains__(self, parcel_id: object) -> bool:
        with self._lock:
            return parcel_id in self._parcels


def clean_attributes(parcel_id: str, attributes: Mapping[str, Any] | None) -> dict[str, str]:
    out: dict[str, str] = {}
    for k, v in (attributes or {}).items():
        if not isinstance(k, str) or not isinstance(v, str):
            logger.info("Rejected attribute %r=%r for parcel %r", k, v, parcel_id)
            raise InvalidAttributes(
                f"Parcel {parcel_id!r}: attribute {k!r} must map a str to a str, "
                f"got {type(v).__name__}"
            )
        out[k] = v
    return out


def _is_simple_ring(boundary: tuple) -> bool:
    try:
        return bool(Polygon([(p.lng, p.lat) for p in boundary]).is_valid)
    except (GEOSException, ValueError):
        return False
