"""
Sparse generator overrides keyed by instrument zone.

A ZoneOverrides value maps a zone index to a mapping of SF2 generator index
to value. A zone never holds an empty mapping: removing its last generator
removes the zone.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

from __future__ import annotations

import json
from typing import Iterator, Mapping, Optional

GLOBAL_ZONE = -1


class ZoneOverrides:
    """
    Two-level mapping of zone -> generator -> value.

    All operations are total: reading a missing zone or generator yields None
    and removing one is a no-op.
    """

    def __init__(self, zones: Optional[Mapping[int, Mapping[int, float]]] = None) -> None:
        self._zones: dict[int, dict[int, float]] = {}
        for zone, generators in (zones or {}).items():
            for generator, value in generators.items():
                self.set_override(zone, generator, value)

    def get(self, zone: int) -> Optional[dict[int, float]]:
        """Return a copy of the overrides for a zone, or None if it has none."""
        generators = self._zones.get(zone)
        return dict(generators) if generators is not None else None

    def get_override(self, zone: int, generator: int) -> Optional[float]:
        generators = self._zones.get(zone)
        if generators is None:
            return None
        return generators.get(generator)

    def set_override(self, zone: int, generator: int, value: float) -> None:
        self._zones.setdefault(int(zone), {})[int(generator)] = float(value)

    def remove_override(self, zone: int, generator: int) -> None:
        generators = self._zones.get(zone)
        if generators is None:
            return
        generators.pop(generator, None)
        if not generators:
            del self._zones[zone]

    def remove_all_overrides(self, zone: Optional[int] = None) -> None:
        """Remove the overrides of one zone, or of every zone when zone is None."""
        if zone is None:
            self._zones.clear()
        else:
            self._zones.pop(zone, None)

    @property
    def zones(self) -> list[int]:
        return sorted(self._zones)

    def to_dict(self) -> dict[int, dict[int, float]]:
        return {zone: dict(generators) for zone, generators in self._zones.items()}

    def to_json(self) -> str:
        # JSON object keys are strings; from_json() restores the integers
        return json.dumps(
            {
                str(zone): {str(gen): value for gen, value in sorted(generators.items())}
                for zone, generators in sorted(self._zones.items())
            }
        )

    @classmethod
    def from_json(cls, text: Optional[str]) -> ZoneOverrides:
        if not text:
            return cls()
        raw = json.loads(text)
        return cls(
            {
                int(zone): {int(gen): float(value) for gen, value in generators.items()}
                for zone, generators in raw.items()
            }
        )

    def copy(self) -> ZoneOverrides:
        return ZoneOverrides(self._zones)

    def __contains__(self, zone: object) -> bool:
        return zone in self._zones

    def __iter__(self) -> Iterator[int]:
        return iter(self.zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __bool__(self) -> bool:
        return bool(self._zones)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZoneOverrides):
            return NotImplemented
        return self._zones == other._zones

    def __repr__(self) -> str:
        return f"ZoneOverrides({self._zones!r})"
