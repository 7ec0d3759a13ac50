"""Zone-system catalog reader.

A zone catalog is a YAML mapping of system name to its GeoJSON ``url``, the
``lookup`` column holding the zone id, and the matrix ``sizes`` it applies to:

    MTC-1454:
      url: https://example.org/zone-systems/mtc1454.geojson.gz
      lookup: TAZ1454
      sizes: 1454,1475
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from .filesystem import StorageFileSystem


class ZoneSystem(BaseModel):
    """One named zone system."""

    name: str
    url: str
    lookup: str
    sizes: List[int] = Field(default_factory=list)

    @field_validator("sizes", mode="before")
    @classmethod
    def _split_sizes(cls, value: Any) -> Any:
        if isinstance(value, int):
            return [value]
        if isinstance(value, str):
            return [int(size) for size in value.split(",") if size.strip()]
        return value


def parse_zone_systems(data: dict[str, Any]) -> list[ZoneSystem]:
    """Build ZoneSystems from an already-parsed catalog mapping."""
    return [ZoneSystem(name=name, **entry) for name, entry in (data or {}).items()]


async def load_zone_systems(fs: StorageFileSystem, path: str) -> list[ZoneSystem]:
    """Read and parse a zone catalog through a storage root."""
    return parse_zone_systems(await fs.read_yaml(path))


def zones_for_size(systems: list[ZoneSystem], size: int) -> list[ZoneSystem]:
    """Zone systems applicable to a matrix with ``size`` zones."""
    return [system for system in systems if size in system.sizes]
