"""
The site registry: a fixed, bidirectional mapping between KNUE bulletin-board
site names and the small integer ids embedded in every short code.

The registry is configuration data. It is validated once at construction and
never mutated afterwards; a table that maps two names to one id is rejected
instead of letting one of the reverse entries silently win.
"""
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from config import get_settings


class RegistryConfigError(ValueError):
    """Raised when a site table cannot form a one-to-one registry."""


class SiteRegistry:
    """Immutable name <-> id lookup tables."""

    def __init__(self, sites: Mapping[str, int]):
        by_name: dict[str, int] = {}
        by_id: dict[int, str] = {}

        for name, site_id in sites.items():
            if not isinstance(name, str) or not name.strip():
                raise RegistryConfigError(f"Site name must be a non-empty string, got {name!r}")
            if isinstance(site_id, bool) or not isinstance(site_id, int) or site_id < 1:
                raise RegistryConfigError(f"Site id for {name!r} must be a positive integer, got {site_id!r}")
            if site_id in by_id:
                raise RegistryConfigError(
                    f"Duplicate site id {site_id}: {by_id[site_id]!r} and {name!r}"
                )
            by_name[name] = site_id
            by_id[site_id] = name

        if not by_name:
            raise RegistryConfigError("Site registry cannot be empty")

        self._by_name = MappingProxyType(by_name)
        self._by_id = MappingProxyType(by_id)

    def site_id(self, name: object) -> Optional[int]:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def site_name(self, site_id: object) -> Optional[str]:
        if isinstance(site_id, bool) or not isinstance(site_id, int):
            return None
        return self._by_id.get(site_id)

    @property
    def by_name(self) -> Mapping[str, int]:
        return self._by_name

    @property
    def by_id(self) -> Mapping[int, str]:
        return self._by_id

    def __contains__(self, name: object) -> bool:
        return self.site_id(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"SiteRegistry({len(self)} sites)"


@lru_cache()
def get_registry() -> SiteRegistry:
    """Returns the process-wide registry built from the configured site table."""
    return SiteRegistry(get_settings().sites)
