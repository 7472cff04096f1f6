"""System service - config, cache control and status."""

from dataclasses import dataclass

from loguru import logger

from app.models.system.config import ConfigItem
from app.repositories.common.cache import CacheStore
from app.repositories.system.system import SystemReader, SystemWriter


@dataclass
class SystemStatus:
    last_write_timestamp: str | None
    cached_keys: list[str]


class SystemService:
    def __init__(self, system_reader: SystemReader, system_writer: SystemWriter, cache: CacheStore):
        self._reader = system_reader
        self._writer = system_writer
        self._cache = cache

    async def get_system_config(self) -> dict[str, list[ConfigItem]]:
        return await self._reader.get_system_config()

    async def update_system_pref(self, item: str, note: str, modifier: str) -> None:
        await self._writer.update_system_pref(item, note, modifier)

    def invalidate_cache(self) -> None:
        """Drop every cached dataset. The last-write marker is kept."""
        self._cache.invalidate()
        logger.info("All datasets invalidated on request")

    def get_system_status(self) -> SystemStatus:
        return SystemStatus(
            last_write_timestamp=self._reader.get_last_write_timestamp(),
            cached_keys=sorted(self._cache.keys()),
        )
