"""System API views."""

from dataclasses import asdict

from app.container import container

from .schemas import ConfigItemSchema, InvalidateResponse, SystemConfigResponse, SystemStatusResponse


async def get_system_config() -> SystemConfigResponse:
    config = await container.system.get_system_config()
    return SystemConfigResponse(
        items={kind: [ConfigItemSchema(**asdict(item)) for item in items] for kind, items in config.items()}
    )


def get_system_status() -> SystemStatusResponse:
    status = container.system.get_system_status()
    return SystemStatusResponse(last_write_timestamp=status.last_write_timestamp, cached_keys=status.cached_keys)


def invalidate_cache() -> InvalidateResponse:
    container.system.invalidate_cache()
    return InvalidateResponse(success=True, message="All cached datasets cleared")
