"""System API response schemas."""

from pydantic import BaseModel


class ConfigItemSchema(BaseModel):
    value: str
    note: str
    order: int
    color: str | None = None
    value2: str | None = None
    value3: str | None = None
    category: str


class SystemConfigResponse(BaseModel):
    items: dict[str, list[ConfigItemSchema]]


class SystemStatusResponse(BaseModel):
    last_write_timestamp: str | None
    cached_keys: list[str]


class InvalidateResponse(BaseModel):
    success: bool
    message: str
