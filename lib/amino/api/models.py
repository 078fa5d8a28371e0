"""Pydantic models for API requests/responses."""

from pydantic import BaseModel, Field


class DeviceStatusResponse(BaseModel):
    """Device connection status."""

    host: str = Field(..., description="Device host IP")
    port: int = Field(..., description="Telnet port")
    connected: bool = Field(..., description="Whether the session is ready")
    state: str = Field(..., description="Session state")


class ControlResponse(BaseModel):
    """Result of applying control requests."""

    host: str = Field(..., description="Device host IP")
    controls: list[str] = Field(..., description="Control properties applied, in order")
    ignored: list[str] = Field(default_factory=list, description="Unknown control properties skipped")
    success: bool = Field(..., description="Whether every request was applied")
