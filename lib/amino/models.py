"""Pydantic models for statistics snapshots and controls."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

REBOOT_CONTROL = "reboot"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ButtonControl(BaseModel):
    """Button-style control advertised alongside the statistics."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Control property name")
    label: str = Field(..., description="Button label")
    label_pressed: str = Field(..., alias="labelPressed", description="Label while pressed")
    grace_period: int = Field(
        default=10000,
        alias="gracePeriod",
        description="Milliseconds to wait before the next poll after pressing",
    )
    value: str = Field(default="0", description="Current control value")
    timestamp: datetime = Field(default_factory=_now, description="When the control was built")


def reboot_button() -> ButtonControl:
    """Build the reboot button."""
    return ButtonControl(
        name=REBOOT_CONTROL,
        label="Reboot",
        label_pressed="Rebooting...",
        grace_period=10000,
        value="0",
    )


class StatisticsSnapshot(BaseModel):
    """Metrics gathered by one poll.

    Numeric fields are None when that metric could not be parsed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kernel_version: str = Field(default="Unknown", alias="kernelVersion")
    mac_address: str = Field(default="", alias="macAddress")
    cpu_percentage: float | None = Field(default=None, alias="cpuPercentage")
    number_of_processes: int | None = Field(default=None, alias="numberOfProcesses")
    memory_total: float | None = Field(default=None, alias="memoryTotal", description="GiB")
    memory_in_use: float | None = Field(default=None, alias="memoryInUse", description="GiB")
    network_in: float | None = Field(default=None, alias="networkIn", description="MiB/s")
    network_out: float | None = Field(default=None, alias="networkOut", description="MiB/s")
    reboot: str = Field(default="0")
    controls: tuple[ButtonControl, ...] = Field(default_factory=tuple)

    def extended_statistics(self) -> dict[str, str]:
        """Return the string-valued statistics keyed by exposed name."""
        return {
            "kernelVersion": self.kernel_version,
            "macAddress": self.mac_address,
            "reboot": self.reboot,
        }

    def generic_statistics(self) -> dict[str, float | int | None]:
        """Return the numeric statistics keyed by exposed name."""
        return {
            "cpuPercentage": self.cpu_percentage,
            "numberOfProcesses": self.number_of_processes,
            "memoryTotal": self.memory_total,
            "memoryInUse": self.memory_in_use,
            "networkIn": self.network_in,
            "networkOut": self.network_out,
        }


class ControlRequest(BaseModel):
    """Request to operate a named control."""

    model_config = ConfigDict(populate_by_name=True)

    property_name: str = Field(..., alias="property", description="Control property name")
    value: str | None = Field(default=None, description="Requested value")
