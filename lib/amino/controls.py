"""Dispatch of control requests to device commands."""

from lib.amino.logging import log_info, log_warn
from lib.amino.models import REBOOT_CONTROL, ButtonControl, ControlRequest, reboot_button
from lib.amino.protocol import COMMAND_REBOOT
from lib.amino.session import Session

# Control property name -> fire-and-forget device command
CONTROL_COMMANDS: dict[str, str] = {
    REBOOT_CONTROL: COMMAND_REBOOT,
}


class ControlDispatcher:
    """Map named controls onto device commands."""

    def __init__(self, session: Session) -> None:
        """Initialize dispatcher.

        Parameters
        ----------
        session : Session
            Connected device session
        """
        self.session = session

    def controls(self) -> list[ButtonControl]:
        """Return the controls this device offers."""
        return [reboot_button()]

    def control_property(self, request: ControlRequest) -> None:
        """Apply one control request.

        Unknown property names are logged and ignored.

        Parameters
        ----------
        request : ControlRequest
            Control to operate

        Raises
        ------
        ConnectionError
            If the command cannot be written
        """
        command = CONTROL_COMMANDS.get(request.property_name)
        if command is None:
            log_warn(
                f"Control property {request.property_name} is invalid",
                device_ip=self.session.host,
            )
            return

        log_info(f"Control {request.property_name}: sending '{command}'", device_ip=self.session.host)
        self.session.write(command)

    def control_properties(self, requests: list[ControlRequest]) -> None:
        """Apply control requests in order, stopping at the first error."""
        for request in requests:
            self.control_property(request)
