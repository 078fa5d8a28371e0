"""Custom exceptions for the Amino set-top box monitor."""


class AminoError(Exception):
    """Base exception for all device session errors."""

    def __init__(self, message: str, device_ip: str | None = None) -> None:
        """Initialize device error.

        Parameters
        ----------
        message : str
            Error message
        device_ip : str | None, optional
            Device IP address if applicable, by default None
        """
        super().__init__(message)
        self.message = message
        self.device_ip = device_ip

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.device_ip:
            return f"[{self.device_ip}] {self.message}"
        return self.message


class ConnectionError(AminoError):
    """Raised when the connection cannot be opened, is closed, or is not ready."""

    pass


class AuthenticationError(AminoError):
    """Raised when the device rejects the login."""

    def __init__(
        self,
        message: str,
        device_ip: str | None = None,
        response: str = "",
    ) -> None:
        """Initialize authentication error.

        Parameters
        ----------
        message : str
            Error message
        device_ip : str | None, optional
            Device IP address if applicable, by default None
        response : str, optional
            Full text observed during the handshake, by default ""
        """
        super().__init__(message, device_ip)
        self.response = response


class TimeoutError(AminoError):
    """Raised when no completion is seen within the idle window."""

    def __init__(
        self,
        message: str,
        device_ip: str | None = None,
        timeout: float | None = None,
        output: str = "",
    ) -> None:
        """Initialize timeout error.

        Parameters
        ----------
        message : str
            Error message
        device_ip : str | None, optional
            Device IP address if applicable, by default None
        timeout : float | None, optional
            Timeout value in seconds, by default None
        output : str, optional
            Text accumulated before the timeout, by default ""
        """
        super().__init__(message, device_ip)
        self.timeout = timeout
        self.output = output


class CommandError(AminoError):
    """Raised when the device does not understand a command."""

    def __init__(
        self,
        message: str,
        device_ip: str | None = None,
        command: str | None = None,
        response: str = "",
    ) -> None:
        """Initialize command error.

        Parameters
        ----------
        message : str
            Error message
        device_ip : str | None, optional
            Device IP address if applicable, by default None
        command : str | None, optional
            Command that failed, by default None
        response : str, optional
            Raw device response, by default ""
        """
        super().__init__(message, device_ip)
        self.command = command
        self.response = response
