"""Telnet shell session with an Amino set-top box."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from lib.amino.exceptions import (
    AuthenticationError,
    CommandError,
    ConnectionError,
    TimeoutError,
)
from lib.amino.logging import log_debug, log_info
from lib.amino.protocol import (
    LOGIN_PROMPT,
    PASSWORD_PROMPT,
    PROMPT,
    READ_TIMEOUT,
    Classifier,
    Status,
    Verdict,
    classify_login,
    classify_response,
    expect_literal,
    expect_login_prompt,
)
from lib.amino.sampling import SampleState
from lib.amino.transport import PexpectTransport, Transport


class SessionState(Enum):
    """Connection state of a session."""

    DISCONNECTED = "disconnected"
    AUTHENTICATING = "authenticating"
    READY = "ready"


@dataclass(frozen=True)
class CommandResult:
    """A command and the raw text the device answered with."""

    command: str
    output: str


def monotonic_ms() -> float:
    """Return a monotonic clock reading in milliseconds."""
    return time.monotonic() * 1000


class Session:
    """One authenticated shell session with one device.

    Not re-entrant: callers must serialize ``send``/``write`` calls.
    """

    def __init__(
        self,
        host: str,
        port: int = 23,
        username: str = "root",
        password: str = "",
        transport: Transport | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize session.

        Parameters
        ----------
        host : str
            Target host IP address
        port : int, optional
            Telnet port, by default 23
        username : str, optional
            Username sent at the login prompt, by default "root"
        password : str, optional
            Password sent at the password prompt, by default ""
        transport : Transport | None, optional
            Line transport, by default a PexpectTransport to host:port
        clock : Callable[[], float] | None, optional
            Millisecond clock used to timestamp samples, by default monotonic
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.transport = transport or PexpectTransport(host, port)
        self.clock = clock or monotonic_ms
        self.state = SessionState.DISCONNECTED
        self.sample_state = SampleState()
        self._in_flight = False

    @property
    def ready(self) -> bool:
        """Return True when commands can be sent."""
        return self.state is SessionState.READY

    def _set_state(self, state: SessionState) -> None:
        if state is not self.state:
            log_debug(f"Session {self.state.value} -> {state.value}", device_ip=self.host)
        self.state = state

    def _read(self, classify: Classifier) -> tuple[str, Verdict]:
        return self.transport.read_until(classify, timeout=READ_TIMEOUT)

    def _drop(self) -> None:
        """Close the transport and mark the session disconnected."""
        try:
            self.transport.close()
        finally:
            self._set_state(SessionState.DISCONNECTED)

    def connect(self) -> None:
        """Open the connection and log in.

        Raises
        ------
        ConnectionError
            If the connection cannot be opened or is closed during login
        AuthenticationError
            If the device reports the login as incorrect
        TimeoutError
            If a prompt or the banner does not arrive in time
        """
        if self.ready:
            return

        self._set_state(SessionState.AUTHENTICATING)
        transcript = ""
        try:
            self.transport.open()

            for classify, reply in (
                (expect_login_prompt(LOGIN_PROMPT), self.username),
                (expect_login_prompt(PASSWORD_PROMPT), self.password),
                (classify_login, None),
            ):
                text, verdict = self._read(classify)
                transcript += text
                if verdict.status is Status.FAIL:
                    raise AuthenticationError(
                        f"Login failed: {transcript}",
                        device_ip=self.host,
                        response=transcript,
                    )
                if reply is not None:
                    self.transport.write_line(reply)
        except Exception:
            self._drop()
            raise

        # Rates never span two connections
        self.sample_state.reset()
        self._set_state(SessionState.READY)
        log_info(f"Logged in as {self.username}", device_ip=self.host)

    def _check_ready(self, command: str) -> None:
        if not self.ready:
            raise ConnectionError("Not connected to device", device_ip=self.host)
        if self._in_flight:
            raise CommandError(
                "Another command is already in flight",
                device_ip=self.host,
                command=command,
            )

    def _drain(self) -> str:
        """Read up to the next prompt after a rejected command."""
        try:
            text, _ = self._read(expect_literal(PROMPT))
        except TimeoutError as e:
            self._drop()
            return e.output
        except ConnectionError:
            self._drop()
            return ""
        return text

    def send(self, command: str) -> str:
        """Send a command and wait for the prompt to come back.

        Parameters
        ----------
        command : str
            Command line to send

        Returns
        -------
        str
            Raw response text, including the echoed command and the prompt

        Raises
        ------
        ConnectionError
            If not connected or the connection drops
        CommandError
            If the device reports the command as not found
        TimeoutError
            If the prompt does not come back in time
        """
        self._check_ready(command)
        self._in_flight = True
        try:
            log_debug(f"Sending: {command}", device_ip=self.host, command=command)
            self.transport.write_line(command)
            text, verdict = self._read(classify_response)

            if verdict.status is Status.FAIL:
                if PROMPT not in text:
                    text += self._drain()
                raise CommandError(
                    f"Command failed: {command}: {text}",
                    device_ip=self.host,
                    command=command,
                    response=text,
                )

            return text

        except (TimeoutError, ConnectionError):
            self._drop()
            raise
        finally:
            self._in_flight = False

    def execute(self, command: str) -> CommandResult:
        """Send a command and pair it with its response."""
        return CommandResult(command=command, output=self.send(command))

    def write(self, command: str) -> None:
        """Send a command without waiting for a response.

        Raises
        ------
        ConnectionError
            If not connected or the write fails
        """
        self._check_ready(command)
        try:
            log_debug(f"Sending without reply: {command}", device_ip=self.host, command=command)
            self.transport.write_line(command)
        except ConnectionError:
            self._drop()
            raise

    def disconnect(self) -> None:
        """Close the session."""
        if self.state is not SessionState.DISCONNECTED:
            self._drop()
            log_info("Disconnected", device_ip=self.host)

    def __enter__(self) -> "Session":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()
