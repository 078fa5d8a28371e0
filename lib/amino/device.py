"""Thread-safe facade over one set-top box session."""

import threading
from typing import TYPE_CHECKING, Callable

from lib.amino.controls import CONTROL_COMMANDS, ControlDispatcher
from lib.amino.exceptions import ConnectionError
from lib.amino.models import ButtonControl, ControlRequest, StatisticsSnapshot
from lib.amino.monitor import MetricAggregator
from lib.amino.session import CommandResult, Session
from lib.amino.transport import PexpectTransport, Transport

if TYPE_CHECKING:
    from lib.amino.config import AminoConfig


class AminoDevice:
    """Amino set-top box monitor.

    Wraps a Session, its MetricAggregator and its ControlDispatcher behind a
    lock so a device can be shared by concurrent callers (API worker threads).
    """

    def __init__(
        self,
        host: str,
        port: int = 23,
        username: str = "root",
        password: str = "",
        transport_factory: Callable[[str, int], Transport] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize device.

        Parameters
        ----------
        host : str
            Target host IP address
        port : int, optional
            Telnet port, by default 23
        username : str, optional
            Login username, by default "root"
        password : str, optional
            Login password, by default ""
        transport_factory : Callable[[str, int], Transport] | None, optional
            Builds the transport from host and port, by default PexpectTransport
        clock : Callable[[], float] | None, optional
            Millisecond clock for rate sampling, by default monotonic
        """
        self.host = host
        self.port = port
        factory = transport_factory or PexpectTransport
        self.session = Session(
            host=host,
            port=port,
            username=username,
            password=password,
            transport=factory(host, port),
            clock=clock,
        )
        self.aggregator = MetricAggregator(self.session)
        self.dispatcher = ControlDispatcher(self.session)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: "AminoConfig") -> "AminoDevice":
        """Build a device from loaded configuration."""
        return cls(
            host=config.host,
            port=config.port,
            username=config.username,
            password=config.password,
        )

    def connect(self) -> None:
        """Connect and log in (thread-safe)."""
        with self._lock:
            self.session.connect()

    def disconnect(self) -> None:
        """Disconnect (thread-safe)."""
        with self._lock:
            self.session.disconnect()

    @property
    def connected(self) -> bool:
        """Check if connected.

        Returns
        -------
        bool
            True if the session is ready
        """
        return self.session.ready

    def get_statistics(self, connect: bool = False) -> StatisticsSnapshot:
        """Poll the device once (thread-safe).

        Parameters
        ----------
        connect : bool, optional
            Log in first when the session is not ready, by default False

        Returns
        -------
        StatisticsSnapshot
            Metrics from this poll

        Raises
        ------
        ConnectionError
            If not connected and ``connect`` is False
        """
        with self._lock:
            if connect and not self.session.ready:
                self.session.connect()
            self._require_connection()
            return self.aggregator.poll(controls=self.dispatcher.controls())

    def controls(self) -> list[ButtonControl]:
        """Return the advertised controls."""
        return self.dispatcher.controls()

    def control_property(self, request: ControlRequest) -> None:
        """Apply one control request (thread-safe)."""
        with self._lock:
            self.dispatcher.control_property(request)

    def apply_controls(self, requests: list[ControlRequest]) -> tuple[list[str], list[str]]:
        """Apply known control requests in order, connecting only if one is known.

        Returns
        -------
        tuple[list[str], list[str]]
            Names of the applied controls and names of the ignored ones
        """
        applied = [r.property_name for r in requests if r.property_name in CONTROL_COMMANDS]
        ignored = [r.property_name for r in requests if r.property_name not in CONTROL_COMMANDS]

        with self._lock:
            if applied and not self.session.ready:
                self.session.connect()
            self.dispatcher.control_properties(requests)
        return applied, ignored

    def execute(self, command: str) -> CommandResult:
        """Run an arbitrary shell command (thread-safe)."""
        with self._lock:
            self._require_connection()
            return self.session.execute(command)

    def _require_connection(self) -> None:
        if not self.session.ready:
            raise ConnectionError("Not connected", device_ip=self.host)

    def __enter__(self) -> "AminoDevice":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()
