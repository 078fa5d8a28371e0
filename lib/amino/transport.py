"""Line transport primitives.

A transport opens a connection, writes command lines and reads until a
completion predicate stops it or the idle timeout elapses.
"""

from abc import ABC, abstractmethod

import pexpect

from lib.amino.exceptions import ConnectionError, TimeoutError
from lib.amino.protocol import READ_TIMEOUT, Classifier, Verdict


class Transport(ABC):
    """Base class for line transports."""

    @abstractmethod
    def open(self) -> None:
        """Open the connection.

        Raises
        ------
        ConnectionError
            If the connection cannot be opened
        """
        pass

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Write one line followed by a line terminator.

        Parameters
        ----------
        line : str
            Line to write

        Raises
        ------
        ConnectionError
            If the connection is not open or is closed by the peer
        """
        pass

    @abstractmethod
    def read_until(
        self,
        classify: Classifier,
        timeout: float = READ_TIMEOUT,
    ) -> tuple[str, Verdict]:
        """Accumulate received text until ``classify`` reports it is done.

        Parameters
        ----------
        classify : Classifier
            Predicate evaluated on the accumulated text after every chunk
        timeout : float, optional
            Idle timeout in seconds, by default READ_TIMEOUT

        Returns
        -------
        tuple[str, Verdict]
            Accumulated text and the final verdict

        Raises
        ------
        TimeoutError
            If no chunk arrives within ``timeout`` before completion
        ConnectionError
            If the peer closes the connection
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection."""
        pass


class PexpectTransport(Transport):
    """Transport driving the system telnet binary through pexpect."""

    def __init__(
        self,
        host: str,
        port: int = 23,
        chunk_size: int = 4096,
    ) -> None:
        """Initialize pexpect transport.

        Parameters
        ----------
        host : str
            Target host IP address
        port : int, optional
            Telnet port, by default 23
        chunk_size : int, optional
            Maximum bytes per read, by default 4096
        """
        self.host = host
        self.port = port
        self.chunk_size = chunk_size
        self.process: pexpect.spawn | None = None

    def open(self) -> None:
        """Spawn ``telnet host port``."""
        try:
            cmd = f"telnet {self.host} {self.port}"
            self.process = pexpect.spawn(cmd, timeout=READ_TIMEOUT, encoding="utf-8")
            self.process.logfile_read = None
        except pexpect.ExceptionPexpect as e:
            raise ConnectionError(
                f"Connection failed: {str(e)}",
                device_ip=self.host,
            ) from e

    def write_line(self, line: str) -> None:
        """Send ``line`` with a trailing newline."""
        if not self.process or not self.process.isalive():
            raise ConnectionError("Connection is not open", device_ip=self.host)

        try:
            self.process.sendline(line)
        except OSError as e:
            raise ConnectionError(
                f"Write failed: {str(e)}",
                device_ip=self.host,
            ) from e

    def read_until(
        self,
        classify: Classifier,
        timeout: float = READ_TIMEOUT,
    ) -> tuple[str, Verdict]:
        """Read chunks until ``classify`` is done, resetting the idle timer per chunk."""
        if not self.process:
            raise ConnectionError("Connection is not open", device_ip=self.host)

        buffer = ""
        while True:
            try:
                chunk = self.process.read_nonblocking(size=self.chunk_size, timeout=timeout)
            except pexpect.TIMEOUT as e:
                raise TimeoutError(
                    f"No response within {timeout}s",
                    device_ip=self.host,
                    timeout=timeout,
                    output=buffer,
                ) from e
            except pexpect.EOF as e:
                raise ConnectionError(
                    "Connection closed by device",
                    device_ip=self.host,
                ) from e

            buffer += chunk
            verdict = classify(buffer)
            if verdict.done:
                return buffer, verdict

    def close(self) -> None:
        """Terminate the telnet process."""
        if self.process:
            try:
                self.process.close(force=True)
            finally:
                self.process = None
