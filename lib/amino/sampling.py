"""Network counter sampling and throughput computation."""

from dataclasses import dataclass

BYTES_PER_MIB = 1048576


@dataclass(frozen=True)
class NetworkRates:
    """Throughput between two samples in MiB/s."""

    network_in: float
    network_out: float


@dataclass
class SampleState:
    """Previous RX/TX byte counters and when they were taken.

    ``timestamp`` is in milliseconds and is None until the first sample.
    """

    rx_bytes: int = 0
    tx_bytes: int = 0
    timestamp: float | None = None

    def record(self, rx_bytes: int, tx_bytes: int, now: float) -> NetworkRates | None:
        """Store a new sample and return the rate since the previous one.

        Parameters
        ----------
        rx_bytes : int
            Current received-bytes counter
        tx_bytes : int
            Current transmitted-bytes counter
        now : float
            Current time in milliseconds

        Returns
        -------
        NetworkRates | None
            Rates in MiB/s, or None on the first sample or when no time
            has elapsed
        """
        rates = None
        if self.timestamp is not None:
            seconds = (now - self.timestamp) / 1000
            if seconds > 0:
                rates = NetworkRates(
                    network_in=(rx_bytes - self.rx_bytes) / (BYTES_PER_MIB * seconds),
                    network_out=(tx_bytes - self.tx_bytes) / (BYTES_PER_MIB * seconds),
                )

        self.rx_bytes = rx_bytes
        self.tx_bytes = tx_bytes
        self.timestamp = now
        return rates

    def reset(self) -> None:
        """Forget the previous sample."""
        self.rx_bytes = 0
        self.tx_bytes = 0
        self.timestamp = None
