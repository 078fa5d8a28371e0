"""Metric aggregation across the five diagnostic queries."""

from lib.amino.logging import log_warn
from lib.amino.models import ButtonControl, StatisticsSnapshot
from lib.amino.parsers import (
    parse_cpu_percentage,
    parse_kernel_version,
    parse_mac_address,
    parse_memory,
    parse_network_counters,
    parse_process_count,
    parse_rx_bytes,
)
from lib.amino.protocol import (
    QUERY_CPU_USAGE,
    QUERY_KERNEL_RELEASE,
    QUERY_MEMORY,
    QUERY_NETWORK,
    QUERY_PROCESS_COUNT,
)
from lib.amino.session import Session

# ifconfig sometimes answers with a truncated first response
NETWORK_QUERY_RETRIES = 1


class MetricAggregator:
    """Poll a session and build statistics snapshots.

    A field that cannot be parsed is logged and left out; only errors from
    the session itself abort a poll.
    """

    def __init__(self, session: Session) -> None:
        """Initialize aggregator.

        Parameters
        ----------
        session : Session
            Connected device session
        """
        self.session = session

    def _warn(self, field: str, command: str, output: str) -> None:
        log_warn(
            f"Unable to parse {field} from '{command}' response: {output!r}",
            device_ip=self.session.host,
            command=command,
            field=field,
        )

    def poll(self, controls: list[ButtonControl] | None = None) -> StatisticsSnapshot:
        """Run every query once and return the resulting snapshot.

        Parameters
        ----------
        controls : list[ButtonControl] | None, optional
            Controls to advertise with the snapshot, by default none

        Returns
        -------
        StatisticsSnapshot
            Best-effort snapshot

        Raises
        ------
        ConnectionError
            If the session is not connected or drops
        CommandError
            If the device rejects a query
        TimeoutError
            If a query does not complete in time
        """
        values: dict = {}

        output = self.session.send(QUERY_CPU_USAGE)
        values["cpu_percentage"] = parse_cpu_percentage(output)
        if values["cpu_percentage"] is None:
            self._warn("cpuPercentage", QUERY_CPU_USAGE, output)

        output = self.session.send(QUERY_PROCESS_COUNT)
        values["number_of_processes"] = parse_process_count(output)
        if values["number_of_processes"] is None:
            self._warn("numberOfProcesses", QUERY_PROCESS_COUNT, output)

        values["kernel_version"] = parse_kernel_version(self.session.send(QUERY_KERNEL_RELEASE))

        output = self.session.send(QUERY_MEMORY)
        memory = parse_memory(output)
        if memory is None:
            self._warn("memory", QUERY_MEMORY, output)
        else:
            values["memory_total"] = memory.total
            values["memory_in_use"] = memory.in_use

        values.update(self._poll_network())

        return StatisticsSnapshot(controls=tuple(controls or ()), **values)

    def query_network(self) -> str:
        """Query the interface, retrying a bounded number of times if RX is missing."""
        output = self.session.send(QUERY_NETWORK)
        for _ in range(NETWORK_QUERY_RETRIES):
            if parse_rx_bytes(output) is not None:
                break
            log_warn(
                "RX counter missing from network response, querying again",
                device_ip=self.session.host,
                command=QUERY_NETWORK,
            )
            output = self.session.send(QUERY_NETWORK)
        return output

    def _poll_network(self) -> dict:
        output = self.query_network()
        values: dict = {}

        mac_address = parse_mac_address(output)
        if mac_address is None:
            self._warn("macAddress", QUERY_NETWORK, output)
        values["mac_address"] = mac_address or ""

        counters = parse_network_counters(output)
        if counters is None:
            self._warn("network counters", QUERY_NETWORK, output)
            return values

        rates = self.session.sample_state.record(
            counters.rx_bytes,
            counters.tx_bytes,
            self.session.clock(),
        )
        if rates is not None:
            values["network_in"] = rates.network_in
            values["network_out"] = rates.network_out

        return values
