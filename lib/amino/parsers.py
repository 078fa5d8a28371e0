"""Extractors for AMINET diagnostic command output.

Every extractor is a pure function from raw response text to an optional
value. A missing pattern or a bad number yields None; the caller decides
whether that matters.
"""

import re
from dataclasses import dataclass

from lib.amino.protocol import LINE_TERMINATOR

UNKNOWN_KERNEL = "Unknown"
KIB_PER_GIB = 1048576

PATTERN_CPU_IDLE = re.compile(r"(\d+(?:\.\d+)?)%\s*idle")
PATTERN_PROCESS_COUNT = re.compile(r"(\d+)")
PATTERN_MEM_TOTAL = re.compile(r"MemTotal:\s+(\d+)")
PATTERN_MEM_FREE = re.compile(r"MemFree:\s+(\d+)")
PATTERN_MAC_ADDRESS = re.compile(r"HWaddr ([\dA-Fa-f:]+)")
PATTERN_RX_BYTES = re.compile(r"RX bytes:\s?(\d+)")
PATTERN_TX_BYTES = re.compile(r"TX bytes:\s?(\d+)")


@dataclass(frozen=True)
class MemoryUsage:
    """Memory figures in GiB."""

    total: float
    in_use: float


@dataclass(frozen=True)
class NetworkCounters:
    """Cumulative interface byte counters."""

    rx_bytes: int
    tx_bytes: int


def regex_find(text: str, pattern: re.Pattern[str]) -> str | None:
    """Return the first capture group of the first match, or None."""
    match = pattern.search(text)
    return match.group(1) if match else None


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_kernel_version(output: str) -> str:
    """Parse ``uname -r`` output.

    The first line is the echoed command, the second the release. Anything
    shorter yields "Unknown"; this extractor never returns None.

    Parameters
    ----------
    output : str
        Raw response text

    Returns
    -------
    str
        Kernel release or "Unknown"
    """
    lines = output.split(LINE_TERMINATOR)
    if len(lines) >= 2:
        return lines[1]
    return UNKNOWN_KERNEL


def parse_cpu_percentage(output: str) -> float | None:
    """Parse ``top -bn1`` output into CPU usage (100 minus idle).

    Example line::

        CPU:  12.5% usr  50.0% sys   0.0% nic  37.5% idle  0.0% io

    Parameters
    ----------
    output : str
        Raw response text

    Returns
    -------
    float | None
        Used CPU percentage, or None
    """
    idle = _to_float(regex_find(output, PATTERN_CPU_IDLE))
    if idle is None:
        return None
    return 100.0 - idle


def parse_process_count(output: str) -> int | None:
    """Parse ``ps | wc -l`` output (first integer token)."""
    return _to_int(regex_find(output, PATTERN_PROCESS_COUNT))


def parse_memory(output: str) -> MemoryUsage | None:
    """Parse ``/proc/meminfo`` output.

    MemTotal and MemFree are reported in KiB and converted to GiB.

    Parameters
    ----------
    output : str
        Raw response text

    Returns
    -------
    MemoryUsage | None
        MemoryUsage, or None if either figure is missing
    """
    total = _to_int(regex_find(output, PATTERN_MEM_TOTAL))
    free = _to_int(regex_find(output, PATTERN_MEM_FREE))
    if total is None or free is None:
        return None

    return MemoryUsage(
        total=total / KIB_PER_GIB,
        in_use=(total - free) / KIB_PER_GIB,
    )


def parse_mac_address(output: str) -> str | None:
    """Parse the hardware address from ``ifconfig`` output."""
    return regex_find(output, PATTERN_MAC_ADDRESS)


def parse_rx_bytes(output: str) -> int | None:
    """Parse the received-bytes counter from ``ifconfig`` output."""
    return _to_int(regex_find(output, PATTERN_RX_BYTES))


def parse_tx_bytes(output: str) -> int | None:
    """Parse the transmitted-bytes counter from ``ifconfig`` output."""
    return _to_int(regex_find(output, PATTERN_TX_BYTES))


def parse_network_counters(output: str) -> NetworkCounters | None:
    """Parse both byte counters from ``ifconfig`` output.

    Parameters
    ----------
    output : str
        Raw response text

    Returns
    -------
    NetworkCounters | None
        NetworkCounters, or None if either counter is missing
    """
    rx_bytes = parse_rx_bytes(output)
    tx_bytes = parse_tx_bytes(output)
    if rx_bytes is None or tx_bytes is None:
        return None
    return NetworkCounters(rx_bytes=rx_bytes, tx_bytes=tx_bytes)
