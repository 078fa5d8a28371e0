"""Telnet monitor for Amino set-top boxes.

Logs in over the AMINET root shell, polls diagnostic commands into
statistics snapshots and exposes a remote reboot control.
"""

__version__ = "0.5.0"

from lib.amino.controls import ControlDispatcher
from lib.amino.device import AminoDevice
from lib.amino.exceptions import (
    AminoError,
    AuthenticationError,
    CommandError,
    ConnectionError,
    TimeoutError,
)
from lib.amino.models import ButtonControl, ControlRequest, StatisticsSnapshot
from lib.amino.monitor import MetricAggregator
from lib.amino.session import CommandResult, Session, SessionState
from lib.amino.transport import PexpectTransport, Transport

__all__ = [
    "AminoDevice",
    "Session",
    "SessionState",
    "CommandResult",
    "MetricAggregator",
    "ControlDispatcher",
    "Transport",
    "PexpectTransport",
    "StatisticsSnapshot",
    "ControlRequest",
    "ButtonControl",
    "AminoError",
    "ConnectionError",
    "AuthenticationError",
    "TimeoutError",
    "CommandError",
]
