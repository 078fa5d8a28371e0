"""AMINET shell literals and completion predicates.

The device shell has no framing: a command is finished when the root prompt
shows up again. Completion is decided by pure predicates over the text
accumulated so far, which the transport evaluates after every read chunk.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

LOGIN_PROMPT = "AMINET login: "
PASSWORD_PROMPT = "Password: "
READY_MARKER = "[root@AMINET]# \n"
LOGIN_FAILURE = "Login incorrect"
COMMAND_NOT_FOUND = "not found"
LINE_TERMINATOR = "\r\n"

# Prompt text without its trailing "# \n"; the terminal may rewrite the
# line ending, so completion matches on this prefix of READY_MARKER.
PROMPT = "[root@AMINET]"

# Idle read timeout in seconds
READ_TIMEOUT = 10.0

QUERY_KERNEL_RELEASE = "uname -r"
QUERY_CPU_USAGE = "top -bn1"
QUERY_NETWORK = "ifconfig eth0"
QUERY_MEMORY = "cat /proc/meminfo"
QUERY_PROCESS_COUNT = "ps | wc -l"
COMMAND_REBOOT = "reboot"


class Status(Enum):
    """Outcome of evaluating accumulated text."""

    CONTINUE = "continue"
    SUCCESS = "success"
    FAIL = "fail"


@dataclass(frozen=True)
class Verdict:
    """Completion verdict with an optional failure reason."""

    status: Status
    reason: str | None = None

    @property
    def done(self) -> bool:
        """Return True once no more data is needed."""
        return self.status is not Status.CONTINUE


CONTINUE = Verdict(Status.CONTINUE)
SUCCESS = Verdict(Status.SUCCESS)

Classifier = Callable[[str], Verdict]


def classify_login(text: str) -> Verdict:
    """Classify the text received after the password was sent.

    Parameters
    ----------
    text : str
        Text accumulated since the password was written

    Returns
    -------
    Verdict
        FAIL if the login was rejected, SUCCESS once the shell prompt
        appears, CONTINUE otherwise
    """
    if LOGIN_FAILURE in text:
        return Verdict(Status.FAIL, LOGIN_FAILURE)
    if PROMPT in text:
        return SUCCESS
    return CONTINUE


def classify_response(text: str) -> Verdict:
    """Classify the text received after a command was sent.

    A "not found" report wins over a prompt in the same text so that a
    rejected command is never reported as finished.

    Parameters
    ----------
    text : str
        Text accumulated since the command was written

    Returns
    -------
    Verdict
        Completion verdict
    """
    if COMMAND_NOT_FOUND in text:
        return Verdict(Status.FAIL, COMMAND_NOT_FOUND)
    if PROMPT in text:
        return SUCCESS
    return CONTINUE


def expect_literal(literal: str) -> Classifier:
    """Build a predicate that completes once ``literal`` has been seen."""

    def classify(text: str) -> Verdict:
        return SUCCESS if literal in text else CONTINUE

    return classify


def expect_login_prompt(literal: str) -> Classifier:
    """Build a handshake predicate waiting for ``literal``.

    A rejected login is reported before the prompt is looked for, so a
    device that answers "Login incorrect" early never runs into a timeout.
    """

    def classify(text: str) -> Verdict:
        if LOGIN_FAILURE in text:
            return Verdict(Status.FAIL, LOGIN_FAILURE)
        return SUCCESS if literal in text else CONTINUE

    return classify
