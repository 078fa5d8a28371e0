"""Scripted in-process AMINET device for unit testing."""

from lib.amino.exceptions import ConnectionError, TimeoutError
from lib.amino.protocol import READ_TIMEOUT, Classifier, Verdict
from lib.amino.transport import Transport

PROMPT_LINE = "[root@AMINET]# \n"

TOP_OUTPUT = (
    "Mem: 180176K used, 54716K free, 0K shrd, 5528K buff, 68608K cached\r\n"
    "CPU:  12.5% usr  50.0% sys   0.0% nic  37.5% idle   0.0% io   0.0% irq   0.0% sirq\r\n"
    "Load average: 0.21 0.24 0.23 1/70 1312\r\n"
    "  PID  PPID USER     STAT   VSZ %VSZ %CPU COMMAND\r\n"
    " 1312  1293 root     R     2980   1%   0% top -bn1\r\n"
)

PS_OUTPUT = "      57\r\n"

UNAME_OUTPUT = "3.10.79-amino\r\n"

MEMINFO_OUTPUT = (
    "MemTotal:        2097152 kB\r\n"
    "MemFree:         1048576 kB\r\n"
    "Buffers:            5528 kB\r\n"
    "Cached:            68608 kB\r\n"
)


def ifconfig_output(rx_bytes: int = 1048576, tx_bytes: int = 524288) -> str:
    """Build ``ifconfig eth0`` output with the given counters."""
    return (
        "eth0      Link encap:Ethernet  HWaddr 00:02:02:3A:BC:DE  \r\n"
        "          inet addr:10.231.64.92  Bcast:10.231.64.255  Mask:255.255.255.0\r\n"
        "          UP BROADCAST RUNNING MULTICAST  MTU:1500  Metric:1\r\n"
        "          RX packets:81530 errors:0 dropped:0 overruns:0 frame:0\r\n"
        "          TX packets:40211 errors:0 dropped:0 overruns:0 carrier:0\r\n"
        f"          RX bytes:{rx_bytes} (1.0 MiB)  TX bytes:{tx_bytes} (512.0 KiB)\r\n"
    )


def default_responses() -> dict[str, list[str] | str]:
    """Responses for every diagnostic query."""
    return {
        "top -bn1": TOP_OUTPUT,
        "ps | wc -l": PS_OUTPUT,
        "uname -r": UNAME_OUTPUT,
        "cat /proc/meminfo": MEMINFO_OUTPUT,
        "ifconfig eth0": ifconfig_output(),
    }


class FakeAminoTransport(Transport):
    """Transport emulating the AMINET login and root shell.

    Every piece of device output is queued as a separate chunk so that
    completion predicates are exercised chunk by chunk.

    ``responses`` maps a command to its output. A list is consumed one entry
    per invocation (the last entry repeats). A None output makes the device
    hang without printing the prompt. Unknown commands get the shell's
    "not found" error. Commands in ``hangup_after`` print their output and
    then drop the connection. ``early_reject`` refuses the username before
    the password is asked for.
    """

    def __init__(
        self,
        responses: dict[str, list[str | None] | str | None] | None = None,
        username: str = "root",
        password: str = "root2root",
        login_banner: str = "\r\nBusyBox v1.22.1 built-in shell (ash)\r\n",
    ) -> None:
        self.responses = responses if responses is not None else default_responses()
        self.username = username
        self.password = password
        self.login_banner = login_banner

        self.pending: list[str] = []
        self.written: list[str] = []
        self.commands: list[str] = []
        self.opened = 0
        self.closed = 0
        self.is_open = False
        self.hang_on_login = False
        self.fail_open = False
        self.early_reject = False
        self.hangup_after: set[str] = set()
        self._stage = "closed"
        self._login_user: str | None = None

    def open(self) -> None:
        if self.fail_open:
            raise ConnectionError("Connection refused", device_ip="fake")
        self.opened += 1
        self.is_open = True
        self.pending = ["Trying 10.231.64.92...\r\n", "Connected.\r\n"]
        if not self.hang_on_login:
            self.pending.append("AMINET login: ")
        self._stage = "login"

    def write_line(self, line: str) -> None:
        if not self.is_open:
            raise ConnectionError("Connection is not open", device_ip="fake")

        self.written.append(line)

        if self._stage == "login":
            self._login_user = line
            if self.early_reject:
                self.pending += [f"{line}\r\n", "Login incorrect\r\n", "AMINET login: "]
                return
            self.pending += [f"{line}\r\n", "Password: "]
            self._stage = "password"
        elif self._stage == "password":
            if self._login_user == self.username and line == self.password:
                self.pending += ["\r\n", self.login_banner, PROMPT_LINE]
                self._stage = "shell"
            else:
                self.pending += ["\r\n", "Login incorrect\r\n", "AMINET login: "]
                self._stage = "login"
        else:
            self.commands.append(line)
            self.pending.append(f"{line}\r\n")
            output = self._response_for(line)
            if line in self.hangup_after:
                self.pending.append(output or "")
                self._stage = "hungup"
            elif output is not None:
                self.pending += [output, PROMPT_LINE]

    def _response_for(self, command: str) -> str | None:
        if command not in self.responses:
            return f"-sh: {command.split()[0]}: not found\r\n"

        output = self.responses[command]
        if isinstance(output, list):
            return output.pop(0) if len(output) > 1 else output[0]
        return output

    def read_until(
        self,
        classify: Classifier,
        timeout: float = READ_TIMEOUT,
    ) -> tuple[str, Verdict]:
        if not self.is_open:
            raise ConnectionError("Connection is not open", device_ip="fake")

        buffer = ""
        while self.pending:
            buffer += self.pending.pop(0)
            verdict = classify(buffer)
            if verdict.done:
                return buffer, verdict

        if self._stage == "hungup":
            raise ConnectionError("Connection closed by foreign host", device_ip="fake")

        raise TimeoutError(
            f"No response within {timeout}s",
            device_ip="fake",
            timeout=timeout,
            output=buffer,
        )

    def close(self) -> None:
        self.closed += 1
        self.is_open = False
        self.pending = []
        self._stage = "closed"


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds * 1000

    def __call__(self) -> float:
        return self.now
