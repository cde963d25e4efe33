import io
import re

import pytest
from invoke import MockContext
from rich.console import Console

from nginx_deploy.config import DeployConfig, NetworkSettings
from nginx_deploy.connection import HostConnection
from nginx_deploy.executor import Executor
from nginx_deploy.log import DeployLog

# Command line -> canned result. Anything not listed succeeds with no output.
FRESH_HOST = {
    "id -u": "0\n",
    "rpm -q openssh-server": False,
    "rpm -q nginx": False,
    "systemctl is-active --quiet sshd": False,
    "systemctl is-enabled --quiet sshd": False,
    "systemctl is-active --quiet nginx": False,
    "systemctl is-enabled --quiet nginx": False,
    "nmcli -g NAME,DEVICE con show --active": "lo:lo\n",
}

PROVISIONED_HOST = {
    "id -u": "0\n",
    "rpm -q openssh-server": True,
    "rpm -q nginx": True,
    "systemctl is-active --quiet sshd": True,
    "systemctl is-enabled --quiet sshd": True,
    "systemctl is-active --quiet nginx": True,
    "systemctl is-enabled --quiet nginx": True,
    "nmcli -g NAME,DEVICE con show --active": "eth0-static:eth0\nlo:lo\n",
}


class RecordingHost(HostConnection):
    """HostConnection backed by invoke's MockContext that records every command."""

    def __init__(self, responses: dict):
        responses = dict(responses)
        responses[re.compile(".*")] = True
        super().__init__(context=MockContext(run=responses, repeat=True))
        self.commands: list[list[str]] = []
        self.files: dict[str, str] = {}

    def run(self, argv, hide=True, warn=True, in_stream=False):
        self.commands.append(list(argv))
        if argv[0] == "tee" and in_stream:
            self.files[argv[1]] = in_stream.getvalue()
        return super().run(argv, hide=hide, warn=warn, in_stream=in_stream)

    def ran(self, *prefix: str) -> list[list[str]]:
        """Commands starting with the given arguments."""
        return [cmd for cmd in self.commands if cmd[: len(prefix)] == list(prefix)]


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "nginx_deploy.log"


@pytest.fixture
def make_executor(log_path):
    """Build an Executor on a RecordingHost with the given responses."""
    logs = []

    def factory(responses=None):
        host = RecordingHost(FRESH_HOST if responses is None else responses)
        log = DeployLog(log_path, console=Console(file=io.StringIO(), width=200))
        logs.append(log)
        return Executor(host, log)

    yield factory

    for log in logs:
        log.close()


@pytest.fixture
def network():
    return NetworkSettings(
        interface="eth0",
        address="192.168.1.10/24",
        gateway="192.168.1.1",
        dns="8.8.8.8,8.8.4.4",
    )


@pytest.fixture
def config(network):
    return DeployConfig(network=network)
