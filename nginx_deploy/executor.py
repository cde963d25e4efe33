"""Fail-fast command execution with logging for nginx-deploy."""

import shlex

from invoke.exceptions import Failure, ThreadException
from paramiko import SSHException

from nginx_deploy.connection import HostConnection
from nginx_deploy.errors import CommandError, TransportError
from nginx_deploy.log import DeployLog

# Raised when a command cannot be run at all, as opposed to exiting non-zero
TRANSPORT_ERRORS = (OSError, SSHException, Failure, ThreadException)


class Executor:
    """Runs each provisioning step and logs its outcome.

    Every mutating step goes through :meth:`execute`: an INFO line before the
    attempt, SUCCESS on exit status 0, ERROR and a raised ``CommandError``
    otherwise. Nothing is retried.
    """

    def __init__(self, host: HostConnection, log: DeployLog, verbose: bool = False):
        self.host = host
        self.log = log
        self.verbose = verbose

    def _fail(self, description: str, argv: list[str], result) -> CommandError:
        self.log.error(f"{description} failed.")
        stderr = (result.stderr or "").strip()
        if stderr:
            self.log.error(stderr)
        return CommandError(description, shlex.join(argv), result.exited, stderr)

    def _run(self, description: str, argv: list[str], call):
        """Invoke ``call``, turning transport failures into a logged TransportError."""
        try:
            return call()
        except TRANSPORT_ERRORS as e:
            self.log.error(f"{description} failed.")
            self.log.error(f"{type(e).__name__}: {e}")
            raise TransportError(description, shlex.join(argv), str(e)) from e

    def execute(self, description: str, argv: list[str]) -> None:
        """Run a mutating command, halting the deployment on failure."""
        self.log.info(f"Attempting: {description}...")
        result = self._run(description, argv, lambda: self.host.run(argv, hide=not self.verbose))
        if not result.ok:
            raise self._fail(description, argv, result)
        self.log.success(f"{description} completed.")

    def check(self, argv: list[str]) -> bool:
        """Run a read-only state query. Non-zero exit simply means False."""
        result = self._run(f"Checking '{shlex.join(argv)}'", argv, lambda: self.host.run(argv, hide=True))
        return result.ok

    def capture(self, description: str, argv: list[str]) -> str:
        """Run a read-only query and return its stdout.

        A non-zero exit yields empty output, like a shell pipeline would.
        """
        result = self._run(description, argv, lambda: self.host.run(argv, hide=True))
        if not result.ok:
            self.log.warn(f"{description} returned exit status {result.exited}, treating output as empty.")
            return ""
        return result.stdout

    def write_file(self, description: str, path: str, content: str) -> None:
        """Overwrite a file on the target host."""
        self.log.info(f"Attempting: {description}...")
        argv = ["tee", path]
        result = self._run(description, argv, lambda: self.host.write_file(path, content))
        if not result.ok:
            raise self._fail(description, argv, result)
        self.log.success(f"{description} completed.")
