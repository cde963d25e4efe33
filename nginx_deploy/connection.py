"""Command execution on the target host for nginx-deploy."""

import io
import shlex
from pathlib import Path

from fabric import Connection
from invoke import Context, Result
from rich.console import Console

from nginx_deploy.config import ServerConfig

console = Console()


class HostConnection:
    """Runs argument vectors on the local host or on a server over SSH.

    Commands are lists of arguments and are quoted exactly once, here, so
    values typed by the operator never reach a shell unquoted.
    """

    def __init__(self, server: ServerConfig | None = None, context: Context | None = None):
        self.server = server
        self._connection: Context | None = context

    @property
    def is_remote(self) -> bool:
        return self.server is not None

    @property
    def use_sudo(self) -> bool:
        return self.is_remote and self.server.ssh_user != "root"

    @property
    def target(self) -> str:
        return self.server.host if self.is_remote else "localhost"

    def _get_connect_kwargs(self) -> dict:
        """Get connection kwargs based on auth method."""
        if self.server.auth_method == "password":
            return {"password": self.server.ssh_password}
        else:
            key_path = Path(self.server.ssh_key_path).expanduser()
            return {"key_filename": str(key_path)}

    @property
    def conn(self) -> Context:
        """Get or create the underlying invoke context or fabric connection."""
        if self._connection is None:
            if self.is_remote:
                self._connection = Connection(
                    host=self.server.host,
                    user=self.server.ssh_user,
                    port=self.server.ssh_port,
                    connect_kwargs=self._get_connect_kwargs(),
                )
            else:
                self._connection = Context()
        return self._connection

    def test_connection(self) -> bool:
        """Test if we can reach the target host."""
        try:
            result = self.conn.run("true", hide=True, warn=True, in_stream=False)
            return result.ok
        except Exception as e:
            console.print(f"[red]Connection to {self.target} failed: {e}[/red]")
            return False

    def run(self, argv: list[str], hide: bool | str = True, warn: bool = True, in_stream=False) -> Result:
        """Run an argument vector and return the invoke Result."""
        command = shlex.join(argv)
        if self.use_sudo:
            sudo_kwargs = {}
            if self.server.ssh_password:
                sudo_kwargs["password"] = self.server.ssh_password
            return self.conn.sudo(command, hide=hide, warn=warn, in_stream=in_stream, **sudo_kwargs)
        return self.conn.run(command, hide=hide, warn=warn, in_stream=in_stream)

    def write_file(self, path: str, content: str) -> Result:
        """Replace the file at path with content."""
        if not self.use_sudo:
            return self.run(["tee", path], hide=True, in_stream=io.StringIO(content))

        # sudo reads its password from stdin, so stage the file with SFTP first.
        # mktemp gives a fresh 0600 file owned by the SSH user.
        staging = self.conn.run("mktemp", hide=True, in_stream=False).stdout.strip()
        try:
            self.conn.put(io.BytesIO(content.encode()), staging)
            return self.run(["install", "-m", "644", staging, path])
        finally:
            self.conn.run(shlex.join(["rm", "-f", staging]), hide=True, warn=True, in_stream=False)

    def close(self) -> None:
        """Close the SSH connection, if any."""
        if self.is_remote and self._connection is not None:
            self._connection.close()
