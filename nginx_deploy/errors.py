"""Error types for nginx-deploy."""


class DeploymentError(RuntimeError):
    """Base error: any failure that halts the deployment."""


class ConfigError(DeploymentError):
    """The configuration file is missing or invalid."""


class PrivilegeError(DeploymentError):
    """The deployment is not running with root privileges."""


class NetworkInterfaceError(DeploymentError):
    """The requested network interface does not exist on the host."""


class CommandError(DeploymentError):
    """An external command returned a non-zero exit status."""

    def __init__(self, description: str, command: str, exited: int, stderr: str = ""):
        self.description = description
        self.command = command
        self.exited = exited
        self.stderr = stderr
        super().__init__(f"{description} failed (exit {exited}): {command}")


class TransportError(DeploymentError):
    """A command could not be run at all (lost SSH session, SFTP or local I/O failure)."""

    def __init__(self, description: str, command: str, reason: str):
        self.description = description
        self.command = command
        self.reason = reason
        super().__init__(f"{description} failed: {reason}")
