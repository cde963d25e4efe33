"""Configuration parsing and validation for nginx-deploy."""

import ipaddress
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from nginx_deploy.errors import ConfigError

DEFAULT_LOG_FILE = "/var/log/nginx_deploy.log"


class StrictModel(BaseModel):
    """Base model rejecting unknown keys."""

    model_config = ConfigDict(extra="forbid")


class ServerConfig(StrictModel):
    """Remote target accessed over SSH. Omit to provision the local host."""

    host: str
    auth_method: Literal["password", "ssh_key"]
    ssh_user: str = "root"
    ssh_password: str | None = None
    ssh_key_path: str | None = None
    ssh_port: int = 22

    @model_validator(mode="after")
    def validate_auth(self):
        if self.auth_method == "password" and not self.ssh_password:
            raise ValueError("ssh_password required when auth_method is 'password'")
        if self.auth_method == "ssh_key" and not self.ssh_key_path:
            raise ValueError("ssh_key_path required when auth_method is 'ssh_key'")
        return self


class NetworkSettings(StrictModel):
    """Static IPv4 parameters for one interface.

    Values are handed to nmcli exactly as given.
    """

    interface: str
    address: str
    gateway: str
    dns: str

    @field_validator("dns", mode="before")
    @classmethod
    def join_dns(cls, v):
        """Accept a YAML list as well as a comma-separated string."""
        if isinstance(v, list):
            return ",".join(str(item).strip() for item in v)
        return v

    @property
    def dns_servers(self) -> list[str]:
        return [server.strip() for server in self.dns.split(",") if server.strip()]


class SSHServiceConfig(StrictModel):
    """OpenSSH server package and unit."""

    package: str = "openssh-server"
    service: str = "sshd"


class WebServerConfig(StrictModel):
    """Web server package, unit and binary."""

    package: str = "nginx"
    service: str = "nginx"
    binary: str = "nginx"


class PathsConfig(StrictModel):
    """Locations of the generated content."""

    web_root: str = "/usr/share/nginx/html"
    conf_dir: str = "/etc/nginx/conf.d"
    index_file: str = "index.html"
    vhost_file: str = "default.conf"

    @property
    def index_path(self) -> str:
        return f"{self.web_root.rstrip('/')}/{self.index_file}"

    @property
    def vhost_path(self) -> str:
        return f"{self.conf_dir.rstrip('/')}/{self.vhost_file}"


class FirewallConfig(StrictModel):
    """firewalld services opened on every run."""

    services: list[str] = Field(default_factory=lambda: ["http", "https", "ssh"])


class DeployConfig(StrictModel):
    """Main configuration for nginx-deploy."""

    server: ServerConfig | None = None
    network: NetworkSettings | None = None  # Prompted for when not specified
    ssh: SSHServiceConfig = Field(default_factory=SSHServiceConfig)
    webserver: WebServerConfig = Field(default_factory=WebServerConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    firewall: FirewallConfig = Field(default_factory=FirewallConfig)
    package_manager: Literal["dnf", "yum"] = "dnf"
    platform: str = "AlmaLinux"  # Shown on the default page
    log_file: str = DEFAULT_LOG_FILE


def load_config(path: str | Path | None = None) -> DeployConfig:
    """Load and validate configuration from a YAML file.

    With no path, returns the built-in defaults.
    """
    if path is None:
        return DeployConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    try:
        return DeployConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e


def validate_network(settings: NetworkSettings) -> list[str]:
    """Perform basic sanity checks on the network settings.

    Returns a list of warnings (empty if all good). Nothing here blocks the
    run; nmcli has the final word.
    """
    warnings = []

    if "/" not in settings.address:
        warnings.append(f"Address '{settings.address}' has no prefix length (e.g. /24)")
    else:
        try:
            ipaddress.IPv4Interface(settings.address)
        except ValueError:
            warnings.append(f"Invalid IPv4 address: {settings.address}")

    for label, value in [("gateway", settings.gateway)] + [("DNS server", s) for s in settings.dns_servers]:
        try:
            ipaddress.IPv4Address(value)
        except ValueError:
            warnings.append(f"Invalid {label} address: {value}")

    if not settings.dns_servers:
        warnings.append("No DNS servers given")

    return warnings
