"""Static IP configuration through NetworkManager for nginx-deploy."""

import re
from typing import Callable

from rich.prompt import Prompt

from nginx_deploy.config import DeployConfig, NetworkSettings, validate_network
from nginx_deploy.errors import NetworkInterfaceError
from nginx_deploy.executor import Executor

PromptFunc = Callable[[str], str]

# nmcli -g escapes ':' inside values as '\:'
_TERSE_FIELD_SEP = re.compile(r"(?<!\\):")


def ask(question: str) -> str:
    """Prompt the operator for a non-empty value."""
    while True:
        answer = Prompt.ask(question).strip()
        if answer:
            return answer


def list_interfaces(executor: Executor) -> list[str]:
    """Return the device names NetworkManager knows about."""
    output = executor.capture("Listing network interfaces", ["nmcli", "device", "show"])
    devices = []
    for line in output.splitlines():
        key, _, value = line.partition(":")
        if key.strip().endswith("DEVICE") and value.strip():
            devices.append(value.strip())
    return devices


def prompt_network_settings(executor: Executor, prompt: PromptFunc = ask) -> NetworkSettings:
    """Show the available interfaces and ask for the static IP parameters."""
    console = executor.log.console
    console.print("-" * 53)
    console.print("Available network interfaces:")
    for device in list_interfaces(executor):
        console.print(f"  {device}", markup=False)
    console.print("-" * 53)

    return NetworkSettings(
        interface=prompt("Enter the network interface name (e.g., enp0s3)"),
        address=prompt("Enter the static IP address with CIDR (e.g., 192.168.1.10/24)"),
        gateway=prompt("Enter the Gateway IP address (e.g., 192.168.1.1)"),
        dns=prompt("Enter DNS server(s) (comma-separated, e.g., 8.8.8.8,8.8.4.4)"),
    )


def interface_exists(executor: Executor, interface: str) -> bool:
    return executor.check(["nmcli", "device", "show", interface])


def parse_active_connections(output: str) -> list[tuple[str, str]]:
    """Parse ``nmcli -g NAME,DEVICE con show --active`` into (name, device) pairs."""
    connections = []
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = _TERSE_FIELD_SEP.split(line, maxsplit=1)
        name = fields[0].replace("\\:", ":")
        device = fields[1].replace("\\:", ":") if len(fields) > 1 else ""
        connections.append((name, device))
    return connections


def find_active_connection(executor: Executor, interface: str) -> str | None:
    """Return the first active connection whose line mentions the interface."""
    output = executor.capture(
        "Listing active connections",
        ["nmcli", "-g", "NAME,DEVICE", "con", "show", "--active"],
    )
    for name, device in parse_active_connections(output):
        if interface in name or interface in device:
            return name
    return None


def resolve_connection(executor: Executor, interface: str) -> str:
    """Pick the connection profile to modify, creating one if needed."""
    current = find_active_connection(executor, interface)
    if current:
        executor.log.info(f"Modifying existing connection '{current}' for interface '{interface}'.")
        return current

    connection = f"{interface}-static"
    executor.log.info(f"No active connection found for '{interface}'. Creating a new connection profile.")
    executor.execute(
        f"Adding new ethernet connection for {interface}",
        ["nmcli", "con", "add", "type", "ethernet", "ifname", interface, "con-name", connection],
    )
    return connection


def apply_static_ip(executor: Executor, connection: str, settings: NetworkSettings) -> None:
    """Switch the profile to a manual IPv4 configuration and bring it up."""
    changes = [
        ("method to manual", "ipv4.method", "manual"),
        ("addresses", "ipv4.addresses", settings.address),
        ("gateway", "ipv4.gateway", settings.gateway),
        ("DNS servers", "ipv4.dns", settings.dns),
    ]
    for label, key, value in changes:
        executor.execute(
            f"Setting IPv4 {label} for {connection}",
            ["nmcli", "con", "mod", connection, key, value],
        )

    executor.execute(
        f"Bringing up the network connection {connection}",
        ["nmcli", "con", "up", connection],
    )


def configure_network(executor: Executor, config: DeployConfig, prompt: PromptFunc = ask) -> str:
    """Run all network setup steps. Returns the connection profile used."""
    executor.log.info("Starting network configuration for static IP...")

    settings = config.network or prompt_network_settings(executor, prompt)
    for warning in validate_network(settings):
        executor.log.warn(warning)

    interface = settings.interface
    if not interface_exists(executor, interface):
        message = f"Network interface '{interface}' not found. Please check the name and try again."
        executor.log.error(message)
        raise NetworkInterfaceError(message)

    connection = resolve_connection(executor, interface)
    apply_static_ip(executor, connection, settings)

    executor.log.success(f"Static IP configuration complete for interface {interface}.")
    return connection
