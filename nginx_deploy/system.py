"""Package and service state for nginx-deploy."""

from nginx_deploy.executor import Executor


def update_system(executor: Executor, package_manager: str = "dnf") -> None:
    """Update system packages."""
    executor.execute("Updating system packages", [package_manager, "update", "-y"])


def package_installed(executor: Executor, package: str) -> bool:
    return executor.check(["rpm", "-q", package])


def service_active(executor: Executor, service: str) -> bool:
    return executor.check(["systemctl", "is-active", "--quiet", service])


def service_enabled(executor: Executor, service: str) -> bool:
    return executor.check(["systemctl", "is-enabled", "--quiet", service])


def ensure_package(executor: Executor, package: str, label: str, package_manager: str = "dnf") -> bool:
    """Install a package unless rpm already knows it.

    Returns True if an install was performed.
    """
    if package_installed(executor, package):
        executor.log.info(f"{label} is already installed.")
        return False

    executor.execute(f"Installing {label}", [package_manager, "install", package, "-y"])
    return True


def ensure_service_active(executor: Executor, service: str, label: str) -> bool:
    """Start a service unless it is already running."""
    if service_active(executor, service):
        executor.log.info(f"{label} is already active.")
        return False

    executor.execute(f"Starting {label}", ["systemctl", "start", service])
    return True


def ensure_service_enabled(executor: Executor, service: str, label: str, on_boot_note: bool = False) -> bool:
    """Enable a service at boot unless it already is."""
    if service_enabled(executor, service):
        suffix = " to start on boot" if on_boot_note else ""
        executor.log.info(f"{label} is already enabled{suffix}.")
        return False

    executor.execute(f"Enabling {label} to start on boot", ["systemctl", "enable", service])
    return True


def restart_service(executor: Executor, service: str, label: str) -> None:
    executor.execute(f"Restarting {label} to apply new configuration", ["systemctl", "restart", service])
