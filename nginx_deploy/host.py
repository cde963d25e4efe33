"""Host preparation for nginx-deploy: privileges, SSH and firewall."""

from nginx_deploy.config import DeployConfig
from nginx_deploy.errors import PrivilegeError
from nginx_deploy.executor import Executor
from nginx_deploy.system import ensure_package, ensure_service_active, ensure_service_enabled


def check_privileges(executor: Executor) -> None:
    """Refuse to continue unless commands run as root."""
    uid = executor.capture("Checking effective user id", ["id", "-u"]).strip()
    if uid != "0":
        message = "This script must be run as root. Please use 'sudo'."
        executor.log.error(message)
        raise PrivilegeError(message)


def setup_ssh(executor: Executor, config: DeployConfig) -> None:
    """Make sure the OpenSSH server is installed, running and enabled."""
    ssh = config.ssh
    executor.log.info("Ensuring OpenSSH server is installed and running...")

    ensure_package(executor, ssh.package, "OpenSSH server", config.package_manager)
    ensure_service_active(executor, ssh.service, "SSH service")
    ensure_service_enabled(executor, ssh.service, "SSH service")

    executor.log.success("OpenSSH server is ready.")


def setup_firewall(executor: Executor, config: DeployConfig) -> None:
    """Open the configured firewalld services.

    Rules are re-added on every run; firewall-cmd treats an existing rule as
    a warning, not an error.
    """
    services = config.firewall.services
    label = "/".join(service.upper() for service in services)
    executor.log.info(f"Configuring firewalld to allow {label} traffic...")

    for service in services:
        executor.execute(
            f"Adding {service.upper()} service to firewalld",
            ["firewall-cmd", "--permanent", f"--add-service={service}"],
        )
    executor.execute("Reloading firewalld configuration", ["firewall-cmd", "--reload"])

    executor.log.success(f"Firewalld configured for {label}.")
