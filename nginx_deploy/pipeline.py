"""The deployment sequence for nginx-deploy."""

from nginx_deploy.config import DeployConfig
from nginx_deploy.executor import Executor
from nginx_deploy.host import check_privileges, setup_firewall, setup_ssh
from nginx_deploy.network import PromptFunc, ask, configure_network
from nginx_deploy.system import update_system
from nginx_deploy.webserver import (
    deploy_index_page,
    deploy_server_block,
    install_webserver,
    start_webserver,
    validate_and_restart,
)


def run_deployment(executor: Executor, config: DeployConfig, prompt: PromptFunc = ask) -> None:
    """Run every provisioning step in order.

    Any ``DeploymentError`` raised by a step propagates immediately; later
    steps never run and nothing is rolled back.
    """
    log = executor.log
    log.info("Starting Nginx web server deployment...")

    log.phase("Phase 1: Preflight")
    check_privileges(executor)
    update_system(executor, config.package_manager)

    log.phase("Phase 2: SSH Service")
    setup_ssh(executor, config)

    log.phase("Phase 3: Network Configuration")
    configure_network(executor, config, prompt)

    log.phase("Phase 4: Web Server Installation")
    install_webserver(executor, config)

    log.phase("Phase 5: Firewall")
    setup_firewall(executor, config)

    log.phase("Phase 6: Web Server Service")
    start_webserver(executor, config)

    log.phase("Phase 7: Content & Configuration")
    deploy_index_page(executor, config)
    deploy_server_block(executor, config)

    log.phase("Phase 8: Validation & Activation")
    validate_and_restart(executor, config)

    log.info("Nginx web server deployment complete!")
    log.info(
        "You should now be able to access your web server by opening a web browser "
        "and navigating to your server's IP address or hostname."
    )
    log.info(
        f"If you encounter issues, check {config.log_file} "
        f"and 'journalctl -xeu {config.webserver.service}'."
    )
