"""nginx-deploy library modules."""

from nginx_deploy.config import load_config, validate_network, DeployConfig, NetworkSettings
from nginx_deploy.connection import HostConnection
from nginx_deploy.errors import DeploymentError, CommandError
from nginx_deploy.executor import Executor
from nginx_deploy.log import DeployLog
from nginx_deploy.host import check_privileges, setup_ssh, setup_firewall
from nginx_deploy.network import configure_network
from nginx_deploy.webserver import deploy_index_page, deploy_server_block, validate_and_restart
from nginx_deploy.pipeline import run_deployment

__all__ = [
    "load_config",
    "validate_network",
    "DeployConfig",
    "NetworkSettings",
    "HostConnection",
    "DeploymentError",
    "CommandError",
    "Executor",
    "DeployLog",
    "check_privileges",
    "setup_ssh",
    "setup_firewall",
    "configure_network",
    "deploy_index_page",
    "deploy_server_block",
    "validate_and_restart",
    "run_deployment",
]
