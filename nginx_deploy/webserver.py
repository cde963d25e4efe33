"""nginx installation, content generation and activation for nginx-deploy."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from nginx_deploy.config import DeployConfig
from nginx_deploy.executor import Executor
from nginx_deploy.system import ensure_package, ensure_service_active, ensure_service_enabled, restart_service

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_index_page(config: DeployConfig) -> str:
    """Render the default landing page."""
    template = _environment().get_template("index.html.j2")
    return template.render(platform=config.platform)


def render_server_block(config: DeployConfig) -> str:
    """Render the default server block.

    Only the web root is interpolated; the rest of the block is fixed.
    """
    template = _environment().get_template("default.conf.j2")
    return template.render(web_root=config.paths.web_root)


def install_webserver(executor: Executor, config: DeployConfig) -> None:
    executor.log.info("Proceeding with Nginx installation...")
    ensure_package(executor, config.webserver.package, "Nginx", config.package_manager)


def start_webserver(executor: Executor, config: DeployConfig) -> None:
    """Start nginx and enable it at boot."""
    service = config.webserver.service
    ensure_service_active(executor, service, "Nginx service")
    ensure_service_enabled(executor, service, "Nginx service", on_boot_note=True)


def deploy_index_page(executor: Executor, config: DeployConfig) -> None:
    """Publish index.html, replacing whatever was there."""
    paths = config.paths
    executor.log.info(f"Deploying a sample {paths.index_file} page...")

    executor.execute("Ensuring web root exists", ["mkdir", "-p", paths.web_root])
    executor.write_file(f"Writing {paths.index_path}", paths.index_path, render_index_page(config))
    executor.log.success(f"Sample {paths.index_file} deployed to {paths.index_path}.")

    executor.execute(
        f"Setting appropriate permissions for {paths.index_path}",
        ["chmod", "644", paths.index_path],
    )
    executor.execute(
        f"Setting appropriate SELinux context for {paths.web_root}",
        ["restorecon", "-Rv", paths.web_root],
    )


def deploy_server_block(executor: Executor, config: DeployConfig) -> None:
    """Write the server block configuration, replacing whatever was there."""
    paths = config.paths
    executor.log.info(f"Creating a basic Nginx server block configuration at {paths.vhost_path}...")

    executor.execute("Ensuring configuration directory exists", ["mkdir", "-p", paths.conf_dir])
    executor.write_file(f"Writing {paths.vhost_path}", paths.vhost_path, render_server_block(config))

    executor.log.success("Nginx server block configuration created.")


def validate_and_restart(executor: Executor, config: DeployConfig) -> None:
    """Check the configuration syntax, then restart nginx.

    A failed syntax check raises before the restart is attempted.
    """
    webserver = config.webserver
    executor.execute("Testing Nginx configuration for syntax errors", [webserver.binary, "-t"])
    restart_service(executor, webserver.service, "Nginx service")
