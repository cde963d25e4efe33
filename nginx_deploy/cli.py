"""Command line interface for nginx-deploy."""

import argparse
import sys
from datetime import datetime

from rich.console import Console
from rich.panel import Panel

from nginx_deploy.config import DeployConfig, load_config
from nginx_deploy.connection import HostConnection
from nginx_deploy.errors import ConfigError, DeploymentError
from nginx_deploy.executor import Executor
from nginx_deploy.log import DeployLog
from nginx_deploy.pipeline import run_deployment

console = Console()


def print_banner(config: DeployConfig, host: HostConnection):
    """Print the nginx-deploy banner."""
    console.print(Panel.fit(
        "[bold cyan]nginx-deploy[/bold cyan]\n"
        f"[dim]Nginx web server deployment on {config.platform} ({host.target})[/dim]",
        border_style="blue",
    ))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Configure a static IP, SSH, firewalld and nginx on an RPM-based server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a YAML configuration file (default: built-in defaults, prompt for network settings)",
    )
    parser.add_argument(
        "--log-file",
        help="Append the deployment log to this file instead of the configured one",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show the output of every command",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        console.print(f"[red]✗ Config error: {e}[/red]")
        sys.exit(1)

    if args.log_file:
        config.log_file = args.log_file

    log = DeployLog(config.log_file, console=console)
    host = HostConnection(config.server)
    executor = Executor(host, log, verbose=args.verbose)

    print_banner(config, host)
    start_time = datetime.now()

    try:
        if host.is_remote and not host.test_connection():
            message = f"Could not connect to {host.target}"
            log.error(message)
            raise DeploymentError(message)

        run_deployment(executor, config)

        elapsed = datetime.now() - start_time
        console.print(Panel.fit(
            f"[bold green]Deployment Complete![/bold green]\n\n"
            f"Time elapsed: {elapsed.total_seconds():.0f} seconds\n"
            f"Log file: {config.log_file}",
            border_style="green",
        ))

    except DeploymentError:
        # Already logged where it was raised
        console.print(f"Script terminated due to an error. Check {config.log_file} for details.")
        sys.exit(1)

    except KeyboardInterrupt:
        log.warn("Deployment interrupted by operator. The host may be partially configured.")
        sys.exit(1)

    except Exception as e:
        log.error(f"Unexpected error: {type(e).__name__}: {e}")
        console.print(f"Script terminated due to an error. Check {config.log_file} for details.")
        sys.exit(1)

    finally:
        host.close()
        log.close()

