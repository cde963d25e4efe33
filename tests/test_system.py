from nginx_deploy.host import setup_firewall, setup_ssh
from nginx_deploy.system import ensure_package, ensure_service_active, ensure_service_enabled
from nginx_deploy.webserver import start_webserver

from conftest import FRESH_HOST, PROVISIONED_HOST


def test_ensure_package_skips_installed(make_executor, log_path):
    executor = make_executor({"rpm -q nginx": True})

    assert ensure_package(executor, "nginx", "Nginx") is False
    assert executor.host.ran("dnf") == []
    assert "[INFO] Nginx is already installed." in log_path.read_text()


def test_ensure_package_installs_missing(make_executor):
    executor = make_executor({"rpm -q nginx": False})

    assert ensure_package(executor, "nginx", "Nginx", package_manager="yum") is True
    assert executor.host.ran("yum", "install") == [["yum", "install", "nginx", "-y"]]


def test_service_guards(make_executor):
    executor = make_executor({
        "systemctl is-active --quiet nginx": True,
        "systemctl is-enabled --quiet nginx": False,
    })

    assert ensure_service_active(executor, "nginx", "Nginx service") is False
    assert ensure_service_enabled(executor, "nginx", "Nginx service") is True
    assert executor.host.ran("systemctl", "start") == []
    assert executor.host.ran("systemctl", "enable") == [["systemctl", "enable", "nginx"]]


def test_setup_ssh_on_fresh_host(make_executor, config):
    executor = make_executor(FRESH_HOST)

    setup_ssh(executor, config)

    assert executor.host.ran("dnf", "install") == [["dnf", "install", "openssh-server", "-y"]]
    assert executor.host.ran("systemctl", "start") == [["systemctl", "start", "sshd"]]
    assert executor.host.ran("systemctl", "enable") == [["systemctl", "enable", "sshd"]]


def test_setup_ssh_is_idempotent(make_executor, config, log_path):
    executor = make_executor(PROVISIONED_HOST)

    setup_ssh(executor, config)

    assert executor.host.ran("dnf") == []
    assert executor.host.ran("systemctl", "start") == []
    assert executor.host.ran("systemctl", "enable") == []
    assert "OpenSSH server is ready." in log_path.read_text()


def test_firewall_rules_always_reapplied(make_executor, config):
    executor = make_executor(PROVISIONED_HOST)

    setup_firewall(executor, config)

    assert executor.host.ran("firewall-cmd") == [
        ["firewall-cmd", "--permanent", "--add-service=http"],
        ["firewall-cmd", "--permanent", "--add-service=https"],
        ["firewall-cmd", "--permanent", "--add-service=ssh"],
        ["firewall-cmd", "--reload"],
    ]


def test_already_enabled_messages(make_executor, config, log_path):
    executor = make_executor(PROVISIONED_HOST)

    setup_ssh(executor, config)
    start_webserver(executor, config)

    lines = log_path.read_text().splitlines()
    assert any(line.endswith("[INFO] SSH service is already enabled.") for line in lines)
    assert any(line.endswith("[INFO] Nginx service is already enabled to start on boot.") for line in lines)
