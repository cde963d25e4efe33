import pytest

from nginx_deploy.errors import CommandError, PrivilegeError
from nginx_deploy.pipeline import run_deployment

from conftest import FRESH_HOST, PROVISIONED_HOST


def no_prompt(question):
    raise AssertionError(f"unexpected prompt: {question}")


def test_fresh_host_runs_every_step_in_order(make_executor, config):
    executor = make_executor(FRESH_HOST)

    run_deployment(executor, config, prompt=no_prompt)

    mutating = [
        cmd for cmd in executor.host.commands
        if cmd[:2] in (["dnf", "update"], ["dnf", "install"], ["nmcli", "con"], ["firewall-cmd", "--reload"], ["nginx", "-t"])
        or cmd[:2] in (["systemctl", "start"], ["systemctl", "enable"], ["systemctl", "restart"])
    ]
    assert [" ".join(cmd[:3]) for cmd in mutating] == [
        "dnf update -y",
        "dnf install openssh-server",
        "systemctl start sshd",
        "systemctl enable sshd",
        "nmcli con add",
        "nmcli con mod",
        "nmcli con mod",
        "nmcli con mod",
        "nmcli con mod",
        "nmcli con up",
        "dnf install nginx",
        "firewall-cmd --reload",
        "systemctl start nginx",
        "systemctl enable nginx",
        "nginx -t",
        "systemctl restart nginx",
    ]


def test_second_run_skips_guarded_steps(make_executor, config):
    first = make_executor(FRESH_HOST)
    run_deployment(first, config, prompt=no_prompt)

    second = make_executor(PROVISIONED_HOST)
    run_deployment(second, config, prompt=no_prompt)

    assert second.host.ran("dnf", "install") == []
    assert second.host.ran("systemctl", "start") == []
    assert second.host.ran("systemctl", "enable") == []
    assert second.host.ran("nmcli", "con", "add") == []

    # Unguarded steps are reapplied with identical results
    assert second.host.files == first.host.files
    assert second.host.ran("firewall-cmd") == first.host.ran("firewall-cmd")
    assert second.host.ran("systemctl", "restart") == [["systemctl", "restart", "nginx"]]


def test_not_root_stops_before_anything_else(make_executor, config, log_path):
    responses = dict(FRESH_HOST)
    responses["id -u"] = "1000\n"
    executor = make_executor(responses)

    with pytest.raises(PrivilegeError):
        run_deployment(executor, config, prompt=no_prompt)

    assert executor.host.commands == [["id", "-u"]]
    assert "This script must be run as root." in log_path.read_text()


@pytest.mark.parametrize("failing", [
    "dnf update -y",
    "dnf install openssh-server -y",
    "firewall-cmd --permanent --add-service=https",
    "systemctl enable nginx",
    "restorecon -Rv /usr/share/nginx/html",
])
def test_first_failure_halts_the_run(make_executor, config, failing):
    responses = dict(FRESH_HOST)
    responses[failing] = False
    executor = make_executor(responses)

    with pytest.raises(CommandError) as excinfo:
        run_deployment(executor, config, prompt=no_prompt)

    assert excinfo.value.command == failing
    assert " ".join(executor.host.commands[-1]) == failing
    assert executor.host.ran("systemctl", "restart") == []
