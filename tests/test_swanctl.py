"""Tests for the swanctl based daemon controller."""

import subprocess
import threading
from pathlib import Path
from typing import List

import pytest

from tunnelcmd.daemon.swanctl import SwanctlController


class FakeRun:
    """Replacement for subprocess.run returning canned results per command."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls: List[List[str]] = []
        self.loaded = None

    def __call__(self, argv, **kwargs):
        self.calls.append(argv)
        if "--file" in argv:
            self.loaded = Path(argv[argv.index("--file") + 1]).read_text(encoding="utf-8")
        rc, stdout, stderr = self.results.get(argv[1], (0, "", ""))
        return subprocess.CompletedProcess(argv, rc, stdout, stderr)


@pytest.fixture(autouse=True)
def fast_sleep(monkeypatch):
    monkeypatch.setattr("tunnelcmd.daemon.swanctl.time.sleep", lambda *_: None)


def test_initiate_loads_then_initiates(monkeypatch, make_descriptor):
    fake = FakeRun({"--initiate": (0, "[IKE] initiating IKE_SA cmd[1]\n\n[IKE] established\n", "")})
    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", fake)
    lines = []

    ok = SwanctlController().initiate(make_descriptor(), lines.append)

    assert ok
    assert fake.calls[0][:3] == ["swanctl", "--load-conns", "--file"]
    assert fake.calls[1] == ["swanctl", "--initiate", "--ike", "cmd", "--child", "cmd"]
    assert "remote_addrs = vpn.example.com" in fake.loaded
    assert lines == ["[IKE] initiating IKE_SA cmd[1]", "[IKE] established"]
    assert not Path(fake.calls[0][3]).exists()


def test_load_failure_skips_initiation(monkeypatch, make_descriptor):
    fake = FakeRun({"--load-conns": (1, "", "loading connection 'cmd' failed")})
    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", fake)

    assert SwanctlController().initiate(make_descriptor()) is False
    assert len(fake.calls) == 1


def test_initiate_failure(monkeypatch, make_descriptor):
    fake = FakeRun({"--initiate": (1, "", "initiate failed: establishing CHILD_SA 'cmd' failed")})
    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", fake)

    assert SwanctlController().initiate(make_descriptor()) is False


def test_missing_binary_reports_failure(monkeypatch, make_descriptor):
    def missing(argv, **kwargs):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", missing)
    controller = SwanctlController(command="/nonexistent/swanctl")

    assert controller.initiate(make_descriptor()) is False
    assert controller.probe() is False


def test_timeout_reports_failure(monkeypatch):
    def slow(argv, **kwargs):
        raise subprocess.TimeoutExpired(argv, kwargs.get("timeout"))

    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", slow)

    assert SwanctlController(timeout=1).probe() is False


def test_wait_ready_sets_event(monkeypatch):
    answers = iter([1, 1, 0])

    def run(argv, **kwargs):
        return subprocess.CompletedProcess(argv, next(answers), "", "")

    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", run)
    ready = threading.Event()

    assert SwanctlController().wait_ready(ready, timeout=60)
    assert ready.is_set()


def test_wait_ready_gives_up(monkeypatch):
    monkeypatch.setattr(
        "tunnelcmd.daemon.swanctl.subprocess.run",
        lambda argv, **kwargs: subprocess.CompletedProcess(argv, 1, "", "connecting failed"),
    )
    ready = threading.Event()

    assert SwanctlController().wait_ready(ready, timeout=0) is False
    assert not ready.is_set()


def test_permission_error_reports_failure(monkeypatch, make_descriptor):
    def denied(argv, **kwargs):
        raise PermissionError(13, "Permission denied", argv[0])

    monkeypatch.setattr("tunnelcmd.daemon.swanctl.subprocess.run", denied)
    controller = SwanctlController()

    assert controller.probe() is False
    assert controller.initiate(make_descriptor()) is False
