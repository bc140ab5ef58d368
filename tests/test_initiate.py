"""Tests for the one-shot initiation job."""

import pytest

from tunnelcmd.daemon.initiate import InitiationJob, JobState
from tunnelcmd.daemon.jobs import JobPriority, JobRequeue
from tunnelcmd.daemon.shutdown import ShutdownRequest
from tunnelcmd.model.auth import IkeVersion
from tunnelcmd.model.options import ConnectionOptions, OptionType
from tunnelcmd.util import MissingCredentialError


class RecordingController:
    """Controller stub that records submitted descriptors."""

    def __init__(self, result=True):
        self.result = result
        self.submitted = []

    def initiate(self, descriptor, callback):
        self.submitted.append(descriptor)
        return self.result


class CountingShutdown(ShutdownRequest):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def request(self, reason):
        self.calls += 1
        return super().request(reason)


def make_options(**values):
    options = ConnectionOptions()
    for name, value in values.items():
        options.handle(OptionType[name.upper()], value)
    return options


@pytest.fixture()
def shutdown():
    return CountingShutdown()


def test_default_eap_connection(shutdown):
    controller = RecordingController()
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    job = InitiationJob(options, controller, shutdown)

    assert job.execute() is JobRequeue.NONE

    assert job.state is JobState.SUCCESS
    assert not shutdown.requested
    (desc,) = controller.submitted
    assert desc.version is IkeVersion.V2
    assert [str(ts) for ts in desc.child.local_ts] == ["dynamic"]
    assert [str(ts) for ts in desc.child.remote_ts] == ["0.0.0.0/0"]
    assert [str(a) for a in desc.auth] == ["local:eap", "remote:any"]
    assert desc.remote_auth[0].identity == "vpn.example.com"


def test_xauth_psk_without_key(shutdown):
    controller = RecordingController()
    options = make_options(
        host="vpn.example.com", identity="alice@example.com", profile="v1-xauth-psk",
    )

    InitiationJob(options, controller, shutdown).execute()

    (desc,) = controller.submitted
    assert [str(a) for a in desc.auth] == [
        "local:pre-shared-key", "local:xauth", "remote:pre-shared-key",
    ]
    assert desc.version is IkeVersion.V1


def test_user_selectors_are_drained_into_descriptor(shutdown):
    controller = RecordingController()
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    options.handle(OptionType.LOCAL_TS, "192.168.0.0/24")
    options.handle(OptionType.REMOTE_TS, "10.1.0.0/16")

    InitiationJob(options, controller, shutdown).execute()

    (desc,) = controller.submitted
    assert [str(ts) for ts in desc.child.local_ts] == ["dynamic", "192.168.0.0/24"]
    assert [str(ts) for ts in desc.child.remote_ts] == ["10.1.0.0/16"]
    assert len(options.local_ts) == 0
    assert len(options.remote_ts) == 0


@pytest.mark.parametrize("values, missing", [
    ({"identity": "alice@example.com"}, "--host"),
    ({"host": "vpn.example.com"}, "--identity"),
    ({}, "--host"),
])
def test_missing_required_field(shutdown, caplog, values, missing):
    controller = RecordingController()
    job = InitiationJob(make_options(**values), controller, shutdown)

    assert job.execute() is JobRequeue.NONE

    assert job.state is JobState.FAILED
    assert controller.submitted == []
    assert shutdown.calls == 1
    assert missing in shutdown.reason
    assert f"missing {missing} option" in caplog.text


def test_missing_private_key_fails_before_submission(shutdown):
    controller = RecordingController()
    options = make_options(
        host="vpn.example.com", identity="alice@example.com", profile="v1-xauth",
    )
    job = InitiationJob(options, controller, shutdown)

    job.execute()

    assert job.state is JobState.FAILED
    assert job.descriptor is None
    assert controller.submitted == []
    assert shutdown.calls == 1
    assert "v1-xauth" in shutdown.reason
    # nothing consumed on a resolution failure
    assert len(options.local_ts) == 1


def test_controller_failure_requests_shutdown(shutdown):
    controller = RecordingController(result=False)
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    job = InitiationJob(options, controller, shutdown)

    assert job.execute() is JobRequeue.NONE

    assert job.state is JobState.FAILED
    assert len(controller.submitted) == 1
    assert shutdown.calls == 1


def test_job_runs_only_once(shutdown):
    controller = RecordingController()
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    job = InitiationJob(options, controller, shutdown)
    job.execute()

    with pytest.raises(RuntimeError):
        job.execute()
    assert len(controller.submitted) == 1


def test_job_is_critical_and_never_cancelled(shutdown):
    job = InitiationJob(ConnectionOptions(), RecordingController(), shutdown)

    assert job.priority is JobPriority.CRITICAL
    assert job.cancel() is False
    assert job.state is JobState.PENDING


class RaisingController:
    def initiate(self, descriptor, callback):
        raise OSError("No space left on device")


def test_controller_exception_fails_the_job(shutdown, caplog):
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    job = InitiationJob(options, RaisingController(), shutdown)

    assert job.execute() is JobRequeue.NONE

    assert job.state is JobState.FAILED
    assert shutdown.calls == 1
    assert "No space left on device" in shutdown.reason
    assert "initiating connection to vpn.example.com failed" in caplog.text


def test_second_assembly_raises(shutdown):
    options = make_options(host="vpn.example.com", identity="alice@example.com")
    job = InitiationJob(options, RecordingController(), shutdown)

    desc = job.assemble()
    assert [str(ts) for ts in desc.child.local_ts] == ["dynamic"]

    with pytest.raises(RuntimeError):
        job.assemble()


def test_assembly_retry_allowed_after_resolution_failure(shutdown):
    options = make_options(
        host="vpn.example.com", identity="alice@example.com", profile="v1-public-key",
    )
    job = InitiationJob(options, RecordingController(), shutdown)

    with pytest.raises(MissingCredentialError):
        job.assemble()
    options.handle(OptionType.RSA, "alice.pem")

    desc = job.assemble()
    assert [str(ts) for ts in desc.child.local_ts] == ["dynamic"]
