import pytest

from fakes import FakeCluster, FakeProbe
from kubedeploy.core.verifier import Verifier
from kubedeploy.exceptions import HealthCheckError
from kubedeploy.models import PodStatus, ProbeResult


def _pods() -> list:
    return [
        PodStatus("bingo-grpc-1", "Running", ready=True),
        PodStatus("bingo-grpc-2", "Running", ready=True),
        PodStatus("bingo-grpc-3", "Pending"),
    ]


def test_healthy_deployment(make_context, logger) -> None:
    cluster = FakeCluster(pods=_pods(), endpoints=["10.0.0.1", "10.0.0.2"])
    probe = FakeProbe(ProbeResult.HEALTHY)

    summary = Verifier(make_context(), cluster, probe, logger).verify()

    assert summary.running_pods == 2
    assert summary.total_pods == 3
    assert summary.endpoints == 2
    assert summary.probe == ProbeResult.HEALTHY
    assert not summary.has_warnings
    assert [pod["name"] for pod in summary.to_dict()["pods"]] == ["bingo-grpc-1", "bingo-grpc-2", "bingo-grpc-3"]
    assert summary.to_dict()["pods"][2] == {
        "name": "bingo-grpc-3",
        "phase": "Pending",
        "ready": False,
        "restarts": 0,
        "node": None,
        "ip": None,
    }
    assert cluster.calls_named("get_pods") == [("get_pods", "app=bingo-grpc")]
    assert cluster.calls_named("get_endpoints") == [("get_endpoints", "bingo-grpc-service")]


def test_missing_service_and_failing_probe_are_warnings(make_context, logger) -> None:
    cluster = FakeCluster(pods=_pods(), endpoints=None)
    probe = FakeProbe(ProbeResult.UNHEALTHY)

    summary = Verifier(make_context(), cluster, probe, logger).verify()

    assert not summary.service_present
    assert summary.probe == ProbeResult.UNHEALTHY
    assert len(summary.warnings) == 2
    assert probe.runs == 1


def test_unavailable_probe_is_not_run(make_context, logger) -> None:
    probe = FakeProbe(ProbeResult.UNAVAILABLE)

    summary = Verifier(make_context(), FakeCluster(endpoints=[]), probe, logger).verify()

    assert summary.probe == ProbeResult.UNAVAILABLE
    assert probe.runs == 0


def test_strict_mode_fails_on_unhealthy_probe(make_context, logger) -> None:
    probe = FakeProbe(ProbeResult.UNHEALTHY)

    with pytest.raises(HealthCheckError):
        Verifier(make_context(strict_verify=True), FakeCluster(endpoints=[]), probe, logger).verify()


def test_strict_mode_tolerates_missing_probe(make_context, logger) -> None:
    probe = FakeProbe(ProbeResult.UNAVAILABLE)

    summary = Verifier(make_context(strict_verify=True), FakeCluster(endpoints=[]), probe, logger).verify()

    assert summary.probe == ProbeResult.UNAVAILABLE


def test_dry_run_skips_verification(make_context, logger, cluster) -> None:
    probe = FakeProbe()

    assert Verifier(make_context(dry_run=True), cluster, probe, logger).verify() is None
    assert cluster.calls == []
    assert probe.runs == 0
