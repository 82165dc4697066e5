import json

import pytest

from fakes import FakeCluster, FakeImages, FakeProbe
from kubedeploy.constants import ALREADY_ABSENT
from kubedeploy.dispatcher import dispatch, resolve_operation
from kubedeploy.exceptions import UsageError
from kubedeploy.models import DEFAULT_RESOURCES, ClusterEvent, ProbeResult, ReadinessState, ResourceSet

SIX = ResourceSet.from_table(
    [
        ("namespace", 1, "Namespace"),
        ("rbac", 2, "ServiceAccount"),
        ("configmap", 3, "ConfigMap"),
        ("deployment", 4, "Deployment"),
        ("service", 5, "Service"),
        ("ingress", 6, "Ingress"),
    ]
)


def test_resolve_operation() -> None:
    assert resolve_operation(None) == "deploy"
    assert resolve_operation("verify") == "verify"
    assert resolve_operation("clean") == "cleanup"
    with pytest.raises(UsageError) as exc_info:
        resolve_operation("blah")
    assert exc_info.value.operation == "blah"


def test_unknown_operation_makes_no_cluster_calls(make_context, console) -> None:
    cluster = FakeCluster()

    with pytest.raises(UsageError):
        dispatch("blah", make_context(), cluster=cluster, console=console)

    assert cluster.calls == []


def test_deploy_with_one_manifest_missing(make_context, console, write_manifests) -> None:
    write_manifests("namespace", "rbac", "configmap", "deployment", "service")
    cluster = FakeCluster(endpoints=["10.1.0.7"])
    images = FakeImages()

    command = dispatch(
        "deploy",
        make_context(skip_build=True),
        cluster=cluster,
        images=images,
        probe=FakeProbe(ProbeResult.HEALTHY),
        console=console,
        resources=SIX,
    )

    assert command.apply_report.succeeded == 5
    assert command.apply_report.skipped == 1
    assert command.readiness == ReadinessState.READY
    assert len(cluster.calls_named("wait_for_available")) == 1
    assert images.calls == []
    assert "Deployment completed successfully" in console.file.getvalue()


def test_dry_run_deploy_is_read_only(make_context, console, write_manifests) -> None:
    write_manifests(*[d.name for d in DEFAULT_RESOURCES])
    cluster = FakeCluster()
    probe = FakeProbe()

    command = dispatch(
        "deploy",
        make_context(dry_run=True, skip_build=True),
        cluster=cluster,
        images=FakeImages(),
        probe=probe,
        console=console,
    )

    assert all(call[2] is True for call in cluster.calls_named("apply"))
    assert cluster.calls_named("wait_for_available") == []
    assert cluster.calls_named("get_pods") == []


def test_convergence_timeout_json_lists_events(make_context, console, write_manifests, capsys) -> None:
    write_manifests("deployment")
    event = ClusterEvent("Warning", "BackOff", "pod/bingo-grpc-7d9f", "Back-off pulling image", "2024-05-01T10:00:05Z")
    cluster = FakeCluster(
        readiness=ReadinessState.TIMED_OUT,
        events=[event],
        wait_error="timed out waiting for the condition on deployments/bingo-grpc",
    )

    with pytest.raises(SystemExit) as exc_info:
        dispatch(
            "deploy",
            make_context(skip_build=True),
            cluster=cluster,
            images=FakeImages(),
            console=console,
            json_output=True,
        )

    assert exc_info.value.code == 1
    data = json.loads(capsys.readouterr().out)
    assert data["error"] == "deployment/bingo-grpc failed to become ready within 300s"
    assert data["kubectl"] == cluster.wait_error
    assert data["events"] == [event.to_dict()]
    assert cluster.calls_named("list_resources") == []
    assert probe.runs == 0
    assert command.readiness == ReadinessState.PENDING
    assert command.verification is None


def test_apply_failure_exits_non_zero_before_waiting(make_context, console, write_manifests, tmp_path) -> None:
    write_manifests("namespace", "deployment")
    cluster = FakeCluster(apply_failures={"deployment.yaml": "error: invalid"})

    with pytest.raises(SystemExit) as exc_info:
        dispatch("deploy", make_context(skip_build=True), cluster=cluster, images=FakeImages(), console=console)

    assert exc_info.value.code == 1
    assert cluster.calls_named("wait_for_available") == []
    logs = list((tmp_path / "logs" / "bingo").rglob("*_deploy.log"))
    assert len(logs) == 1
    assert "Status: FAILED" in logs[0].read_text(encoding="utf-8")


def test_convergence_timeout_exits_non_zero(make_context, console, write_manifests) -> None:
    write_manifests("deployment")
    cluster = FakeCluster(readiness=ReadinessState.TIMED_OUT)

    with pytest.raises(SystemExit) as exc_info:
        dispatch("deploy", make_context(skip_build=True), cluster=cluster, images=FakeImages(), console=console)

    assert exc_info.value.code == 1
    assert len(cluster.calls_named("list_events")) == 1
    assert cluster.calls_named("get_pods") == []


def test_cleanup_on_empty_namespace(make_context, console, write_manifests) -> None:
    write_manifests(*[d.name for d in DEFAULT_RESOURCES])
    cluster = FakeCluster()

    command = dispatch("clean", make_context(), cluster=cluster, console=console)

    assert command.report.failed == 0
    assert {o.detail for o in command.report.outcomes} == {ALREADY_ABSENT}
    assert cluster.calls_named("apply") == []


def test_verify_json_output(make_context, console, capsys) -> None:
    cluster = FakeCluster(endpoints=[])

    dispatch(
        "verify",
        make_context(),
        cluster=cluster,
        probe=FakeProbe(ProbeResult.UNAVAILABLE),
        console=console,
        json_output=True,
    )

    data = json.loads(capsys.readouterr().out)
    assert data["operation"] == "verify"
    assert data["verification"]["endpoints"] == 0
    assert data["verification"]["probe"] == "unavailable"
    assert console.file.getvalue() == ""


def test_strict_verify_fails_on_unhealthy_probe(make_context, console) -> None:
    with pytest.raises(SystemExit) as exc_info:
        dispatch(
            "verify",
            make_context(strict_verify=True),
            cluster=FakeCluster(endpoints=[]),
            probe=FakeProbe(ProbeResult.UNHEALTHY),
            console=console,
        )

    assert exc_info.value.code == 1


def test_interrupt_exits_130(make_context, console) -> None:
    class InterruptedCluster(FakeCluster):
        def list_resources(self, kind, selector):
            raise KeyboardInterrupt

    with pytest.raises(SystemExit) as exc_info:
        dispatch("info", make_context(), cluster=InterruptedCluster(), console=console)

    assert exc_info.value.code == 130
