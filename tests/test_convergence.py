import pytest

from fakes import FakeCluster
from kubedeploy.core.convergence import ConvergenceWaiter
from kubedeploy.exceptions import ConvergenceTimeoutError
from kubedeploy.models import ClusterEvent, ReadinessState


def _events() -> list:
    return [
        ClusterEvent("Warning", "BackOff", "pod/bingo-grpc-7d9f", "Back-off pulling image", "2024-05-01T10:00:05Z"),
        ClusterEvent("Normal", "Scheduled", "pod/bingo-grpc-7d9f", "Successfully assigned", "2024-05-01T10:00:00Z"),
    ]


def test_ready_workload(make_context, logger) -> None:
    cluster = FakeCluster(readiness=ReadinessState.READY)
    waiter = ConvergenceWaiter(make_context(wait_timeout=120), cluster, logger)

    assert waiter.wait() == ReadinessState.READY
    assert cluster.calls_named("wait_for_available") == [
        ("wait_for_available", "deployment/bingo-grpc", 120)
    ]
    assert cluster.calls_named("list_events") == []


def test_timeout_surfaces_recent_events(make_context, logger, console) -> None:
    cluster = FakeCluster(readiness=ReadinessState.TIMED_OUT, events=_events())
    waiter = ConvergenceWaiter(make_context(), cluster, logger)

    with pytest.raises(ConvergenceTimeoutError) as exc_info:
        waiter.wait()

    assert waiter.state == ReadinessState.TIMED_OUT
    assert exc_info.value.events == _events()
    assert cluster.calls_named("list_events") == [("list_events", "bingo", 10)]
    output = console.file.getvalue()
    assert "BackOff" in output
    assert "Back-off pulling image" in output


def test_timeout_with_failing_event_query_still_raises(make_context, logger) -> None:
    cluster = FakeCluster(readiness=ReadinessState.TIMED_OUT, events_error=True)

    with pytest.raises(ConvergenceTimeoutError) as exc_info:
        ConvergenceWaiter(make_context(), cluster, logger).wait()

    assert exc_info.value.events == []
    assert "No recent events" in exc_info.value.context


def test_dry_run_never_waits(make_context, logger, cluster) -> None:
    waiter = ConvergenceWaiter(make_context(dry_run=True), cluster, logger)

    assert waiter.wait() == ReadinessState.PENDING
    assert cluster.calls == []


def test_terminal_state_is_not_waited_again(make_context, logger, cluster) -> None:
    waiter = ConvergenceWaiter(make_context(), cluster, logger)
    waiter.wait()
    waiter.wait()

    assert len(cluster.calls_named("wait_for_available")) == 1


def test_timeout_carries_kubectl_message(make_context, logger) -> None:
    cluster = FakeCluster(
        readiness=ReadinessState.TIMED_OUT,
        wait_error='Error from server (NotFound): deployments.apps "bingo-grpc" not found',
    )

    with pytest.raises(ConvergenceTimeoutError) as exc_info:
        ConvergenceWaiter(make_context(), cluster, logger).wait()

    assert exc_info.value.detail == cluster.wait_error
    assert 'deployments.apps "bingo-grpc" not found' in exc_info.value.context
