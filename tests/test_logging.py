# tests/test_logging.py
from bindery import Container


class Service:
    pass


def test_bind_and_snapshot_emit_debug_logs(captured_logs):
    container = Container()
    container.bind(Service).scope("singleton")
    container.get(Service)
    container.snapshot(Service)
    container.restore(Service)

    joined = "\n".join(captured_logs)
    assert "bindery.registry DEBUG Registered binding Service{}" in joined
    assert "bindery.guard DEBUG Direct construction of Service blocked" in joined
    assert "bindery.scope DEBUG Singleton created for Service{}" in joined
    assert "bindery.snapshot DEBUG Snapshot taken" in joined
    assert "bindery.snapshot DEBUG Snapshot restored" in joined


def test_failures_are_not_logged(captured_logs):
    container = Container()
    container.bind(Service).provider_fun(lambda: 1 / 0)
    try:
        container.get(Service)
    except ZeroDivisionError:
        pass
    assert not any("ERROR" in line or "WARNING" in line for line in captured_logs)
