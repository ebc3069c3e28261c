#!filepath: tests/observability/test_instrumentation.py

import pytest
from loguru import logger

from timekeeper.observability.instrumentation import Instrumentation


def test_instrumentation_timer(registry, clock):
    inst = Instrumentation(registry=registry)

    with inst.timer("step_A"):
        clock.advance(2)

    rec = registry.get("step_A").items[0]
    assert rec.is_running is False
    assert rec.elapsed == 2


def test_instrumentation_timer_stops_on_error(registry, clock):
    inst = Instrumentation(registry=registry)

    with pytest.raises(RuntimeError):
        with inst.timer("boom"):
            clock.advance(1)
            raise RuntimeError("fail")

    assert registry.get("boom").items[0].is_running is False


def test_instrumentation_timer_restarts_same_name(registry, clock):
    inst = Instrumentation(registry=registry)

    with inst.timer("loop"):
        clock.advance(5)
    with inst.timer("loop"):
        clock.advance(1)

    assert registry.get("loop").items[0].elapsed == 1


def test_instrumentation_disabled(registry):
    inst = Instrumentation(registry=registry, enabled=False)

    with inst.timer("x"):
        pass

    assert not registry.initialized


def test_generate_report(registry, clock):
    inst = Instrumentation(registry=registry)

    with inst.timer("phase_X"):
        clock.advance(0.5)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    inst.generate_report("nightly")

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "phase_X" in output
    assert "00:00:00.50" in output
    assert "nightly" in output
    assert "stopped" in output


def test_generate_report_without_timers(registry):
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    Instrumentation(registry=registry).generate_report()

    logger.remove(sink_id)
    assert "(no timers)" in "\n".join(captured)
