from __future__ import annotations

import pytest

from mine_cart_sim.config import SimulationConfig
from mine_cart_sim.engine import Collision, Continue, Fault
from mine_cart_sim.errors import ConfigurationError, UnknownSegmentFault
from mine_cart_sim.event_sink import InMemoryEventSink
from mine_cart_sim.simulation import run_simulation
from mine_cart_sim.track import build_state
from tests._support.layouts import example_state, straight_state


def test_run_until_first_collision():
    report = run_simulation(example_state())

    assert isinstance(report.result, Collision)
    assert report.collision is report.result
    assert report.fault is None
    assert report.result.position == (3, 7)
    assert report.ticks == 15
    assert report.capped is False


def test_eager_config_finishes_a_tick_sooner():
    report = run_simulation(example_state(), SimulationConfig(eager_collision_check=True))

    assert report.collision is not None
    assert report.collision.position == (3, 7)
    assert report.ticks == 14


def test_cap_stops_a_run_that_has_not_collided():
    report = run_simulation(straight_state(), SimulationConfig(max_ticks=2))

    assert report.capped is True
    assert report.ticks == 2
    assert isinstance(report.result, Continue)
    assert report.result.done is False


def test_fault_is_reported_distinctly_from_collision():
    report = run_simulation(build_state([">--#--"]))

    assert report.collision is None
    assert isinstance(report.result, Fault)
    assert isinstance(report.fault.error, UnknownSegmentFault)
    assert report.ticks == 3
    assert report.capped is False


def test_closed_loop_without_collision_runs_to_the_cap():
    report = run_simulation(build_state(["/>\\", "\\-/"]), SimulationConfig(max_ticks=50))

    assert report.capped is True
    assert report.ticks == 50


def test_sink_sees_every_tick_of_the_run():
    sink = InMemoryEventSink()
    report = run_simulation(straight_state(), event_sink=sink)

    assert report.ticks == 3
    assert sink.current_tick == 3


def test_invalid_config_is_rejected_before_running():
    with pytest.raises(ConfigurationError):
        run_simulation(example_state(), SimulationConfig(max_ticks=0))
    with pytest.raises(ConfigurationError):
        SimulationConfig(max_ticks=True).validate()  # type: ignore[arg-type]


def test_on_tick_sees_each_result_including_the_last():
    seen = []
    report = run_simulation(example_state(), on_tick=lambda tick, result: seen.append((tick, result)))

    assert [tick for tick, _ in seen] == list(range(1, 16))
    assert all(isinstance(r, Continue) for _, r in seen[:-1])
    assert seen[-1][1] is report.result


def test_on_tick_runs_up_to_the_cap():
    ticks = []
    report = run_simulation(
        straight_state(),
        SimulationConfig(max_ticks=2),
        on_tick=lambda tick, _: ticks.append(tick),
    )

    assert report.capped is True
    assert ticks == [1, 2]
