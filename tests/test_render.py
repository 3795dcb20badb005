from __future__ import annotations

from mine_cart_sim.engine import step_tick
from mine_cart_sim.render import describe_result, render_board
from mine_cart_sim.simulation import run_simulation
from mine_cart_sim.track import build_state
from tests._support.layouts import example_state


def test_initial_board_shows_carts_over_track():
    board = render_board(example_state()).splitlines()

    assert board[0] == "   0123456789012"
    assert board[1] == "0: /->-\\"
    assert board[4] == "3: | | |  | v  |"
    assert board[6] == "5:   \\------/"
    assert len(board) == 7


def test_shared_cell_is_drawn_as_crash():
    state = example_state()
    report = run_simulation(state)

    board = render_board(state).splitlines()
    assert board[4] == "3: | | |  X |  |"
    assert describe_result(report.result) == "collision at 7,3"


def test_row_labels_widen_for_tall_layouts():
    state = build_state(["|"] * 10 + ["^"])
    board = render_board(state).splitlines()

    assert board[0] == "    0"
    assert board[1] == " 0: |"
    assert board[11] == "10: ^"


def test_fault_and_running_descriptions():
    state = build_state([">-x"])
    assert describe_result(step_tick(state)) == "running"
    assert describe_result(step_tick(state)) == "fault: UnknownSegmentFault at 2,0 (symbol='x')"

    state = build_state(["^"])
    assert describe_result(step_tick(state)) == "fault: OutOfBoundsFault at 0,-1"
