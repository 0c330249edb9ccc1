from __future__ import annotations

import threading
import time

import pytest

from pelita_adapter.protocol.errors import (
    DECISION_FAILED,
    EXTRACTION_FAILED,
    ILLEGAL_MOVE,
    DecisionError,
    IllegalMoveError,
    SnapshotError,
)
from pelita_adapter.protocol.models import Position
from pelita_adapter.runtime.dispatcher import MoveDispatcher
from pelita_adapter.runtime.session_store import PlayerSession


def first_legal(snapshot, session):
    return snapshot.acting_bot.legal_positions[0]


def test_first_legal_position_round_trip(host_state):
    state = host_state()
    dispatcher = MoveDispatcher(first_legal)

    move = dispatcher.handle_move(state)

    assert move == (1, 1)
    assert isinstance(move, Position)
    assert "_say" not in state


def test_announcement_written_back_to_mapping(host_state):
    def chatty(snapshot, session):
        snapshot.acting_bot.say("a")
        snapshot.acting_bot.say("b")
        return (1, 2)

    state = host_state()
    move = MoveDispatcher(chatty).handle_move(state)

    assert move == (1, 2)
    assert state["_say"] == "a"


def test_announcement_written_back_to_host_object(host_state, host_object):
    def chatty(snapshot, session):
        snapshot.acting_bot.say("hello")
        return snapshot.acting_bot.legal_positions[-1]

    bot = host_object(host_state())
    MoveDispatcher(chatty).handle_move(bot)

    assert bot._say == "hello"


def test_announcement_slot_fresh_every_turn(host_state):
    seen = []

    def routine(snapshot, session):
        seen.append(snapshot.acting_bot.announcement)
        snapshot.acting_bot.say(f"turn {len(seen)}")
        return (1, 1)

    dispatcher = MoveDispatcher(routine)
    states = [host_state(), host_state()]
    for state in states:
        dispatcher.handle_move(state)

    assert seen == [None, None]
    assert [state["_say"] for state in states] == ["turn 1", "turn 2"]


def test_session_persists_across_turns(host_state):
    observed = []

    def counting(snapshot, session):
        session.value["count"] += 1
        observed.append(session.value["count"])
        return (1, 1)

    dispatcher = MoveDispatcher(counting, PlayerSession(lambda: {"count": 0}))
    for _ in range(5):
        dispatcher.handle_move(host_state())

    assert observed == [1, 2, 3, 4, 5]


def test_concurrent_moves_are_serialized(host_state):
    workers = 8
    barrier = threading.Barrier(workers)
    observed = []
    overlaps = []

    def slow_counter(snapshot, session):
        memory = session.value
        if memory["busy"]:
            overlaps.append(memory["count"])
        memory["busy"] = True
        count = memory["count"]
        time.sleep(0.01)
        memory["count"] = count + 1
        observed.append(memory["count"])
        memory["busy"] = False
        return (1, 1)

    dispatcher = MoveDispatcher(slow_counter, PlayerSession(lambda: {"count": 0, "busy": False}))
    errors = []

    def run():
        barrier.wait(5)
        try:
            dispatcher.handle_move(host_state())
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=run) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(10)

    assert errors == []
    assert overlaps == []
    assert sorted(observed) == list(range(1, workers + 1))
    assert dispatcher.session.turns_served == workers


def test_missing_walls_never_reaches_routine(host_state):
    calls = []

    def routine(snapshot, session):
        calls.append(snapshot)
        return (1, 1)

    state = host_state()
    del state["walls"]
    dispatcher = MoveDispatcher(routine, PlayerSession(dict))

    with pytest.raises(SnapshotError) as excinfo:
        dispatcher.handle_move(state)

    assert excinfo.value.code == EXTRACTION_FAILED
    assert calls == []
    assert not dispatcher.session.initialized


def test_routine_failure_is_fatal(host_state):
    def broken(snapshot, session):
        raise ZeroDivisionError("bad plan")

    dispatcher = MoveDispatcher(broken, PlayerSession(dict))

    with pytest.raises(DecisionError) as excinfo:
        dispatcher.handle_move(host_state())

    assert excinfo.value.code == DECISION_FAILED
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    # the session lock is released for the next turn
    assert dispatcher.session.with_session(lambda handle: handle.value) == {}


def test_illegal_move_rejected(host_state):
    dispatcher = MoveDispatcher(lambda snapshot, session: (2, 2))

    with pytest.raises(IllegalMoveError) as excinfo:
        dispatcher.handle_move(host_state())

    assert excinfo.value.code == ILLEGAL_MOVE
    assert excinfo.value.position == (2, 2)


def test_illegal_move_still_announces(host_state):
    def routine(snapshot, session):
        snapshot.acting_bot.say("going rogue")
        return (2, 2)

    state = host_state()
    with pytest.raises(IllegalMoveError):
        MoveDispatcher(routine).handle_move(state)

    assert state["_say"] == "going rogue"


def test_legality_check_can_be_disabled(host_state):
    dispatcher = MoveDispatcher(lambda snapshot, session: [2, 2], check_legal_moves=False)

    assert dispatcher.handle_move(host_state()) == (2, 2)


@pytest.mark.parametrize("chosen", [None, "north", (1,), (1, 1, 1), (True, 1)])
def test_non_position_result_rejected(host_state, chosen):
    dispatcher = MoveDispatcher(lambda snapshot, session: chosen)

    with pytest.raises(DecisionError) as excinfo:
        dispatcher.handle_move(host_state())

    assert not isinstance(excinfo.value, IllegalMoveError)


def test_noisy_enemy_passed_through(host_state):
    received = []

    def routine(snapshot, session):
        received.extend(snapshot.enemies)
        return snapshot.acting_bot.legal_positions[0]

    state = host_state(shape=(6, 6))
    state["enemy"][1]["position"] = (5, 5)
    MoveDispatcher(routine).handle_move(state)

    noisy = received[1]
    assert noisy.is_noisy is True
    assert noisy.position == (5, 5)
    assert received[0].is_noisy is False
