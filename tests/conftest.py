from __future__ import annotations

from types import SimpleNamespace

import pytest


def make_state(**overrides):
    """Host state for a 3x3 board, shaped like the host's bot object."""
    state = {
        "position": (1, 1),
        "_initial_position": (1, 1),
        "legal_positions": [(1, 1), (1, 2)],
        "walls": [(0, 0), (0, 1)],
        "food": [(2, 2)],
        "shape": (3, 3),
        "is_blue": True,
        "turn": 0,
        "score": 0,
        "round": 1,
        "other": {
            "position": (2, 1),
            "_initial_position": (2, 1),
            "is_blue": True,
            "turn": 1,
            "score": 0,
        },
        "enemy": [
            {
                "position": (2, 0),
                "_initial_position": (2, 0),
                "is_noisy": False,
                "legal_positions": [(2, 0), (1, 0)],
                "food": [(1, 2)],
                "is_blue": False,
                "turn": 0,
                "score": 0,
            },
            {
                "position": (1, 0),
                "_initial_position": (1, 0),
                "is_noisy": True,
                "food": [(1, 2)],
                "is_blue": False,
                "turn": 1,
                "score": 0,
            },
        ],
    }
    state.update(overrides)
    return state


def as_host_object(state):
    """Mirror a state dict as nested attribute objects."""
    attrs = dict(state)
    attrs["other"] = SimpleNamespace(**state["other"])
    attrs["enemy"] = [SimpleNamespace(**enemy) for enemy in state["enemy"]]
    return SimpleNamespace(**attrs)


@pytest.fixture
def host_state():
    return make_state


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in (
        "PELITA_ADAPTER_LOCK_TIMEOUT",
        "PELITA_ADAPTER_CHECK_LEGAL_MOVES",
        "PELITA_ADAPTER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def host_object():
    return as_host_object
