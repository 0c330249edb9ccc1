"""Converts host-owned bot state into a validated WorldSnapshot."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pelita_adapter.protocol.errors import SnapshotError
from pelita_adapter.protocol.models import WorldSnapshot


class _HostView:
    """Read-only attribute view over a host object or mapping.

    The acting bot is the host object itself, so `acting_bot` resolves to the
    wrapped value. Missing names raise AttributeError, which validation
    reports as a missing field.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Any):
        self._raw = raw

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        raw = object.__getattribute__(self, "_raw")
        if name == "acting_bot":
            return raw
        if isinstance(raw, Mapping):
            try:
                return raw[name]
            except KeyError:
                raise AttributeError(name) from None
        return getattr(raw, name)


def build_snapshot(raw_state: Any) -> WorldSnapshot:
    if raw_state is None:
        raise SnapshotError("Host state is missing")
    try:
        return WorldSnapshot.model_validate(_HostView(raw_state))
    except ValidationError as exc:
        raise SnapshotError.from_validation_error(exc) from exc
