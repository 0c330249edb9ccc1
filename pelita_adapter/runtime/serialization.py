"""Deterministic serialization helpers used for turn logs and the CLI."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from pelita_adapter.protocol.models import WorldSnapshot


def stable_json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def state_hash(obj: Any) -> str:
    return hashlib.sha256(stable_json_dumps(obj).encode("utf-8")).hexdigest()


def snapshot_to_dict(snapshot: WorldSnapshot) -> Dict[str, Any]:
    data = snapshot.model_dump(mode="json")
    data["walls"] = sorted(data["walls"])
    data["acting_bot"]["announcement"] = snapshot.acting_bot.announcement
    return data
