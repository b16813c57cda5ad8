"""Disk-backed persistence for the current board snapshot.

This module saves the *current* snapshot as a JSON document and reads it back
on start-up. History (past/future) is never persisted: a fresh process starts
with an empty undo log seeded from whatever was last saved.

- Default path: `PLANBOARD_STORAGE_PATH` env var or `~/.planboard/board.json`
- Content:      `{"version": 1, "state": {"projects": [...]}}` with camelCase keys

Loading never raises for bad data. A missing file is an empty board; an
unreadable or malformed document is reported as an ``Err`` so the caller
can decide how loudly to complain.

Usage
-----
>>> storage = BoardStorage(tmp_path / "board.json")
>>> storage.save(snapshot)
>>> storage.load().unwrap() == snapshot
True
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from planboard.core.contracts.board import BoardSnapshot
from planboard.core.result import Result, err, ok
from planboard.core.settings import load_settings

#: Version tag written into every saved document.
STORAGE_VERSION = 1


class BoardStorage:
    """Persist board snapshots to a single JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path if path is not None else load_settings().storage_path

    def save(self, snapshot: BoardSnapshot) -> Path:
        """Write ``snapshot`` to disk and return the file path.

        The document is written to a sibling temp file first and then moved
        into place, so a crash mid-write leaves the previous board intact.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": STORAGE_VERSION, "state": snapshot.to_json_dict()}

        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        tmp.replace(self.path)
        return self.path

    def load(self) -> Result[BoardSnapshot, str]:
        """Read the saved board.

        Returns
        -------
        Result[BoardSnapshot, str]
            ``Ok`` with the stored snapshot (an empty board when no file
            exists yet), or ``Err`` with a human-readable reason.
        """
        if not self.path.exists():
            return ok(BoardSnapshot())
        return self._read().flat_map(self._state).flat_map(self._validate)

    # ---- load steps ----

    def _read(self) -> Result[object, str]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return ok(json.load(f))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return err(f"cannot read {self.path}: {e}")

    def _state(self, data: object) -> Result[dict[str, Any], str]:
        if not isinstance(data, dict) or not isinstance(data.get("state"), dict):
            return err(f"{self.path} has no 'state' object")
        return ok(data["state"])

    def _validate(self, state: dict[str, Any]) -> Result[BoardSnapshot, str]:
        try:
            return ok(BoardSnapshot.model_validate(state))
        except ValidationError as e:
            return err(f"{self.path} holds an invalid board: {e.error_count()} error(s)")


__all__ = ["BoardStorage", "STORAGE_VERSION"]
