"""Recorded command streams — JSON Lines of already-decoded commands.

Each line is ``{"command_id": <int>, "name": "<tag>", "payload": {...}}``.
``name`` and ``payload`` are optional. Blank lines are skipped.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator

from completionist_archiver.domain.commands import DecodedCommand


class CommandStreamError(ValueError):
    """A line in a recorded stream is not a decodable command envelope."""

    def __init__(self, line_number: int, message: str) -> None:
        self.line_number = line_number
        super().__init__(f"line {line_number}: {message}")


def read_commands(lines: Iterable[str]) -> Iterator[DecodedCommand]:
    """Yield a :class:`DecodedCommand` per non-blank line, in order."""
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CommandStreamError(line_number, f"invalid JSON: {exc.msg}") from exc
        if not isinstance(raw, dict):
            raise CommandStreamError(line_number, "expected a JSON object")

        command_id = raw.get("command_id")
        if not isinstance(command_id, int) or isinstance(command_id, bool):
            raise CommandStreamError(line_number, "missing integer command_id")
        payload = raw.get("payload", {})
        if not isinstance(payload, dict):
            raise CommandStreamError(line_number, "payload must be a JSON object")

        yield DecodedCommand(
            command_id=command_id,
            payload=payload,
            name=str(raw.get("name", "")),
        )
