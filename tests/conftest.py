"""Shared fixtures for rosws tests."""

from __future__ import annotations

import pytest

from rosws.errors import CommandError


class FakeRunner:
    """CommandRunner stand-in returning canned stdout per command."""

    def __init__(self, outputs: dict[tuple[str, ...], str] | None = None, env=None) -> None:
        self.outputs = outputs or {}
        self.env = env
        self.calls: list[list[str]] = []

    def run(self, args: list[str]) -> str:
        self.calls.append(list(args))
        key = tuple(args)
        if key not in self.outputs:
            raise CommandError(args, 127, f"{args[0]}: command not found")
        return self.outputs[key]


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    return FakeRunner
