"""Tests for :mod:`mw_init.pipeline`."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mw_init.pipeline import run_pipeline


class _Recorder:
    def __init__(self, step_id: str, seen: List[str], fail: bool = False):
        self.step_id = step_id
        self.seen = seen
        self.fail = fail

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        self.seen.append(self.step_id)
        if self.fail:
            raise RuntimeError("cannot create /extensions")
        return state


def test_runs_every_step_in_order() -> None:
    seen: List[str] = []
    steps = [_Recorder(s, seen) for s in ("10_a", "20_b", "30_c")]

    result = run_pipeline(state={}, steps=steps)

    assert seen == ["10_a", "20_b", "30_c"]
    assert result.ran_steps == seen
    assert result.state["execution"]["current_step"] is None


def test_stop_after() -> None:
    seen: List[str] = []
    steps = [_Recorder(s, seen) for s in ("10_a", "20_b", "30_c")]
    run_pipeline(state={}, steps=steps, stop_after="20_b")
    assert seen == ["10_a", "20_b"]


def test_failure_propagates_with_current_step() -> None:
    seen: List[str] = []
    state: Dict[str, Any] = {}
    steps = [_Recorder("10_a", seen), _Recorder("20_b", seen, fail=True), _Recorder("30_c", seen)]

    with pytest.raises(RuntimeError):
        run_pipeline(state=state, steps=steps)

    assert seen == ["10_a", "20_b"]
    assert state["execution"]["current_step"] == "20_b"
