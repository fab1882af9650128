"""
Unit tests for the Easer.
"""

import pytest

from scrolltile.animation import Easer, InstantAnimator
from scrolltile.host import Actor


@pytest.mark.unit
class TestEaser:
    """Test token-guarded transitions."""

    @pytest.fixture
    def easer(self, manual_animator):
        return Easer(manual_animator, 100)

    def test_completion_runs_callbacks(self, easer, manual_animator):
        actor = Actor()
        calls = []
        easer.add_ease(
            actor,
            {"x": 10},
            on_complete=lambda: calls.append("complete"),
            on_stopped=lambda: calls.append("stopped"),
        )
        assert easer.is_easing(actor, "x")

        manual_animator.finish_all()

        assert actor.x == 10
        assert calls == ["complete", "stopped"]
        assert not easer.is_easing(actor)

    def test_superseded_ease_is_stale(self, easer, manual_animator):
        """Test a replaced transition's completion is dropped."""
        actor = Actor()
        calls = []
        easer.add_ease(actor, {"x": 10}, on_complete=lambda: calls.append("first"))
        easer.add_ease(actor, {"x": 20}, on_complete=lambda: calls.append("second"))

        manual_animator.finish_all()

        assert calls == ["second"]

    def test_properties_are_independent(self, easer, manual_animator):
        """Test easing x leaves a running scale ease alone."""
        actor = Actor()
        calls = []
        easer.add_ease(actor, {"scale_x": 0.5}, on_complete=lambda: calls.append("scale"))
        easer.add_ease(actor, {"x": 10}, on_complete=lambda: calls.append("x"))

        assert easer.is_easing(actor, "scale_x")
        assert easer.is_easing(actor, "x")

        manual_animator.finish_all()
        assert sorted(calls) == ["scale", "x"]

    def test_remove_ease_silences_callbacks(self, easer, manual_animator):
        actor = Actor()
        calls = []
        easer.add_ease(
            actor,
            {"x": 10},
            on_complete=lambda: calls.append("complete"),
            on_stopped=lambda: calls.append("stopped"),
        )

        easer.remove_ease(actor)

        assert calls == []
        assert not easer.is_easing(actor)
        assert manual_animator.pending == []

    def test_interrupted_runs_on_stopped_only(self, easer, manual_animator):
        """Test an ease interrupted by the host stops without completing."""
        actor = Actor()
        calls = []
        easer.add_ease(
            actor,
            {"x": 10},
            on_complete=lambda: calls.append("complete"),
            on_stopped=lambda: calls.append("stopped"),
        )
        target, props, on_complete = manual_animator.pending.pop()
        on_complete(False)

        assert calls == ["stopped"]

    def test_retarget(self, easer, manual_animator):
        actor = Actor()
        calls = []
        easer.add_ease(actor, {"x": 10, "y": 10}, on_complete=lambda: calls.append("done"))

        assert easer.retarget(actor, x=50, y=60)
        manual_animator.finish_all()

        assert (actor.x, actor.y) == (50, 60)
        assert calls == ["done"]

    def test_retarget_without_ease(self, easer):
        actor = Actor()
        assert not easer.retarget(actor, x=50)
        assert actor.x == 0

    def test_default_duration(self, easer, manual_animator):
        easer.duration_ms = 400
        actor = Actor()
        easer.add_ease(actor, {"x": 1})
        easer.add_ease(actor, {"y": 1}, duration_ms=0)
        assert easer._running[id(actor)][0].duration_ms == 400
        assert easer._running[id(actor)][1].duration_ms == 0


@pytest.mark.unit
class TestInstantAnimator:
    def test_applies_immediately(self):
        easer = Easer(InstantAnimator())
        actor = Actor()
        done = []

        easer.add_ease(actor, {"x": 5, "opacity": 100}, on_complete=lambda: done.append(True))

        assert (actor.x, actor.opacity) == (5, 100)
        assert done == [True]
        assert not easer.is_easing(actor)
