"""
Unit tests for behavior transition rules.
"""

import pytest

from meowbrain.cognition.behavior import (
    ALL_BEHAVIORS,
    BEHAVIOR_DURATION_RANGES,
    BehaviorType,
    allowed_targets,
    behavior_duration,
    is_valid_transition,
)

B = BehaviorType


class TestIsValidTransition:
    """Tests for is_valid_transition()."""

    def test_consuming_only_to_resting(self):
        """Test a cat winds down after eating."""
        assert is_valid_transition(B.CONSUMING, B.RESTING)
        for behavior in ALL_BEHAVIORS:
            if behavior is not B.RESTING:
                assert not is_valid_transition(B.CONSUMING, behavior)

    @pytest.mark.parametrize("from_behavior", ALL_BEHAVIORS)
    def test_resting_always_reachable(self, from_behavior):
        assert is_valid_transition(from_behavior, B.RESTING)

    @pytest.mark.parametrize("from_behavior", [b for b in ALL_BEHAVIORS if b is not B.CONSUMING])
    def test_needs_always_interrupt(self, from_behavior):
        """Test approaching and consuming can interrupt anything but a meal."""
        assert is_valid_transition(from_behavior, B.APPROACHING)
        assert is_valid_transition(from_behavior, B.CONSUMING)

    @pytest.mark.parametrize(
        "from_behavior,to_behavior",
        [
            (B.PLAYING, B.EXPLORING),
            (B.PLAYING, B.OBSERVING),
            (B.RESTING, B.PLAYING),
            (B.OBSERVING, B.PLAYING),
            (B.EXPLORING, B.PLAYING),
            (B.APPROACHING, B.WANDERING),
            (B.APPROACHING, B.EXPLORING),
            (B.APPROACHING, B.PLAYING),
        ],
    )
    def test_rejected_transitions(self, from_behavior, to_behavior):
        assert not is_valid_transition(from_behavior, to_behavior)

    @pytest.mark.parametrize(
        "from_behavior,to_behavior",
        [
            (B.WANDERING, B.EXPLORING),
            (B.WANDERING, B.PLAYING),
            (B.WANDERING, B.OBSERVING),
            (B.RESTING, B.WANDERING),
            (B.RESTING, B.EXPLORING),
            (B.RESTING, B.OBSERVING),
            (B.PLAYING, B.WANDERING),
            (B.OBSERVING, B.WANDERING),
            (B.OBSERVING, B.EXPLORING),
            (B.EXPLORING, B.WANDERING),
            (B.EXPLORING, B.OBSERVING),
            (B.APPROACHING, B.OBSERVING),
        ],
    )
    def test_table_transitions(self, from_behavior, to_behavior):
        assert is_valid_transition(from_behavior, to_behavior)


class TestAllowedTargets:
    """Tests for allowed_targets()."""

    def test_from_consuming(self):
        assert allowed_targets(B.CONSUMING) == [B.RESTING]

    def test_from_playing(self):
        assert allowed_targets(B.PLAYING) == [
            B.WANDERING,
            B.RESTING,
            B.APPROACHING,
            B.CONSUMING,
        ]

    def test_never_includes_self(self):
        for behavior in ALL_BEHAVIORS:
            assert behavior not in allowed_targets(behavior)


class TestBehaviorDuration:
    """Tests for behavior_duration()."""

    def test_draw_spans_range(self):
        assert behavior_duration(B.WANDERING, 0.5, 0.0) == pytest.approx(3.0)
        assert behavior_duration(B.WANDERING, 0.5, 0.5) == pytest.approx(5.5)
        assert behavior_duration(B.WANDERING, 0.5, 1.0) == pytest.approx(8.0)

    def test_lazy_cats_rest_longer(self):
        assert behavior_duration(B.RESTING, 0.2, 0.5) == pytest.approx(9.1)
        assert behavior_duration(B.RESTING, 0.2, 0.5) > behavior_duration(B.RESTING, 0.9, 0.5)

    def test_energetic_cats_play_longer(self):
        assert behavior_duration(B.PLAYING, 0.9, 0.5) == pytest.approx(5.6)
        assert behavior_duration(B.PLAYING, 0.9, 0.5) > behavior_duration(B.PLAYING, 0.2, 0.5)

    @pytest.mark.parametrize("behavior", ALL_BEHAVIORS)
    def test_every_behavior_has_a_range(self, behavior):
        low, high = BEHAVIOR_DURATION_RANGES[behavior]
        assert 0 < low < high
        assert behavior_duration(behavior, 0.5, 0.5) > 0
