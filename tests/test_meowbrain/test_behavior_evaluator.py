"""
Unit tests for behavior weighting and selection.
"""

import random

import pytest

from meowbrain.cognition.behavior import (
    NEED_DRIVEN_BEHAVIORS,
    Attractor,
    BehaviorType,
    BehaviorWeights,
    Boundaries,
    Environment,
    Obstacle,
    Position,
    compute_weights,
    describe_weights,
    select_behavior,
)
from meowbrain.cognition.memory import Memory
from meowbrain.cognition.needs import Motivation, Personality

B = BehaviorType

# Balanced personality, default motivation, empty memory and environment
BASE_WEIGHTS = {
    B.WANDERING: 0.55,
    B.RESTING: 0.75,
    B.PLAYING: 0.95,
    B.OBSERVING: 0.35,
    B.EXPLORING: 1.1,
    B.APPROACHING: 0.0,
    B.CONSUMING: 0.0,
}


def weights_for(memory=None, environment=None, personality=None, motivation=None):
    return compute_weights(
        personality or Personality(),
        motivation or Motivation(),
        memory or Memory(),
        environment or Environment(),
    )


class TestComputeWeights:
    """Tests for compute_weights()."""

    def test_baseline(self):
        """Test personality and motivation terms for a balanced cat."""
        weights = weights_for()
        for behavior, expected in BASE_WEIGHTS.items():
            assert weights.get(behavior) == pytest.approx(expected)

    def test_personality_shifts_weights(self):
        """Test a lazy cat leans toward resting and an energetic one toward exploring."""
        lazy = weights_for(personality=Personality.from_preset("lazy"))
        energetic = weights_for(personality=Personality.from_preset("energetic"))

        assert lazy.resting > energetic.resting
        assert energetic.exploring > lazy.exploring
        assert energetic.playing > lazy.playing

    def test_tired_cat_prefers_rest(self):
        """Test unmet rest dominates the weights."""
        weights = weights_for(motivation=Motivation(rest=1.0, stimulation=0.0, exploration=0.0))
        assert weights.ranked()[0][0] is B.RESTING

    def test_need_driven_behaviors_have_no_weight(self):
        weights = weights_for(
            motivation=Motivation(rest=1.0, stimulation=1.0, exploration=1.0),
            environment=Environment(attractors=(Attractor(Position(1, 1)),)),
        )
        for behavior in NEED_DRIVEN_BEHAVIORS:
            assert weights.get(behavior) == 0.0

    def test_recency_penalty_compounds(self):
        """Test each recent repeat multiplies the weight by 0.7."""
        memory = Memory(previous_behaviors=(B.RESTING, B.RESTING, B.RESTING))
        weights = weights_for(memory=memory)

        assert weights.resting == pytest.approx(BASE_WEIGHTS[B.RESTING] * 0.7**3)
        assert weights.playing == pytest.approx(BASE_WEIGHTS[B.PLAYING])

    def test_recency_window_is_three(self):
        """Test behaviors older than the last three are not penalized."""
        memory = Memory(
            previous_behaviors=(B.PLAYING, B.PLAYING, B.RESTING, B.OBSERVING, B.EXPLORING)
        )
        weights = weights_for(memory=memory)

        assert weights.playing == pytest.approx(BASE_WEIGHTS[B.PLAYING])
        assert weights.resting == pytest.approx(BASE_WEIGHTS[B.RESTING] * 0.7)
        assert weights.observing == pytest.approx(BASE_WEIGHTS[B.OBSERVING] * 0.7)
        assert weights.exploring == pytest.approx(BASE_WEIGHTS[B.EXPLORING] * 0.7)

    def test_attractors_boost_movement(self):
        environment = Environment(attractors=(Attractor(Position(50, 50), strength=2.0),))
        weights = weights_for(environment=environment)

        assert weights.exploring == pytest.approx(BASE_WEIGHTS[B.EXPLORING] + 0.5)
        assert weights.wandering == pytest.approx(BASE_WEIGHTS[B.WANDERING] + 0.3)

    def test_obstacles_damp_wandering(self):
        environment = Environment(obstacles=(Obstacle(Position(50, 50), radius=10),))
        weights = weights_for(environment=environment)

        assert weights.wandering == pytest.approx(BASE_WEIGHTS[B.WANDERING] * 0.8)
        assert weights.exploring == pytest.approx(BASE_WEIGHTS[B.EXPLORING])

    def test_attractor_bonus_applies_before_obstacle_penalty(self):
        environment = Environment(
            obstacles=(Obstacle(Position(50, 50), radius=10),),
            attractors=(Attractor(Position(10, 10)),),
        )
        weights = weights_for(environment=environment)
        assert weights.wandering == pytest.approx((BASE_WEIGHTS[B.WANDERING] + 0.3) * 0.8)

    def test_boundary_stress(self):
        """Test repeated collisions push toward calmer behaviors."""
        weights = weights_for(memory=Memory(boundary_hits=3.0))

        assert weights.resting == pytest.approx(BASE_WEIGHTS[B.RESTING] + 0.5)
        assert weights.observing == pytest.approx(BASE_WEIGHTS[B.OBSERVING] + 0.3)
        assert weights.wandering == pytest.approx(BASE_WEIGHTS[B.WANDERING] * 0.6)

    def test_boundary_stress_threshold_is_exclusive(self):
        weights = weights_for(memory=Memory(boundary_hits=2.0))
        assert weights.resting == pytest.approx(BASE_WEIGHTS[B.RESTING])

    def test_weights_never_negative(self):
        for preset in Personality.available_presets():
            weights = weights_for(
                personality=Personality.from_preset(preset),
                motivation=Motivation(rest=0.0, stimulation=0.0, exploration=0.0),
                memory=Memory(previous_behaviors=(B.WANDERING,) * 5, boundary_hits=5.0),
            )
            for _, weight in weights.items():
                assert weight >= 0.0


class TestBehaviorWeights:
    """Tests for the BehaviorWeights container."""

    def test_from_mapping_accepts_names(self):
        weights = BehaviorWeights.from_mapping({"resting": 2.0, B.PLAYING: 1.0})
        assert weights.resting == 2.0
        assert weights.playing == 1.0
        assert weights.wandering == 0.0

    def test_from_mapping_rejects_unknown(self):
        with pytest.raises(ValueError):
            BehaviorWeights.from_mapping({"sleeping": 1.0})

    def test_items_in_declaration_order(self):
        behaviors = [behavior for behavior, _ in BehaviorWeights().items()]
        assert behaviors == list(BehaviorType)

    def test_probabilities(self):
        weights = BehaviorWeights(wandering=1.0, resting=3.0)
        probabilities = weights.probabilities()
        assert probabilities[B.WANDERING] == pytest.approx(0.25)
        assert probabilities[B.RESTING] == pytest.approx(0.75)
        assert probabilities[B.PLAYING] == 0.0

    def test_probabilities_when_empty(self):
        assert all(p == 0.0 for p in BehaviorWeights().probabilities().values())

    def test_describe_weights_ranked(self):
        described = describe_weights(BehaviorWeights(wandering=1.0, resting=3.0))
        assert described[0] == {"name": "resting", "weight": 3.0, "probability": 0.75}
        assert described[1]["name"] == "wandering"


class TestSelectBehavior:
    """Tests for select_behavior()."""

    def test_all_zero_falls_back_to_wandering(self, make_random):
        assert select_behavior(BehaviorWeights(), make_random(0.9)) is B.WANDERING

    def test_empty_mapping_falls_back_to_wandering(self):
        assert select_behavior({}) is B.WANDERING

    def test_only_need_weights_falls_back_to_wandering(self, make_random):
        """Test that weight on approaching or consuming is ignored."""
        weights = BehaviorWeights(approaching=5.0, consuming=5.0)
        assert select_behavior(weights, make_random(0.5)) is B.WANDERING

    def test_need_driven_never_selected(self):
        weights = BehaviorWeights(observing=1.0, approaching=100.0, consuming=100.0)
        rng = random.Random(1)
        for _ in range(500):
            assert select_behavior(weights, rng) is B.OBSERVING

    def test_single_positive_weight(self, make_random):
        weights = BehaviorWeights(exploring=0.4)
        for value in (0.0, 0.5, 0.999):
            assert select_behavior(weights, make_random(value)) is B.EXPLORING

    def test_declaration_order_walk(self, make_random):
        """Test draws map to cumulative slices in declaration order."""
        weights = {B.WANDERING: 1.0, B.RESTING: 3.0}
        assert select_behavior(weights, make_random(0.1)) is B.WANDERING
        assert select_behavior(weights, make_random(0.25)) is B.WANDERING
        assert select_behavior(weights, make_random(0.3)) is B.RESTING
        assert select_behavior(weights, make_random(0.99)) is B.RESTING

    def test_zero_draw_selects_first_positive(self, make_random):
        weights = BehaviorWeights(wandering=0.0, resting=0.0, playing=2.0, exploring=1.0)
        assert select_behavior(weights, make_random(0.0)) is B.PLAYING

    def test_distribution(self):
        """Test selection frequencies follow the weights."""
        rng = random.Random(12345)
        weights = {B.WANDERING: 1.0, B.RESTING: 3.0}
        draws = 10_000

        resting = sum(select_behavior(weights, rng) is B.RESTING for _ in range(draws))
        assert 0.70 <= resting / draws <= 0.80

    def test_restricted_candidates(self, make_random):
        weights = BehaviorWeights(wandering=1.0, resting=1.0, playing=1.0)
        chosen = select_behavior(weights, make_random(0.1), candidates=[B.PLAYING])
        assert chosen is B.PLAYING


class TestEnvironmentState:
    """Tests for Environment serialization."""

    def test_state_serialization(self):
        environment = Environment(
            boundaries=Boundaries(0.0, 500.0, None, 400.0),
            obstacles=(Obstacle(Position(10, 10), radius=5.0),),
            attractors=(Attractor(Position(50, 60), strength=2.0, kind="area"),),
        )
        assert Environment.from_state(environment.get_state()) == environment

    def test_empty_state(self):
        assert Environment.from_state({}) == Environment()

    def test_unknown_attractor_kind(self):
        with pytest.raises(ValueError):
            Environment.from_state({"attractors": [{"kind": "cloud"}]})
