"""
HandTrack Core Component Test Suite

Unit tests for the leaf components of the tracker.

Test ID | Description                        | Expected
--------|------------------------------------|----------------------------------
1       | Damped prediction                  | p + v * 0.8
2       | Gated, side-weighted association   | strict gate, 0.6 same-side weight
3       | Greedy vs optimal contention       | order-dependent vs min total cost
4       | Adaptive smoothing                 | 0.15 .. 0.8, saturating at 150
5       | Lifecycle transitions              | coast, fade, evict, spawn
6       | Configuration validation           | ValueError on bad values
"""

import math
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from handtrack.tracking.associator import associate, weighted_distance_matrix
from handtrack.tracking.config import AssociationMethod, TrackerConfig
from handtrack.tracking.lifecycle import TrackStatus, coast, mark_matched, spawn, track_status
from handtrack.tracking.predictor import predict_position, predict_positions
from handtrack.tracking.smoother import adaptive_alpha, smooth
from handtrack.tracking.track import Detection, Side, Track

OPTIMAL = TrackerConfig(association=AssociationMethod.OPTIMAL)


def make_track(track_id=1, x=0.0, y=0.0, side=Side.RIGHT, **kwargs):
    return Track(id=track_id, x=x, y=y, side=side, **kwargs)


# =============================================================================
# TEST 1: Predictor
# =============================================================================


class TestPredictor:
    """Damped constant-velocity prediction."""

    def test_damped_velocity(self):
        """Prediction adds 0.8 of the velocity"""
        track = make_track(x=100.0, y=100.0, vx=10.0, vy=-5.0)

        assert predict_position(track) == pytest.approx((108.0, 96.0))

    def test_still_track(self):
        """Zero velocity predicts the current position"""
        track = make_track(x=42.0, y=7.0)

        assert predict_position(track) == (42.0, 7.0)

    def test_prediction_not_written_back(self):
        """Predicting leaves the track untouched"""
        track = make_track(x=10.0, y=10.0, vx=5.0, vy=5.0)
        predict_position(track)

        assert track.position == (10.0, 10.0)

    def test_batch_shape(self):
        """Batch prediction returns an (N, 2) array, empty for no tracks"""
        assert predict_positions([]).shape == (0, 2)
        assert predict_positions([make_track(), make_track(2)]).shape == (2, 2)


# =============================================================================
# TEST 2: Association gating and side weighting
# =============================================================================


class TestAssociationGate:
    """Gate and cost of the associator."""

    def test_exact_match(self):
        """Detection on top of a track is matched"""
        result = associate([make_track(x=100, y=100)], [Detection(100, 100, Side.RIGHT)])

        assert result.matches == {0: 0}
        assert result.unassigned_tracks == []
        assert result.unassigned_detections == []

    def test_gate_is_strict(self):
        """Weighted distance equal to the gate is rejected"""
        result = associate([make_track(side=Side.RIGHT)], [Detection(350.0, 0.0, Side.LEFT)])

        assert result.matches == {}
        assert result.unassigned_tracks == [0]
        assert result.unassigned_detections == [0]

    def test_just_inside_gate(self):
        """Opposite-side detection just inside the gate is matched"""
        result = associate([make_track(side=Side.RIGHT)], [Detection(349.9, 0.0, Side.LEFT)])

        assert result.matches == {0: 0}

    def test_same_side_extends_reach(self):
        """Same-side weighting lets a farther detection pass the gate"""
        track = make_track(side=Side.RIGHT)

        assert associate([track], [Detection(583.0, 0.0, Side.RIGHT)]).matches == {0: 0}
        assert associate([track], [Detection(584.0, 0.0, Side.RIGHT)]).matches == {}

    def test_same_side_preferred(self):
        """A slightly farther same-side detection beats a nearer other-side one"""
        track = make_track(side=Side.LEFT)
        detections = [Detection(100.0, 0.0, Side.RIGHT), Detection(150.0, 0.0, Side.LEFT)]

        assert associate([track], detections).matches == {0: 1}

    def test_cost_uses_prediction(self):
        """Distances are measured from the predicted position"""
        track = make_track(vx=100.0)  # predicted at (80, 0)
        detections = [Detection(-60.0, 0.0, Side.RIGHT), Detection(150.0, 0.0, Side.RIGHT)]

        cost = weighted_distance_matrix([track], detections)

        assert cost[0, 0] == pytest.approx(140.0 * 0.6)
        assert cost[0, 1] == pytest.approx(70.0 * 0.6)
        assert associate([track], detections).matches == {0: 1}

    def test_tie_goes_to_earliest_detection(self):
        """Equal costs resolve to the first detection"""
        detections = [Detection(10.0, 0.0, Side.RIGHT), Detection(-10.0, 0.0, Side.RIGHT)]

        result = associate([make_track()], detections)

        assert result.matches == {0: 0}
        assert result.unassigned_detections == [1]

    def test_empty_inputs(self):
        """No tracks or no detections yield no matches"""
        assert associate([], [Detection(1.0, 1.0, Side.LEFT)]).unassigned_detections == [0]
        assert associate([make_track()], []).unassigned_tracks == [0]
        assert associate([], []).matches == {}


# =============================================================================
# TEST 3: Greedy vs optimal contention
# =============================================================================


class TestAssociationContention:
    """Behaviour when several tracks compete for detections."""

    @pytest.fixture
    def crossing(self):
        """Two tracks where nearest-first is not the minimum total cost."""
        tracks = [make_track(1, x=0.0), make_track(2, x=100.0)]
        detections = [Detection(60.0, 0.0, Side.RIGHT), Detection(-100.0, 0.0, Side.RIGHT)]
        return tracks, detections

    def test_greedy_oldest_first(self, crossing):
        """Oldest track takes its nearest detection"""
        tracks, detections = crossing

        assert associate(tracks, detections).matches == {0: 0, 1: 1}

    def test_optimal_minimises_total(self, crossing):
        """Optimal mode minimises the summed weighted distance"""
        tracks, detections = crossing

        assert associate(tracks, detections, OPTIMAL).matches == {0: 1, 1: 0}

    def test_detection_used_once(self):
        """One detection, two candidate tracks: only one match"""
        tracks = [make_track(1, x=0.0), make_track(2, x=10.0)]

        for config in (TrackerConfig(), OPTIMAL):
            result = associate(tracks, [Detection(5.0, 0.0, Side.RIGHT)], config)
            assert len(result.matches) == 1
            assert len(result.unassigned_tracks) == 1

    def test_optimal_respects_gate(self):
        """Optimal mode never returns a pair outside the gate"""
        result = associate([make_track()], [Detection(1000.0, 0.0, Side.RIGHT)], OPTIMAL)

        assert result.matches == {}
        assert result.unassigned_detections == [0]

    def test_optimal_prefers_more_pairs(self):
        """Optimal mode keeps every admissible pair it can"""
        tracks = [make_track(1, x=0.0), make_track(2, x=300.0)]
        detections = [Detection(250.0, 0.0, Side.RIGHT), Detection(-300.0, 0.0, Side.RIGHT)]

        result = associate(tracks, detections, OPTIMAL)

        assert result.matches == {0: 1, 1: 0}


# =============================================================================
# TEST 4: Adaptive smoothing
# =============================================================================


class TestSmoother:
    """Distance-adaptive blending."""

    @pytest.mark.parametrize(
        "move, expected",
        [(0.0, 0.15), (75.0, 0.475), (150.0, 0.8), (1000.0, 0.8), (-5.0, 0.15)],
    )
    def test_adaptive_alpha(self, move, expected):
        """Factor rises linearly and saturates at 150 units"""
        assert adaptive_alpha(move) == pytest.approx(expected)

    def test_blend_and_velocity(self):
        """Position moves by alpha of the gap; velocity is the displacement"""
        track = make_track(x=0.0, y=0.0)
        expected_alpha = 0.15 + (100.0 / 150.0) * 0.65

        updated = smooth(track, Detection(100.0, 0.0, Side.RIGHT))

        assert updated.x == pytest.approx(100.0 * expected_alpha)
        assert updated.vx == pytest.approx(100.0 * expected_alpha)
        assert updated.y == 0.0
        assert updated.vy == 0.0

    def test_uses_pre_update_position(self):
        """Motion is measured from the track position, not the prediction"""
        track = make_track(x=0.0, vx=50.0)

        updated = smooth(track, Detection(30.0, 0.0, Side.RIGHT))

        assert updated.x == pytest.approx(30.0 * adaptive_alpha(30.0))
        assert updated.vx == pytest.approx(updated.x)

    def test_side_overwritten(self):
        """Side label follows the matched detection"""
        track = make_track(side=Side.LEFT)

        assert smooth(track, Detection(0.0, 0.0, Side.RIGHT)).side is Side.RIGHT

    def test_counters_untouched(self):
        """Smoothing does not alter lifecycle counters"""
        track = make_track(frames_detected=4, frames_missing=2, alpha=0.7)

        updated = smooth(track, Detection(1.0, 1.0, Side.RIGHT))

        assert (updated.frames_detected, updated.frames_missing, updated.alpha) == (4, 2, 0.7)


# =============================================================================
# TEST 5: Lifecycle transitions
# =============================================================================


class TestLifecycle:
    """Matched, coasting, eviction and creation transitions."""

    def test_spawn_initial_state(self):
        """New tracks start visible, still and with one detection"""
        track = spawn(Detection(500.0, 500.0, Side.RIGHT), track_id=7)

        assert track.id == 7
        assert track.position == (500.0, 500.0)
        assert track.velocity == (0.0, 0.0)
        assert track.side is Side.RIGHT
        assert track.alpha == 1.0
        assert track.frames_missing == 0
        assert track.frames_detected == 1

    def test_mark_matched(self):
        """Match resets miss streak and visibility, counts a detection"""
        track = make_track(frames_missing=8, alpha=0.7, frames_detected=5)

        matched = mark_matched(track)

        assert matched.frames_missing == 0
        assert matched.alpha == 1.0
        assert matched.frames_detected == 6

    def test_coast_applies_damped_inertia(self):
        """Velocity decays by 0.9 and is added to the position"""
        track = make_track(x=100.0, y=50.0, vx=10.0, vy=-20.0)

        coasted = coast(track)

        assert coasted.vx == pytest.approx(9.0)
        assert coasted.vy == pytest.approx(-18.0)
        assert coasted.x == pytest.approx(109.0)
        assert coasted.y == pytest.approx(32.0)
        assert coasted.frames_missing == 1

    def test_coast_keeps_stability_counter(self):
        """frames_detected is frozen while coasting"""
        track = make_track(frames_detected=9)

        assert coast(track).frames_detected == 9

    def test_grace_period_keeps_alpha(self):
        """Alpha is untouched until the miss streak passes the grace period"""
        track = make_track(frames_missing=4)

        assert coast(track).alpha == 1.0

    def test_fade_after_grace_period(self):
        """Sixth consecutive miss costs 0.1 alpha"""
        track = make_track(frames_missing=5)

        assert coast(track).alpha == pytest.approx(0.9)

    def test_alpha_floor(self):
        """Alpha never drops below zero"""
        track = make_track(frames_missing=10, alpha=0.05)

        assert coast(track).alpha == 0.0

    def test_eviction_threshold(self):
        """Track survives its 20th miss and is evicted on the 21st"""
        assert coast(make_track(frames_missing=19)).frames_missing == 20
        assert coast(make_track(frames_missing=20)) is None

    def test_status(self):
        """Status reflects coasting and stability"""
        assert track_status(make_track(frames_detected=1)) is TrackStatus.TENTATIVE
        assert track_status(make_track(frames_detected=3)) is TrackStatus.CONFIRMED
        assert track_status(make_track(frames_detected=3, frames_missing=1)) is TrackStatus.COASTING


# =============================================================================
# TEST 6: Value types and configuration
# =============================================================================


class TestValueTypes:
    """Detection preconditions and side labels."""

    @pytest.mark.parametrize("x, y", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)])
    def test_non_finite_rejected(self, x, y):
        """Non-finite coordinates fail fast"""
        with pytest.raises(ValueError):
            Detection(x, y, Side.LEFT)

    def test_side_from_string(self):
        """Side labels are parsed case-insensitively"""
        assert Detection(1.0, 2.0, "left").side is Side.LEFT
        assert Side.parse("Right") is Side.RIGHT
        assert Side.LEFT.opposite is Side.RIGHT

    def test_unknown_side_rejected(self):
        """Labels other than Left/Right fail fast"""
        with pytest.raises(ValueError):
            Detection(1.0, 2.0, "Up")


class TestConfig:
    """Tracker configuration."""

    def test_defaults(self):
        """Defaults match the tuned constants"""
        config = TrackerConfig()

        assert config.persistence_frames == 20
        assert config.max_match_dist == 350.0
        assert config.grace_period == 5
        assert config.min_smoothing == 0.15
        assert config.max_smoothing == 0.8
        assert config.stability_threshold == 3
        assert config.prediction_damping == 0.8
        assert config.missing_damping == 0.9
        assert config.alpha_decay == 0.1
        assert config.association is AssociationMethod.GREEDY

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"persistence_frames": -1},
            {"max_match_dist": 0.0},
            {"min_smoothing": 0.9, "max_smoothing": 0.5},
            {"max_smoothing": 1.5},
            {"missing_damping": 1.2},
            {"stability_threshold": 0},
            {"smoothing_distance": 0.0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Out-of-range settings raise ValueError"""
        with pytest.raises(ValueError):
            TrackerConfig(**kwargs)

    def test_from_dict(self):
        """Mapping values are coerced, association parsed from text"""
        config = TrackerConfig.from_dict({"persistence_frames": "30", "association": "OPTIMAL"})

        assert config.persistence_frames == 30
        assert config.association is AssociationMethod.OPTIMAL

    def test_from_dict_rejects_unknown(self):
        """Misspelled keys are reported"""
        with pytest.raises(ValueError, match="persistance_frames"):
            TrackerConfig.from_dict({"persistance_frames": 30})

    def test_from_dict_rejects_bad_method(self):
        with pytest.raises(ValueError):
            TrackerConfig.from_dict({"association": "hungarian"})

    def test_round_trip(self):
        """to_dict output rebuilds an equal configuration"""
        config = TrackerConfig(grace_period=8, association=AssociationMethod.OPTIMAL)

        assert TrackerConfig.from_dict(config.to_dict()) == config
