"""
HandTrack API Examples Smoke Test

Runs every function in examples/api_examples.py so the documented usage
stays in step with the package.
"""

import os
import sys

# Add project root and examples directory to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)
sys.path.insert(0, os.path.join(PROJECT_ROOT, "examples"))

import api_examples
from handtrack.tracking import AssociationMethod, Side


class TestApiExamples:
    """Each example runs and returns what it prints."""

    def test_single_tick(self):
        store = api_examples.example_single_tick()

        assert store.ids == [1, 2]

    def test_occlusion(self):
        tracker = api_examples.example_occlusion()

        (track,) = tracker.tracks
        assert track.frames_missing == 8
        assert track.alpha < 1.0

    def test_landmarks(self):
        (det,) = api_examples.example_landmarks()

        assert det.side is Side.RIGHT
        assert det.x == 960.0

    def test_interaction(self):
        tracker = api_examples.example_interaction()

        assert len(tracker.stable_tracks()) == 1

    def test_compare_association(self, capsys):
        results = api_examples.example_compare_association()

        assert set(results) == set(AssociationMethod)
        assert "greedy" in capsys.readouterr().out
