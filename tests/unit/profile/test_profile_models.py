"""Tests for profile domain models."""

import pytest
from pydantic import ValidationError

from facetgraph.phases.enums import PhaseId
from facetgraph.profile.models import MissionOverride, Profile


class TestProfile:
    """Tests for Profile model."""

    def test_create_fresh_profile(self) -> None:
        """Should start empty in core-facets."""
        profile = Profile(subject_id="subject-1")

        assert profile.facets == {}
        assert profile.selected_mission is None
        assert profile.current_phase == PhaseId.CORE_FACETS
        assert profile.phase_history == []
        assert profile.answered == frozenset()

    def test_subject_id_required(self) -> None:
        with pytest.raises(ValidationError):
            Profile(subject_id="")

    def test_history_must_lead_to_current_phase(self) -> None:
        """current_phase must be the first phase not in phase_history."""
        with pytest.raises(ValidationError, match="phase_history"):
            Profile(subject_id="subject-1", current_phase=PhaseId.ROLE_FACETS)

    def test_history_must_be_in_order(self) -> None:
        with pytest.raises(ValidationError):
            Profile(
                subject_id="subject-1",
                current_phase=PhaseId.ROLE_FACETS,
                phase_history=[PhaseId.MISSION_SELECTION, PhaseId.CORE_FACETS],
            )

    def test_valid_history(self) -> None:
        profile = Profile(
            subject_id="subject-1",
            current_phase=PhaseId.ROLE_FACETS,
            phase_history=[PhaseId.CORE_FACETS, PhaseId.MISSION_SELECTION],
        )

        assert profile.has_completed(PhaseId.MISSION_SELECTION)
        assert not profile.has_completed(PhaseId.ROLE_FACETS)

    def test_assignment_is_validated(self) -> None:
        """Moving current_phase without recording history is rejected."""
        profile = Profile(subject_id="subject-1")
        with pytest.raises(ValidationError):
            profile.current_phase = PhaseId.COMPLETE

    def test_touch_moves_updated_at(self) -> None:
        profile = Profile(subject_id="subject-1")
        before = profile.updated_at

        profile.touch()

        assert profile.updated_at >= before

    def test_round_trips_through_json(self) -> None:
        profile = Profile(
            subject_id="subject-1",
            facets={"gender": "female", "commsPref": ("video", "text")},
        )

        restored = Profile.model_validate_json(profile.model_dump_json())

        assert restored == profile


class TestMissionOverride:
    """Tests for MissionOverride model."""

    def test_immutable(self) -> None:
        override = MissionOverride(
            previous_mission="tutor",
            new_mission="student",
            confidence=0.9,
            phase=PhaseId.ROLE_FACETS,
        )
        with pytest.raises(ValidationError):
            override.new_mission = "peer"
