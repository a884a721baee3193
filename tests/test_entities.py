# Area: Entity Tests
"""Tests for applications, attendances and behavior records."""

import pytest
from datetime import datetime

from escrims import (
    Application,
    ApplicationStatus,
    Attendance,
    AttendanceStatus,
    BehaviorRecord,
    InvalidTransitionError,
    Player,
)


class TestApplication:
    """Tests for the Application entity."""

    def test_new_application_is_pending(self):
        """Test applications start PENDING with a generated id."""
        application = Application("s1", "u1", rank=1500, latency_ms=40)
        assert application.status == ApplicationStatus.PENDING
        assert application.is_pending
        assert application.rejection_reason is None
        assert application.application_id

    def test_accept(self):
        """Test accept moves to ACCEPTED."""
        application = Application("s1", "u1", 1500, 40)
        application.accept()
        assert application.is_accepted

    def test_reject_stores_reason(self):
        """Test reject stores its reason."""
        application = Application("s1", "u1", 1500, 40)
        application.reject("no show")
        assert application.is_rejected
        assert application.rejection_reason == "no show"

    def test_terminal_states_are_final(self):
        """Test an answered application cannot change again."""
        application = Application("s1", "u1", 1500, 40)
        application.accept()
        with pytest.raises(InvalidTransitionError):
            application.reject("late")
        with pytest.raises(InvalidTransitionError):
            application.accept()
        assert application.is_accepted

    def test_requirement_precedence(self):
        """Test rank is reported before latency."""
        application = Application("s1", "u1", rank=10, latency_ms=999)
        assert application.check_requirements(100, 200, 50) == (
            "Rank too low. Minimum required: 100"
        )

    def test_requirements_met(self):
        """Test None is returned when every limit holds."""
        application = Application("s1", "u1", rank=150, latency_ms=999)
        assert application.check_requirements(100, 200, -1) is None

    def test_snapshot_values_are_fixed(self):
        """Test rank and latency cannot be reassigned after creation."""
        application = Application("s1", "u1", rank=1500, latency_ms=40)
        with pytest.raises(AttributeError):
            application.rank = 2500
        with pytest.raises(AttributeError):
            application.latency_ms = 5
        assert (application.rank, application.latency_ms) == (1500, 40)
        application.accept()
        assert application.is_accepted


class TestAttendance:
    """Tests for the Attendance entity."""

    def test_confirm_records_response_time(self):
        """Test confirming stamps responded_at."""
        attendance = Attendance("s1", "u1")
        assert attendance.is_pending
        assert attendance.responded_at is None
        attendance.confirm()
        assert attendance.status == AttendanceStatus.CONFIRMED
        assert isinstance(attendance.responded_at, datetime)

    def test_reject(self):
        """Test rejecting an attendance."""
        attendance = Attendance("s1", "u1")
        attendance.reject()
        assert attendance.is_rejected

    def test_answered_attendance_is_final(self):
        """Test a second answer raises InvalidTransitionError."""
        attendance = Attendance("s1", "u1")
        attendance.reject()
        with pytest.raises(InvalidTransitionError):
            attendance.confirm()

    def test_role_is_optional(self):
        """Test an attendance has no role until assigned."""
        assert Attendance("s1", "u1").has_role is False


class TestBehaviorRecord:
    """Tests for BehaviorRecord counters and scores."""

    def test_fair_play_is_clamped(self):
        """Test fair play stays within [0, 1]."""
        assert BehaviorRecord("u", fair_play=1.7).fair_play == 1.0
        assert BehaviorRecord("u", fair_play=-0.2).fair_play == 0.0

    def test_abandon_rate_without_games(self):
        """Test the abandon rate is zero with no games."""
        assert BehaviorRecord("u").abandon_rate == 0.0

    def test_record_abandoned_lowers_fair_play(self):
        """Test abandoning counts a game and costs 0.1 fair play."""
        record = BehaviorRecord("u")
        record.record_abandoned()
        assert record.games_played == 1
        assert record.games_abandoned == 1
        assert record.fair_play == pytest.approx(0.9)
        assert record.abandon_rate == 1.0
        assert record.last_activity is not None

    def test_record_completed(self):
        """Test a completed game is counted."""
        record = BehaviorRecord("u")
        when = datetime(2026, 1, 1, 12, 0)
        record.record_completed(when)
        assert record.games_played == 1
        assert record.last_activity == when

    def test_fair_play_adjustments(self):
        """Test reduce and raise stay clamped."""
        record = BehaviorRecord("u", fair_play=0.5)
        record.reduce_fair_play(0.8)
        assert record.fair_play == 0.0
        record.raise_fair_play(2.0)
        assert record.fair_play == 1.0

    def test_reliability_score(self):
        """Test the 50 / 30 / 20 weighted reliability score."""
        record = BehaviorRecord("u", games_played=50, games_abandoned=5, fair_play=0.8)
        assert record.reliability_score == pytest.approx(40.0 + 27.0 + 10.0)

    def test_good_behavior(self):
        """Test good behavior needs fair play 0.7 and abandon rate 0.15 at most."""
        assert BehaviorRecord("u", 100, 15, 0.7).has_good_behavior() is True
        assert BehaviorRecord("u", 100, 16, 0.9).has_good_behavior() is False
        assert BehaviorRecord("u", 100, 0, 0.69).has_good_behavior() is False


class TestPlayer:
    """Tests for the Player profile."""

    def test_primary_role_is_first_preference(self):
        """Test the first preferred role is the primary one."""
        player = Player("u1", "neo", preferred_roles={"Valorant": ["Duelist", "Sentinel"]})
        assert player.primary_role("Valorant") == "Duelist"
        assert player.roles_for("Valorant") == ["Duelist", "Sentinel"]
        assert player.primary_role("Counter-Strike") is None

    def test_rank_for_unknown_game(self):
        """Test a missing rank is None."""
        assert Player("u1", "neo").rank_for("Valorant") is None
