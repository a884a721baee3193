# Area: Persistence Tests
"""Tests for the SQLite scrims repository."""

import pytest
import tempfile
import os
from datetime import datetime

from escrims import (
    COUNTER_STRIKE,
    VALORANT,
    EscrimsConfig,
    NotFoundError,
    Scrim,
    ScrimFilters,
    ScrimStatus,
    SqliteScrimRepository,
    ValidationError,
    init_database,
)


def make_scrim(day=1):
    return Scrim(VALORANT, datetime(2026, 3, day, 20, 0), rank_min=1000, rank_max=2000)


class TestSqliteScrimRepository:
    """Tests for SqliteScrimRepository class."""

    @pytest.fixture
    def db_path(self):
        """Create temporary database for testing."""
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        init_database(path)
        yield path
        os.unlink(path)

    @pytest.fixture
    def repo(self, db_path):
        """Create repository with test database."""
        return SqliteScrimRepository(db_path)

    def test_save_and_find(self, repo):
        """Test saving a scrim and loading it back."""
        scrim = make_scrim()
        scrim.apply("u1", 1500, 40)
        repo.save(scrim)

        loaded = repo.find_by_id(scrim.scrim_id)
        assert loaded is not None
        assert loaded.status == ScrimStatus.SEEKING
        assert loaded.application_for("u1").is_accepted

    def test_find_missing_returns_none(self, repo):
        """Test an unknown id returns None."""
        assert repo.find_by_id("NONEXISTENT") is None

    def test_duplicate_save_rejected(self, repo):
        """Test saving the same scrim twice raises ValidationError."""
        scrim = make_scrim()
        repo.save(scrim)
        with pytest.raises(ValidationError):
            repo.save(scrim)

    def test_update_status(self, repo):
        """Test update stores the new state."""
        scrim = make_scrim()
        repo.save(scrim)
        scrim.cancel()
        repo.update(scrim)

        assert repo.find_by_id(scrim.scrim_id).status == ScrimStatus.CANCELLED
        assert [s.scrim_id for s in repo.find_by_status("CANCELLED")] == [scrim.scrim_id]
        assert repo.find_by_status("SEEKING") == []

    def test_update_unknown_raises(self, repo):
        """Test updating a scrim that was never saved."""
        with pytest.raises(NotFoundError):
            repo.update(make_scrim())

    def test_delete(self, repo):
        """Test deleting a scrim."""
        scrim = make_scrim()
        repo.save(scrim)
        repo.delete(scrim.scrim_id)
        assert repo.find_by_id(scrim.scrim_id) is None
        with pytest.raises(NotFoundError):
            repo.delete(scrim.scrim_id)

    def test_find_all_ordered_by_schedule(self, repo):
        """Test find_all returns scrims by scheduled time."""
        later = make_scrim(day=9)
        sooner = make_scrim(day=2)
        repo.save(later)
        repo.save(sooner)
        assert [s.scrim_id for s in repo.find_all()] == [sooner.scrim_id, later.scrim_id]

    def test_init_database_is_idempotent(self, db_path):
        """Test running init twice keeps existing rows."""
        repo = SqliteScrimRepository(db_path)
        repo.save(make_scrim())
        init_database(db_path)
        assert len(repo.find_all()) == 1

    def test_from_config_initializes_database(self, tmp_path):
        """Test from_config creates the schema at the configured path."""
        config = EscrimsConfig(db_path=str(tmp_path / "league.db"))
        repo = SqliteScrimRepository.from_config(config)
        assert repo.db_path == config.db_path
        repo.save(make_scrim())
        assert len(repo.find_all()) == 1

    def test_rejected_insert_keeps_stored_row(self, repo):
        """Test a rejected insert rolls back and keeps the stored snapshot."""
        scrim = make_scrim()
        repo.save(scrim)
        with pytest.raises(ValidationError):
            repo.save(scrim)
        assert repo.find_by_id(scrim.scrim_id).status == ScrimStatus.SEEKING


class TestFindMatching:
    """Tests for SqliteScrimRepository.find_matching."""

    @pytest.fixture
    def stored(self, tmp_path):
        """Three saved scrims keyed by a readable name."""
        path = str(tmp_path / "search.db")
        init_database(path)
        repo = SqliteScrimRepository(path)
        scrims = {
            "val_low": Scrim(VALORANT, datetime(2026, 3, 1, 20, 0),
                             rank_min=500, rank_max=1200, latency_max=60),
            "val_high": Scrim(VALORANT, datetime(2026, 3, 5, 20, 0),
                              rank_min=1800, rank_max=2600, latency_max=-1),
            "cs_wingman": Scrim(COUNTER_STRIKE, datetime(2026, 3, 3, 18, 0),
                                rank_min=1000, rank_max=2000, latency_max=120,
                                fmt=COUNTER_STRIKE.find_format("2v2 Wingman")),
        }
        scrims["val_high"].cancel()
        for scrim in scrims.values():
            repo.save(scrim)
        return repo, scrims

    def found(self, stored, **filters):
        repo, scrims = stored
        ids = {scrim.scrim_id: name for name, scrim in scrims.items()}
        return [ids[s.scrim_id] for s in repo.find_matching(ScrimFilters(**filters))]

    def test_no_filters_returns_everything(self, stored):
        """Test empty filters match every scrim in schedule order."""
        assert ScrimFilters().is_empty
        assert self.found(stored) == ["val_low", "cs_wingman", "val_high"]

    def test_game_ignores_case(self, stored):
        """Test the game filter compares names case-insensitively."""
        assert self.found(stored, game="valorant") == ["val_low", "val_high"]

    def test_format(self, stored):
        """Test the format filter."""
        assert self.found(stored, format="2V2 WINGMAN") == ["cs_wingman"]

    def test_rank_window(self, stored):
        """Test rank filters keep scrims whose window lies inside the bounds."""
        assert self.found(stored, rank_min=900) == ["cs_wingman", "val_high"]
        assert self.found(stored, rank_max=2000) == ["val_low", "cs_wingman"]
        assert self.found(stored, rank_min=900, rank_max=2000) == ["cs_wingman"]

    def test_latency_limit(self, stored):
        """Test the latency filter keeps limits at or below it, including unlimited."""
        assert self.found(stored, latency_max=100) == ["val_low", "val_high"]
        assert self.found(stored, latency_max=120) == ["val_low", "cs_wingman", "val_high"]

    def test_date_range_is_inclusive(self, stored):
        """Test date bounds include scrims scheduled exactly on them."""
        found = self.found(
            stored, date_from=datetime(2026, 3, 3, 18, 0), date_to=datetime(2026, 3, 5, 20, 0)
        )
        assert found == ["cs_wingman", "val_high"]
        assert self.found(stored, date_to=datetime(2026, 3, 2)) == ["val_low"]

    def test_status(self, stored):
        """Test the status filter ignores case."""
        assert self.found(stored, status="cancelled") == ["val_high"]
        assert self.found(stored, status="SEEKING", game="Counter-Strike") == ["cs_wingman"]

    def test_filters_follow_updates(self, stored):
        """Test searchable columns are refreshed on update."""
        repo, scrims = stored
        scrim = scrims["cs_wingman"]
        scrim.cancel()
        repo.update(scrim)
        assert self.found(stored, status="CANCELLED") == ["cs_wingman", "val_high"]
