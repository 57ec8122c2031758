"""Integration tests for the Datastore database."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from campusevents.datastore import Datastore, DuplicateRegistrationError, StorageError
from campusevents.datastore.database import Database
from campusevents.datastore.models import Event, Registration, User


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def database(temp_db_path: str) -> Database:
    """Create a database instance with tables."""
    db = Database(temp_db_path)
    db.create_tables()
    yield db
    db.close()
    # Cleanup
    Path(temp_db_path).unlink(missing_ok=True)
    Path(f"{temp_db_path}-wal").unlink(missing_ok=True)
    Path(f"{temp_db_path}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_database_creates_file(self, temp_db_path: str) -> None:
        """SQLite file created at specified path."""
        db = Database(temp_db_path)
        db.create_tables()
        assert Path(temp_db_path).exists()
        db.close()

    def test_database_creates_parent_directory(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        db = Database(str(tmp_path / "nested" / "campus.db"))
        db.create_tables()

        assert (tmp_path / "nested" / "campus.db").exists()
        db.close()

    def test_database_creates_tables(self, database: Database) -> None:
        """All three tables exist after init."""
        tables = inspect(database.engine).get_table_names()
        assert set(tables) == {"users", "events", "registrations"}

    def test_registration_unique_constraint(self, database: Database) -> None:
        """(event_id, user_id) is declared unique."""
        constraints = inspect(database.engine).get_unique_constraints("registrations")

        assert any(set(c["column_names"]) == {"event_id", "user_id"} for c in constraints)

    def test_database_wal_mode(self, database: Database) -> None:
        """WAL mode is enabled."""
        assert database.is_wal_mode()

    def test_database_foreign_keys_enabled(self, database: Database) -> None:
        """Foreign keys are enabled."""
        with database.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


@pytest.mark.integration
class TestSessionScope:
    """Tests for session_scope error translation."""

    def test_integrity_error_propagates(self, database: Database) -> None:
        """Constraint violations are re-raised unchanged."""
        with pytest.raises(IntegrityError), database.session_scope() as session:
            session.add(Registration(event_id="missing", user_id="missing"))
            session.commit()

    def test_unopenable_path_raises_storage_error(self, tmp_path: Path) -> None:
        """A directory in place of the database file surfaces as StorageError."""
        (tmp_path / "adir").mkdir()

        with pytest.raises(StorageError, match="Cannot initialize database"):
            Datastore(str(tmp_path / "adir"))

    def test_wal_check_on_unopenable_path(self, tmp_path: Path) -> None:
        """is_wal_mode reports open failures as StorageError."""
        (tmp_path / "adir").mkdir()
        db = Database(str(tmp_path / "adir"))

        with pytest.raises(StorageError):
            db.is_wal_mode()
        db.close()

    def test_other_errors_become_storage_error(self, database: Database) -> None:
        """Any other SQLAlchemy failure is raised as StorageError."""
        with pytest.raises(StorageError), database.session_scope() as session:
            session.execute(text("SELECT * FROM no_such_table"))


@pytest.mark.integration
class TestPersistence:
    """Data survives reopening the file."""

    def test_rows_survive_reopen(self, temp_db_path: str) -> None:
        """A second Datastore on the same file sees the first one's writes."""
        first = Datastore(temp_db_path)
        user = first.create_user("alice", "alice@campus.edu", "h", "Alice")
        event = first.create_event("Fair", "Quad", datetime(2030, 9, 1, 10, 0), user.id)
        first.add_registration(event.id, user.id, registered_at=datetime(2030, 8, 1))
        first.close()

        second = Datastore(temp_db_path)
        try:
            assert second.get_user(user.id).username == "alice"
            assert second.count_registrations(event.id) == 1
            with pytest.raises(DuplicateRegistrationError):
                second.add_registration(event.id, user.id, registered_at=datetime(2030, 8, 2))
        finally:
            second.close()
            Path(temp_db_path).unlink(missing_ok=True)

    def test_cascade_delete_on_file_db(self, database: Database) -> None:
        """Deleting an event removes its registrations at the storage level."""
        with database.session_scope() as session:
            user = User(username="a", email="a@x.edu", password_hash="h", full_name="A")
            session.add(user)
            session.flush()
            event = Event(
                title="T", venue="V", event_date=datetime(2030, 1, 1), created_by_id=user.id
            )
            session.add(event)
            session.flush()
            session.add(Registration(event_id=event.id, user_id=user.id))
            session.commit()

            session.delete(event)
            session.commit()

            assert session.query(Registration).count() == 0
