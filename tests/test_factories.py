"""Tests for database path resolution."""

from fundtrack.database import factories


def test_explicit_path_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FUNDTRACK_DB_PATH", str(tmp_path / "env.db"))

    assert factories.resolve_database_path(str(tmp_path / "cli.db")) == str(tmp_path / "cli.db")


def test_environment_path_creates_parent_directory(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "data" / "fundtrack.db"
    monkeypatch.setenv("FUNDTRACK_DB_PATH", str(target))

    assert factories.resolve_database_path() == str(target)
    assert target.parent.is_dir()


def test_default_path_under_data_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("FUNDTRACK_DB_PATH", raising=False)
    monkeypatch.setattr(factories, "DEFAULT_DATA_DIR", tmp_path / ".fundtrack")

    assert factories.resolve_database_path() == str(tmp_path / ".fundtrack" / "fundtrack.db")


def test_in_memory_database(monkeypatch):
    monkeypatch.delenv("FUNDTRACK_DB_PATH", raising=False)
    db = factories.create_sqlite_database(":memory:")

    assert db.database_url == "sqlite:///:memory:"
