import re
import sqlite3
from pathlib import Path

import pytest

from sqlviewer.exceptions import (
    DefaultDatabaseError,
    ExecutionError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)


def _make_database(path: Path, table: str = "items") -> str:
    connection = sqlite3.connect(path)
    connection.execute(f"CREATE TABLE {table} (id INTEGER PRIMARY KEY, label TEXT)")
    connection.execute(f"INSERT INTO {table} (label) VALUES ('first')")
    connection.commit()
    connection.close()
    return str(path)


def test_list_starts_with_active_default(engine, default_db):
    databases = engine.list_databases()

    assert len(databases) == 1
    assert databases[0].name == default_db
    assert databases[0].path == default_db
    assert databases[0].is_active


def test_list_includes_uploads_sorted_and_skips_hidden(engine, uploads_dir):
    _make_database(uploads_dir / "b.sqlite")
    _make_database(uploads_dir / "a.db")
    (uploads_dir / ".keep").write_text("")

    names = [d.name for d in engine.list_databases()[1:]]
    assert names == ["a.db", "b.sqlite"]


def test_switch_to_missing_file_leaves_session(engine, default_db, uploads_dir):
    with pytest.raises(NotFoundError):
        engine.switch_database(str(uploads_dir / "nope.sqlite"))

    assert engine.active_path == default_db
    assert engine.execute("SELECT COUNT(*) AS n FROM users").rows == [{"n": 4}]


def test_switch_requires_a_name(engine):
    with pytest.raises(ValidationError):
        engine.switch_database("")


def test_switch_changes_active_database(engine, uploads_dir):
    target = _make_database(uploads_dir / "shop.sqlite")

    engine.switch_database(target)

    assert engine.active_path == target
    assert engine.list_tables() == ["items"]
    active = [d for d in engine.list_databases() if d.is_active]
    assert [d.path for d in active] == [target]


def test_switch_to_active_path_reopens(engine, default_db):
    before = engine.session.connection

    engine.switch_database(default_db)

    assert engine.session.connection is not before
    assert engine.active_path == default_db


def test_delete_default_always_fails(engine, default_db, uploads_dir):
    with pytest.raises(DefaultDatabaseError):
        engine.delete_database(default_db)

    engine.switch_database(_make_database(uploads_dir / "x.sqlite"))
    with pytest.raises(DefaultDatabaseError):
        engine.delete_database(default_db)
    assert Path(default_db).exists()


def test_delete_outside_uploads_is_forbidden(engine, tmp_path, uploads_dir):
    outside = _make_database(tmp_path / "outside.sqlite")

    with pytest.raises(ForbiddenError):
        engine.delete_database(outside)
    with pytest.raises(ForbiddenError):
        engine.delete_database(str(uploads_dir / ".." / "outside.sqlite"))
    assert Path(outside).exists()


def test_delete_forbidden_errors_map_to_statuses():
    assert DefaultDatabaseError.status_code == 400
    assert ForbiddenError.status_code == 403


def test_delete_missing_file(engine, uploads_dir):
    with pytest.raises(NotFoundError):
        engine.delete_database(str(uploads_dir / "ghost.sqlite"))


def test_delete_inactive_file_keeps_session(engine, default_db, uploads_dir):
    target = _make_database(uploads_dir / "old.sqlite")

    engine.delete_database(target)

    assert not Path(target).exists()
    assert engine.active_path == default_db


def test_delete_active_file_reverts_to_default(engine, default_db, uploads_dir):
    target = _make_database(uploads_dir / "live.sqlite")
    engine.switch_database(target)

    engine.delete_database(target)

    assert not Path(target).exists()
    assert engine.active_path == default_db
    assert engine.list_databases()[0].is_active
    assert "users" in engine.list_tables()


def test_store_upload_keeps_bytes_and_stamps_name(engine, uploads_dir, tmp_path):
    data = Path(_make_database(tmp_path / "src.sqlite")).read_bytes()

    database = engine.upload_database("../../mydb.sqlite", data)

    stored = Path(database.path)
    assert stored.parent == uploads_dir
    assert re.fullmatch(r"mydb\.sqlite-\d+", stored.name)
    assert stored.read_bytes() == data
    assert database.path in [d.path for d in engine.list_databases()]


def test_import_dump_creates_new_database(engine, uploads_dir):
    dump = (
        "CREATE TABLE seed_table (id int unsigned AUTO_INCREMENT PRIMARY KEY, "
        "label varchar(20)) ENGINE=InnoDB;\n"
        "INSERT INTO seed_table (label) VALUES ('one');\n"
        "INSERT INTO seed_table (label) VALUES ('two');\n"
    )

    database = engine.import_dump("Seed.SQL", dump)

    assert re.fullmatch(r"seed\.sqlite-\d+\.sqlite", database.name)
    assert database.name == Path(database.path).name
    assert database.name in [d.name for d in engine.list_databases()]

    engine.switch_database(database.path)
    assert engine.list_tables() == ["seed_table"]
    assert engine.execute("SELECT COUNT(*) AS count FROM seed_table").rows == [{"count": 2}]


def test_failed_import_leaves_no_file(engine, uploads_dir):
    with pytest.raises(ExecutionError, match="syntax error"):
        engine.import_dump("broken.sql", "CREATE TABLE broken (;")

    assert list(uploads_dir.iterdir()) == []


def test_switch_to_unopenable_path_keeps_previous_database(engine, default_db, tmp_path):
    unopenable = tmp_path / "no-such-dir" / "db.sqlite"

    with pytest.raises(ExecutionError):
        engine.session.replace(str(unopenable))

    assert engine.active_path == default_db
    assert engine.execute("SELECT COUNT(*) AS n FROM users").rows == [{"n": 4}]
