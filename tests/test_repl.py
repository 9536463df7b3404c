from sqlviewer.repl import ViewerREPL


def _run(engine, monkeypatch, lines):
    feed = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(feed))
    ViewerREPL(engine).run()


def test_repl_session(engine, monkeypatch, capsys):
    _run(engine, monkeypatch, [
        ".tables",
        "SELECT name FROM users",
        "WHERE id = 1;",
        ".browse users 0 alice",
        ".use nowhere.sqlite",
        "quit",
    ])

    out = capsys.readouterr().out
    assert "  users" in out
    assert "    id INTEGER (PRIMARY KEY)" in out
    assert "Alice Johnson" in out
    assert "1 row(s) returned" in out
    assert "Page 1 of 1 (1 record(s))" in out
    assert "Error: Database not found" in out


def test_repl_reports_sql_errors_and_keeps_running(engine, monkeypatch, capsys):
    _run(engine, monkeypatch, [
        "SELECT * FROM missing;",
        "INSERT INTO users (name, email) VALUES ('Eve', 'eve@example.com');",
        ".databases",
        "exit",
    ])

    out = capsys.readouterr().out
    assert "Error: no such table: missing" in out
    assert "1 row(s) changed, last insert id 5" in out
    assert f"* {engine.active_path}" in out


def test_repl_stops_on_eof(engine, monkeypatch):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    ViewerREPL(engine).run()
