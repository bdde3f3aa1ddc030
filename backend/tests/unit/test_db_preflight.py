from scripts import db_preflight


def _clear(monkeypatch):
    for name in (
        "ENVIRONMENT",
        "DATABASE_URL",
        "AUTO_CREATE_TABLES",
        "ALERT_OVERDUE_DAYS",
        "TAILOR_CACHE_TTL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_development_defaults_pass(monkeypatch, capsys):
    _clear(monkeypatch)

    assert db_preflight.run() == 0
    assert "Preflight passed." in capsys.readouterr().out


def test_production_requires_postgres_and_migrations(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./tailorworks.db")

    environment, checks = db_preflight.collect_checks()

    failed = {title for title, ok, _ in checks if not ok}
    assert environment == "production"
    assert failed == {"DATABASE_URL is not SQLite", "AUTO_CREATE_TABLES is disabled"}
    assert db_preflight.run() == 1


def test_invalid_alert_policy_fails(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("ALERT_OVERDUE_DAYS", "soon")
    monkeypatch.setenv("TAILOR_CACHE_TTL_SECONDS", "0")

    _, checks = db_preflight.collect_checks()

    failed = {title for title, ok, _ in checks if not ok}
    assert failed == {
        "ALERT_OVERDUE_DAYS is a positive integer",
        "TAILOR_CACHE_TTL_SECONDS is a positive integer",
    }
