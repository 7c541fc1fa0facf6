"""
Tests for settings resolution.
"""

from bustrips.config import Settings

from conftest import make_settings


def test_explicit_database_url_wins():
    settings = make_settings(DATABASE_URL="sqlite:///./other.db", PGHOST="db.internal")
    assert settings.database_url == "sqlite:///./other.db"


def test_postgres_url_built_from_pg_settings():
    settings = make_settings(
        DATABASE_URL=None, PGHOST="db.internal", PGDATABASE="trips", PGUSER="bus", PGPASSWORD="pw",
    )
    assert settings.database_url == "postgresql://bus:pw@db.internal/trips?sslmode=require"


def test_sqlite_file_fallback():
    settings = make_settings(DATABASE_URL=None)
    assert settings.database_url == "sqlite:///./trips.db"


def test_only_settings_the_app_reads_are_declared():
    assert "ENVIRONMENT" not in Settings.model_fields
    assert {"REQUIRE_AUTH", "MANIFEST_COMPRESS", "LOG_LEVEL", "JSON_LOGS"} <= set(Settings.model_fields)
