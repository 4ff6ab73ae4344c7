"""
Name: Schema Script Smoke Tests

Responsibilities:
  - Verify --dry-run prints every schema step without a database
  - Verify a missing DATABASE_URL stops the script
"""

from unittest.mock import MagicMock, patch

import pytest

pytestmark = pytest.mark.unit


class TestInitDbSchemaScript:
    def test_dry_run_prints_steps(self, capsys):
        from scripts.init_db_schema import main
        from staffing.infrastructure.db.schema import SCHEMA_STEPS

        assert main(["--dry-run"]) == 0

        out = capsys.readouterr().out
        assert "CREATE TABLE IF NOT EXISTS app_records" in out
        assert out.count("-- ") == len(SCHEMA_STEPS)

    def test_missing_database_url(self, monkeypatch):
        from scripts.init_db_schema import main

        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(SystemExit, match="DATABASE_URL"):
            main([])

    def test_applies_schema_on_connection(self, capsys):
        from scripts import init_db_schema

        conn = MagicMock()
        connect = MagicMock()
        connect.return_value.__enter__.return_value = conn

        with patch.object(init_db_schema.psycopg, "connect", connect), patch.object(
            init_db_schema, "apply_schema"
        ) as apply:
            assert init_db_schema.main(["--database-url", "postgresql://x@localhost/db"]) == 0

        connect.assert_called_once_with("postgresql://x@localhost/db")
        apply.assert_called_once_with(conn)
        assert "Schema ready" in capsys.readouterr().out
