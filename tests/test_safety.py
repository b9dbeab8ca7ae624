"""Safety tests to ensure the test suite doesn't touch the real database.

These tests verify that running the test suite does NOT create or modify
./db (the default location of learnme.db). All tests MUST use the
temporary database from the `isolated_db` fixture.
"""

import hashlib
import os
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TESTS_DIR = PROJECT_ROOT / "tests"


def _hash_directory(path: Path) -> str | None:
    """Hash directory structure, file sizes and mtimes.

    Returns None if directory doesn't exist.
    """
    if not path.exists():
        return None

    hasher = hashlib.sha256()

    for root, dirs, files in os.walk(path):
        dirs.sort()
        files.sort()

        for filename in files:
            filepath = Path(root) / filename
            hasher.update(str(filepath.relative_to(path)).encode())
            stat = filepath.stat()
            hasher.update(str(stat.st_size).encode())
            hasher.update(str(int(stat.st_mtime)).encode())

    return hasher.hexdigest()


class TestDatabaseDirectorySafety:
    """Tests ensuring ./db is never modified by test suite."""

    @pytest.fixture(scope="class")
    def db_dir_state_before(self):
        db_path = PROJECT_ROOT / "db"
        return {
            "exists": db_path.exists(),
            "hash": _hash_directory(db_path),
        }

    def test_db_directory_not_created(self, db_dir_state_before):
        if not db_dir_state_before["exists"] and (PROJECT_ROOT / "db").exists():
            pytest.fail(
                "./db directory was created during test run. "
                "All tests MUST use temporary directories for databases."
            )

    def test_db_directory_not_modified(self, db_dir_state_before):
        if db_dir_state_before["exists"]:
            if _hash_directory(PROJECT_ROOT / "db") != db_dir_state_before["hash"]:
                pytest.fail(
                    "./db directory was modified during test run. "
                    "All tests MUST use temporary directories for databases."
                )

    def test_runs_from_temp_directory(self, isolated_db):
        """The autouse fixture moves every test out of the project root."""
        assert Path.cwd() != PROJECT_ROOT
        assert isolated_db.parent.resolve() == Path.cwd().resolve()


class TestTestIsolation:
    """Meta-tests ensuring test modules use temp databases."""

    def test_no_default_database(self):
        violations = []

        for test_file in sorted(TESTS_DIR.glob("test_*.py")):
            if test_file.name == Path(__file__).name:
                continue

            content = test_file.read_text(encoding="utf-8")

            # No arguments = default path under ./db
            if "init_db()" in content:
                violations.append(f"{test_file.name}: Calls init_db() without explicit temp path")

            if 'Path("db")' in content and "tmp_path" not in content:
                violations.append(f"{test_file.name}: Uses Path('db') without tmp_path")

        if violations:
            pytest.fail(
                "Test files may not be properly isolated:\n"
                + "\n".join(f"  - {v}" for v in violations)
            )
