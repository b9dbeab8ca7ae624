"""Tests for the learnme CLI."""

from typer.testing import CliRunner

from learnme.cli.commands import app
from learnme.db.catalog_repository import count_languages
from learnme.db.database import get_db_path

runner = CliRunner()


class TestDatabaseCommands:
    def test_init_db(self, tmp_path):
        db = tmp_path / "cli.db"
        result = runner.invoke(app, ["init-db", "--db", str(db)])
        assert result.exit_code == 0
        assert "Database ready" in result.stdout
        assert db.exists()

    def test_seed(self, tmp_path):
        db = tmp_path / "cli.db"
        result = runner.invoke(app, ["seed", "--db", str(db)])
        assert result.exit_code == 0
        assert "Seed complete" in result.stdout
        assert get_db_path() == db
        assert count_languages() == 25

    def test_lessons_by_prefix(self, tmp_path):
        db = tmp_path / "cli.db"
        runner.invoke(app, ["seed", "--db", str(db)])

        result = runner.invoke(app, ["lessons", "pyt", "--db", str(db)])
        assert result.exit_code == 0
        assert "python-l1-01" in result.stdout

    def test_lessons_ambiguous_prefix(self, tmp_path):
        db = tmp_path / "cli.db"
        runner.invoke(app, ["seed", "--db", str(db)])

        result = runner.invoke(app, ["lessons", "c", "--db", str(db)])
        assert result.exit_code == 0
        # "c" is itself a slug, so the exact match wins
        assert "c-l1-01" in result.stdout

        result = runner.invoke(app, ["lessons", "p", "--db", str(db)])
        assert result.exit_code == 1
        assert "ambiguous" in result.stdout

    def test_lessons_unknown(self, tmp_path):
        db = tmp_path / "cli.db"
        runner.invoke(app, ["seed", "--db", str(db)])
        result = runner.invoke(app, ["lessons", "zz", "--db", str(db)])
        assert result.exit_code == 1


class TestCodeCommands:
    def test_hints(self, tmp_path):
        source = tmp_path / "main.js"
        source.write_text("var x = 1;\n")
        result = runner.invoke(app, ["hints", str(source)])
        assert result.exit_code == 0
        assert "js-var-declaration" in result.stdout

    def test_hints_clean_code(self, tmp_path):
        source = tmp_path / "main.py"
        source.write_text("x = 1\n")
        result = runner.invoke(app, ["hints", str(source)])
        assert result.exit_code == 0
        assert "No hints" in result.stdout

    def test_run(self, tmp_path):
        source = tmp_path / "hello.py"
        source.write_text('print("Hello from LearnMe")\n')
        result = runner.invoke(app, ["run", str(source)])
        assert result.exit_code == 0
        assert "Hello from LearnMe" in result.stdout

    def test_run_unknown_suffix(self, tmp_path):
        source = tmp_path / "main.rb"
        source.write_text("puts 1\n")
        result = runner.invoke(app, ["run", str(source)])
        assert result.exit_code == 1
        assert "Cannot infer language" in result.stdout

    def test_run_language_override(self, tmp_path):
        source = tmp_path / "main.rb"
        source.write_text("puts 1\n")
        result = runner.invoke(app, ["run", str(source), "--language", "ruby"])
        assert result.exit_code == 1
        assert "not supported" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["run", str(tmp_path / "nope.py")])
        assert result.exit_code == 1
        assert "File not found" in result.stdout


class TestRecommend:
    def test_recommend(self):
        result = runner.invoke(app, ["recommend", "I want to build Android apps"])
        assert result.exit_code == 0
        assert "Mobile Development" in result.stdout
