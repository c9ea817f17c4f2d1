"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from inboxsort.main import cli
from inboxsort.storage import SQLiteOverrideStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "overrides.db"


@pytest.fixture
def messages_file(tmp_path):
    """JSON export with a mix of record shapes."""
    path = tmp_path / "messages.json"
    path.write_text(json.dumps([
        {"id": "1", "subject": "NBA recap", "snippet": "", "from": ""},
        {"id": "2", "subject": "Stock market investment update", "labelIds": ["CATEGORY_SOCIAL"]},
        {
            "id": "3",
            "snippet": "Flight itinerary attached",
            "payload": {"headers": [{"name": "Subject", "value": "Your hotel booking"}]},
        },
        {"id": "4", "subject": "", "snippet": "", "from": ""},
    ]))
    return path


def invoke(runner, db_path, *args, env=None):
    return runner.invoke(cli, ["--db", str(db_path), *args], env=env)


class TestSummaryCommand:
    """Tests for the summary command."""

    def test_summary_json(self, runner, db_path, messages_file):
        """Test raw counts output."""
        result = invoke(runner, db_path, "summary", str(messages_file), "--json")

        assert result.exit_code == 0
        counts = json.loads(result.output)
        assert counts == {
            "Sports": 1,
            "Entertainment": 1,
            "Tech": 0,
            "Finance": 0,
            "Travel": 1,
            "Other": 1,
        }

    def test_summary_table(self, runner, db_path, messages_file):
        """Test the rendered distribution."""
        result = invoke(runner, db_path, "summary", str(messages_file))

        assert result.exit_code == 0
        assert "Sports" in result.output
        assert "Travel" in result.output

    def test_summary_invalid_file(self, runner, db_path, tmp_path):
        """Test a malformed export."""
        path = tmp_path / "bad.json"
        path.write_text("{oops")

        result = invoke(runner, db_path, "summary", str(path))
        assert result.exit_code == 1


class TestCorrectCommand:
    """Tests for recording corrections from the CLI."""

    def test_correct_changes_classification(self, runner, db_path, messages_file):
        """Test that a correction is applied on the next run."""
        result = invoke(runner, db_path, "correct", "1", "Finance")
        assert result.exit_code == 0

        assert SQLiteOverrideStore(db_path=db_path).get("1") == "Finance"

        result = invoke(runner, db_path, "summary", str(messages_file), "--json")
        counts = json.loads(result.output)
        assert counts["Finance"] == 1
        assert counts["Sports"] == 0

    def test_correct_unknown_category(self, runner, db_path):
        """Test that unknown categories are rejected."""
        result = invoke(runner, db_path, "correct", "1", "Gardening")

        assert result.exit_code == 1
        assert SQLiteOverrideStore(db_path=db_path).count() == 0

    def test_forget(self, runner, db_path):
        """Test removing a correction."""
        invoke(runner, db_path, "correct", "1", "Tech")

        result = invoke(runner, db_path, "forget", "1")
        assert result.exit_code == 0
        assert SQLiteOverrideStore(db_path=db_path).get("1") is None

    def test_overrides_listing(self, runner, db_path):
        """Test listing recorded corrections."""
        invoke(runner, db_path, "correct", "abc", "Travel")

        result = invoke(runner, db_path, "overrides")
        assert result.exit_code == 0
        assert "abc" in result.output

    def test_clear_overrides(self, runner, db_path):
        """Test clearing corrections without a prompt."""
        invoke(runner, db_path, "correct", "1", "Tech")

        result = invoke(runner, db_path, "clear-overrides", "--yes")
        assert result.exit_code == 0
        assert SQLiteOverrideStore(db_path=db_path).count() == 0

    def test_clear_overrides_cancelled(self, runner, db_path):
        """Test declining the confirmation prompt."""
        invoke(runner, db_path, "correct", "1", "Tech")

        result = runner.invoke(cli, ["--db", str(db_path), "clear-overrides"], input="n\n")
        assert result.exit_code == 0
        assert SQLiteOverrideStore(db_path=db_path).count() == 1


class TestOtherCommands:
    """Tests for classify and categories."""

    def test_classify(self, runner, db_path, messages_file):
        """Test the classification table."""
        result = invoke(runner, db_path, "classify", str(messages_file), "--explain")

        assert result.exit_code == 0
        assert "Entertainment" in result.output
        assert "provider_label" in result.output

    def test_categories(self, runner, db_path):
        """Test the taxonomy listing."""
        result = invoke(runner, db_path, "categories")

        assert result.exit_code == 0
        assert "Threshold" in result.output
        assert "fallback" in result.output


class TestUnavailableStore:
    """Tests for classifying when corrections cannot be read."""

    def test_summary_with_missing_db_directory(self, runner, tmp_path, messages_file):
        """Test that a database in a missing directory does not stop the summary."""
        db_path = tmp_path / "missing" / "overrides.db"

        result = invoke(
            runner, db_path, "summary", str(messages_file), "--json", env={"LOG_LEVEL": "ERROR"}
        )

        assert result.exit_code == 0
        counts = json.loads(result.output)
        assert counts["Sports"] == 1
        assert counts["Other"] == 1

    def test_classify_with_corrupt_db(self, runner, db_path, messages_file):
        """Test that a corrupt database file does not stop classification."""
        db_path.write_bytes(b"not a sqlite database " * 100)

        result = invoke(runner, db_path, "classify", str(messages_file), "--explain")

        assert result.exit_code == 0
        assert "Corrections unavailable" in result.output
        assert "Sports" in result.output

    def test_correct_with_corrupt_db_fails(self, runner, db_path):
        """Test that recording a correction still reports storage failures."""
        db_path.write_bytes(b"not a sqlite database " * 100)

        result = invoke(runner, db_path, "correct", "1", "Tech")
        assert result.exit_code == 1


class TestInvalidSettings:
    """Tests for invalid settings reported without a traceback."""

    @pytest.mark.parametrize(
        "command", [["forget", "1"], ["overrides"], ["clear-overrides", "--yes"]]
    )
    def test_bad_max_overrides(self, runner, db_path, command):
        """Test that a non-integer size cap is a clean error."""
        result = invoke(runner, db_path, *command, env={"INBOXSORT_MAX_OVERRIDES": "abc"})

        assert result.exit_code == 1
        assert "INBOXSORT_MAX_OVERRIDES" in result.output

    def test_nan_threshold(self, runner, db_path, messages_file):
        """Test that a non-finite threshold is rejected at start-up."""
        result = invoke(
            runner, db_path, "summary", str(messages_file), env={"INBOXSORT_THRESHOLD": "nan"}
        )

        assert result.exit_code == 1
        assert "INBOXSORT_THRESHOLD" in result.output
