"""Unit tests for the 'sessions' and 'streak' commands."""

from typer.testing import CliRunner

from focusforge.main import app
from focusforge.utils import exit_codes

runner = CliRunner()


def _write_log(home, rows):
    home.mkdir(parents=True, exist_ok=True)
    (home / "sessions.csv").write_text("".join(row + "\n" for row in rows), encoding="utf-8")


class TestSessionsCommand:
    def test_lists_sessions_for_date(self, focus_home):
        _write_log(
            focus_home,
            [
                '2024-03-15,09:00,1500,"Write report"',
                '2024-03-15,10:00,600,"Emails"',
                '2024-03-16,09:00,1500,"Other day"',
                "garbage row",
            ],
        )
        result = runner.invoke(app, ["sessions", "--date", "2024-03-15"])

        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "09:25" in result.output
        assert "Emails" in result.output
        assert "Other day" not in result.output
        assert "2 session(s), 35 minute(s)" in result.output

    def test_no_sessions(self, focus_home):
        result = runner.invoke(app, ["sessions", "--date", "2024-03-15"])
        assert result.exit_code == 0
        assert "No sessions on 2024-03-15" in result.output

    def test_invalid_date(self, focus_home):
        result = runner.invoke(app, ["sessions", "--date", "2024-13-01"])
        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS

    def test_loose_date_is_accepted(self, focus_home):
        result = runner.invoke(app, ["sessions", "--date", "2024-02-30"])
        assert result.exit_code == 0


class TestStreakCommand:
    def test_shows_cached_values(self, focus_home):
        focus_home.mkdir(parents=True, exist_ok=True)
        (focus_home / "meta").write_text("streak_max=7\nstreak_current=3\n", encoding="utf-8")

        result = runner.invoke(app, ["streak"])
        assert result.exit_code == 0
        assert "Current streak: 3" in result.output
        assert "Longest streak: 7" in result.output
        assert "Sessions today: 0" in result.output

    def test_fresh_directory(self, focus_home):
        result = runner.invoke(app, ["streak"])
        assert result.exit_code == 0
        assert "Current streak: 0" in result.output
