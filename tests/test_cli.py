import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from trackerexpr.cli import main
from trackerexpr.errors import ErrorKind, ExprError
from trackerexpr.storage import write_json

PAYLOAD = {
    "start_date": "2024-03-01",
    "end_date": "2024-03-06",
    "series": [
        {"id": 0, "name": "reading", "values": [12, 20, None, 8, 10, None]},
    ],
}


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.series_file = Path(self._tmpdir.name) / "series.json"
        write_json(self.series_file, PAYLOAD)
        env_patch = patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}, clear=True)
        env_patch.start()
        self.addCleanup(env_patch.stop)
        self.addCleanup(self._tmpdir.cleanup)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main([str(self.series_file), *argv])
        return code, stdout.getvalue().strip(), stderr.getvalue().strip()

    def test_renders_template(self) -> None:
        code, out, _ = self._run("Read {{ sum() :: d }} pages, best run {{ maxStreak() :: d }} days")
        self.assertEqual(code, 0)
        self.assertEqual(out, "Read 50 pages, best run 2 days")

    def test_date_format_option(self) -> None:
        code, out, _ = self._run("{{ maxStreakEnd() }}", "--date-format", "D MMM YYYY")
        self.assertEqual(code, 0)
        self.assertEqual(out, "5 Mar 2024")

    def test_value_mode(self) -> None:
        code, out, _ = self._run("{{ numDaysHavingData() }}", "--value")
        self.assertEqual(code, 0)
        self.assertEqual(out, "4")

        code, out, _ = self._run("{{ endDate() }}", "--value")
        self.assertEqual(code, 0)
        self.assertEqual(out, "2024-03-05")

    def test_errors_exit_non_zero(self) -> None:
        code, out, err = self._run("{{ sum() / 0 }}")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, "Error: Division by zero in expression")

        code, _, err = self._run("plain text", "--value")
        self.assertEqual(code, 1)
        self.assertIn("failed to resolve value", err)

    def test_template_size_limit_from_settings(self) -> None:
        template = "{{ sum() }} " + "x" * 300
        with patch.dict(os.environ, {"TRACKER_MAX_TEMPLATE_CHARS": "256"}):
            code, out, err = self._run(template)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("too large", err)

        code, out, _ = self._run(template)
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("50.0 "))

    def test_configured_end_date_is_kept(self) -> None:
        write_json(
            self.series_file,
            {
                "start_date": "2024-03-01",
                "end_date": "2024-03-06",
                "series": [{"id": 0, "values": [None] * 6}],
            },
        )
        with patch.dict(os.environ, {"TRACKER_END_DATE": "2024-03-04"}):
            code, out, _ = self._run("{{ startDate() }} to {{ endDate() }}")
        self.assertEqual(code, 0)
        self.assertEqual(out, "2024-03-01 to 2024-03-04")

    def test_value_format_error_exits_non_zero(self) -> None:
        failure = ExprError(ErrorKind.FORMAT_ERROR, "Invalid number format 'g'")
        with patch("trackerexpr.cli.format_value", return_value=failure):
            code, out, err = self._run("{{ sum() }}", "--value")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, "Error: Invalid number format 'g'")

    def test_missing_series_file(self) -> None:
        self.series_file = Path(self._tmpdir.name) / "absent.json"
        code, _, err = self._run("{{ sum() }}")
        self.assertEqual(code, 1)
        self.assertIn("Error: ", err)


if __name__ == "__main__":
    unittest.main()
