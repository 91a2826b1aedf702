import unittest
from unittest import mock

from typer.testing import CliRunner

from uaewire.cli.app import app
from uaewire.db import InMemoryStore
from uaewire.errors import ProviderExhaustedError

runner = CliRunner()


class TestCliErrors(unittest.TestCase):
    def setUp(self):
        patches = [
            mock.patch("uaewire.cli.ingest.Config"),
            mock.patch("uaewire.cli.ingest.open_store", return_value=InMemoryStore()),
            mock.patch("uaewire.cli.curate.Config"),
            mock.patch("uaewire.cli.curate.open_store", return_value=InMemoryStore()),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_ingest_failure_is_reported_without_traceback(self):
        with mock.patch("uaewire.cli.ingest.IngestionPipeline") as pipeline:
            pipeline.return_value.run = mock.AsyncMock(side_effect=RuntimeError("feed parser crashed"))
            result = runner.invoke(app, ["ingest", "--query", "ADQ"])

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("Pipeline failed: feed parser crashed", result.output)

    def test_curate_rate_limit_is_reported_without_traceback(self):
        curator = mock.Mock()
        curator.curate = mock.AsyncMock(side_effect=ProviderExhaustedError("unsplash", "rate limited", 429))
        with mock.patch("uaewire.cli.curate.build_curator", return_value=curator):
            result = runner.invoke(app, ["curate", "dubai-marina"])

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("unsplash rate limit reached", result.output)

    def test_curate_batch_failure_is_reported_without_traceback(self):
        curator = mock.Mock()
        curator.curate_batch = mock.AsyncMock(side_effect=RuntimeError("store unavailable"))
        with mock.patch("uaewire.cli.curate.build_curator", return_value=curator):
            result = runner.invoke(app, ["curate-batch", "dubai-marina"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Batch curation failed: store unavailable", result.output)


if __name__ == "__main__":
    unittest.main()
