import asyncio
import unittest
from unittest import mock

import httpx

from tests.test_adapters import RSS
from uaewire.config import Config, ConfigModel
from uaewire.db import InMemoryStore
from uaewire.models import Category, RunStatus
from uaewire.pipeline import IngestionOptions, IngestionPipeline


def make_config(environ=None):
    model = ConfigModel(pipeline={"query_pacing": 0, "batch_pacing": 0})
    return Config(model=model, environ=environ or {})


def google_only(request):
    if request.url.host == "news.google.com":
        return httpx.Response(200, text=RSS)
    raise AssertionError(f"unexpected request to {request.url}")


class TestIngestionPipeline(unittest.IsolatedAsyncioTestCase):
    def pipeline(self, store, handler=google_only, environ=None):
        return IngestionPipeline(make_config(environ), store, transport=httpx.MockTransport(handler))

    async def test_custom_queries_end_to_end(self):
        store = InMemoryStore()
        options = IngestionOptions(queries=["ADQ"], providers=["google"], enrich_limit=0)
        summary = await self.pipeline(store).run(options)

        self.assertEqual(summary.status, "success")
        self.assertEqual((summary.fetched, summary.saved, summary.skipped, summary.errors), (3, 3, 0, 0))
        self.assertEqual(len(store.documents), 3)
        self.assertEqual(store.get_run(summary.run_id).status, RunStatus.SUCCESS)
        self.assertEqual(store.get_run(summary.run_id).provider, "google")
        self.assertEqual([s["name"] for s in summary.stages], ["fetch", "process", "enrich", "persist"])

    async def test_second_run_skips_known_documents(self):
        store = InMemoryStore()
        options = IngestionOptions(queries=["ADQ"], providers=["google"], enrich_limit=0)
        await self.pipeline(store).run(options)
        summary = await self.pipeline(store).run(options)
        self.assertEqual((summary.saved, summary.skipped), (0, 3))
        self.assertEqual(summary.status, "success")

    async def test_missing_naver_credentials_gives_partial_run(self):
        store = InMemoryStore()
        options = IngestionOptions(queries=["ADQ"], enrich_limit=0)
        summary = await self.pipeline(store).run(options)

        self.assertEqual(summary.status, "partial")
        self.assertEqual(summary.errors, 1)
        self.assertEqual(summary.saved, 3)
        self.assertEqual(summary.query_errors[0].provider, "naver")
        self.assertEqual(store.get_run(summary.run_id).provider, "news-sync")

    async def test_all_queries_failing_gives_failed_run(self):
        def handler(request):
            return httpx.Response(500)

        store = InMemoryStore()
        options = IngestionOptions(queries=["ADQ", "ADNOC"], providers=["google"], enrich_limit=0)
        summary = await self.pipeline(store, handler).run(options)
        self.assertEqual(summary.status, "failed")
        self.assertEqual(summary.errors, 2)

    async def test_stalled_query_keeps_items_from_finished_queries(self):
        async def handler(request):
            if request.url.params["q"] == "stalled":
                await asyncio.sleep(10)
            return httpx.Response(200, text=RSS)

        model = ConfigModel(pipeline={"query_pacing": 0, "batch_pacing": 0, "branch_timeout": 0.5})
        pipeline = IngestionPipeline(
            Config(model=model, environ={}), InMemoryStore(), transport=httpx.MockTransport(handler)
        )
        options = IngestionOptions(queries=["ADQ", "ADNOC", "stalled"], providers=["google"], enrich_limit=0)
        summary = await pipeline.run(options)

        self.assertEqual(summary.fetched, 6)
        self.assertEqual(summary.saved, 3)
        self.assertEqual(summary.status, "partial")
        self.assertEqual([(e.query, e.error) for e in summary.query_errors], [("stalled", "Request timed out")])

    async def test_category_override_and_month(self):
        seen = []

        def handler(request):
            seen.append(request.url.params["q"])
            return httpx.Response(200, text=RSS)

        store = InMemoryStore()
        options = IngestionOptions(
            queries=["ADQ"],
            providers=["google"],
            category=Category.ECONOMY,
            month="2025-09",
            enrich_limit=0,
        )
        await self.pipeline(store, handler).run(options)
        self.assertEqual(seen, ["ADQ after:2025-09-01 before:2025-09-30"])
        self.assertTrue(all(d.category == "economy" for d in store.documents.values()))

    async def test_default_plan_covers_every_lane(self):
        pipeline = self.pipeline(InMemoryStore(), environ={"NAVER_CLIENT_ID": "i", "NAVER_CLIENT_SECRET": "s"})
        branches = pipeline.plan(IngestionOptions())
        labels = [b.label for b in branches]
        self.assertIn("google-en:uae_local", labels)
        self.assertIn("google-ko:korea_uae", labels)
        self.assertIn("naver:deal", labels)
        self.assertTrue(all(b.result_cap == 3 for b in branches))

    async def test_unhandled_error_fails_run_and_propagates(self):
        store = InMemoryStore()
        pipeline = self.pipeline(store)
        options = IngestionOptions(queries=["ADQ"], providers=["google"], enrich_limit=0)
        with mock.patch.object(pipeline, "process", side_effect=RuntimeError("tagger crashed")):
            with self.assertRaises(RuntimeError):
                await pipeline.run(options)

        run = store.recent_runs(1)[0]
        self.assertEqual(run.status, RunStatus.FAILED)
        self.assertEqual(run.meta["error"], "tagger crashed")


if __name__ == "__main__":
    unittest.main()
