import unittest

from tests.helpers import make_photo
from uaewire.config import CurationConfig
from uaewire.db import InMemoryStore
from uaewire.errors import ProviderError, ProviderExhaustedError
from uaewire.models import PhotoProvider
from uaewire.photos import PhotoCurator, PhotoSource, rank_candidates


class FakeSource(PhotoSource):
    def __init__(self, photos=None, error=None, provider=PhotoProvider.UNSPLASH):
        self.provider = provider
        self.photos = photos or []
        self.error = error
        self.calls = []
        self.tracked = []

    async def candidates(self, client, slug, queries):
        self.calls.append((slug, list(queries)))
        if self.error is not None:
            raise self.error
        return list(self.photos)

    async def track_selection(self, client, photo):
        self.tracked.append(photo.provider_ref)


def scenario_photos():
    return [
        make_photo("a", 3000, 2000, likes=600),
        make_photo("b", 1500, 1000, likes=50),
        make_photo("c", 800, 533, likes=10),
        make_photo("d", 2500, 1667, likes=200),
    ]


class TestRanking(unittest.TestCase):
    def test_ties_break_on_width_then_likes_then_order(self):
        photos = [
            make_photo("x", 1000, 1000, likes=5).model_copy(update={"score": 50}),
            make_photo("y", 2000, 1000, likes=5).model_copy(update={"score": 50}),
            make_photo("z", 2000, 1000, likes=9).model_copy(update={"score": 50}),
            make_photo("w", 2000, 1000, likes=9).model_copy(update={"score": 50}),
        ]
        self.assertEqual([p.provider_ref for p in rank_candidates(photos)], ["z", "w", "y", "x"])


class TestPhotoCurator(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.config = CurationConfig(min_width=0, min_height=0, pacing=0)

    def curator(self, *sources, config=None):
        return PhotoCurator(list(sources), self.store, config=config or self.config)

    async def test_selects_top_three_and_persists(self):
        source = FakeSource(scenario_photos())
        result = await self.curator(source).curate("dubai-marina", ["Dubai Marina skyline"])

        self.assertTrue(result.success)
        self.assertEqual([p.provider_ref for p in result.selected], ["a", "d", "b"])
        self.assertEqual([p.score for p in result.selected], [85, 80, 55])
        self.assertTrue(result.selected[0].is_active)
        self.assertFalse(any(p.is_active for p in result.selected[1:]))

        stored = self.store.get_candidates("dubai-marina")
        self.assertEqual(len(stored), 3)
        active = self.store.get_active_image("dubai-marina")
        self.assertEqual(active.image_url, "https://images.example.com/a.jpg")
        self.assertEqual(active.source["provider"], "unsplash")
        self.assertEqual(source.tracked, ["a", "d", "b"])

    async def test_rerun_replaces_previous_selection(self):
        first = FakeSource(scenario_photos())
        await self.curator(first).curate("dubai-marina")
        second = FakeSource([make_photo("e", 2600, 1700, likes=900)])
        await self.curator(second).curate("dubai-marina")

        self.assertEqual([p.provider_ref for p in self.store.get_candidates("dubai-marina")], ["e"])
        self.assertEqual(self.store.get_active_image("dubai-marina").image_url, "https://images.example.com/e.jpg")

    async def test_set_active_false_keeps_hero(self):
        await self.curator(FakeSource(scenario_photos())).curate("dubai-marina", set_active=False)
        self.assertIsNone(self.store.get_active_image("dubai-marina"))
        self.assertEqual(len(self.store.get_candidates("dubai-marina")), 3)

        await self.curator(FakeSource([make_photo("old", 2600, 1700)])).curate("dubai-marina")
        result = await self.curator(FakeSource([make_photo("new", 3000, 2000)])).curate(
            "dubai-marina", set_active=False
        )

        self.assertFalse(result.selected[0].is_active)
        self.assertEqual(self.store.get_active_image("dubai-marina").image_url, "https://images.example.com/old.jpg")
        stored = self.store.get_candidates("dubai-marina")
        self.assertEqual([p.provider_ref for p in stored], ["new"])
        self.assertFalse(any(p.is_active for p in stored))

    async def test_minimum_dimensions_with_fallback(self):
        config = CurationConfig(min_width=1600, min_height=900, pacing=0)
        result = await self.curator(FakeSource(scenario_photos()), config=config).curate("dubai-marina")
        self.assertEqual([p.provider_ref for p in result.selected], ["a", "d"])

        small = [make_photo("s1", 1200, 800), make_photo("s2", 1000, 700)]
        result = await self.curator(FakeSource(small), config=config).curate("jlt-small", ["x"])
        self.assertEqual(len(result.selected), 2)

    async def test_off_topic_stock_photos_are_gated(self):
        photos = [
            make_photo("desert", 3000, 2000, likes=900, description="Sunset over sand dunes"),
            make_photo("marina", 2000, 1300, description="Dubai Marina towers"),
        ]
        result = await self.curator(FakeSource(photos)).curate("dubai-marina")
        self.assertEqual([p.provider_ref for p in result.selected], ["marina"])

    async def test_negative_keywords_push_photos_down(self):
        photos = [
            make_photo("office", 3000, 2000, likes=600, description="Dubai marina office desk laptop"),
            make_photo("view", 2500, 1667, likes=200, description="Dubai Marina view"),
        ]
        result = await self.curator(FakeSource(photos)).curate("dubai-marina")
        self.assertEqual(result.selected[0].provider_ref, "view")
        self.assertEqual(result.selected[1].score, 40)

    async def test_duplicate_refs_are_dropped(self):
        photos = [make_photo("a", 3000, 2000), make_photo("a", 3000, 2000)]
        result = await self.curator(FakeSource(photos)).curate("dubai-marina")
        self.assertEqual(result.candidates_found, 1)

    async def test_no_candidates_leaves_store_untouched(self):
        result = await self.curator(FakeSource([])).curate("dubai-marina")
        self.assertFalse(result.success)
        self.assertEqual(self.store.get_candidates("dubai-marina"), [])
        self.assertIsNone(self.store.get_active_image("dubai-marina"))

    async def test_failing_provider_does_not_block_others(self):
        good = FakeSource(scenario_photos())
        bad = FakeSource(error=ProviderError("google_places", "HTTP 500"), provider=PhotoProvider.GOOGLE_PLACES)
        result = await self.curator(bad, good).curate("dubai-marina")
        self.assertTrue(result.success)
        self.assertIn("google_places", result.provider_errors)
        self.assertEqual(result.provider_counts, {"unsplash": 4})

    async def test_queries_are_capped(self):
        source = FakeSource(scenario_photos())
        await self.curator(source).curate("dubai-marina", [f"q{i}" for i in range(9)])
        self.assertEqual(len(source.calls[0][1]), 5)

    async def test_exhaustion_propagates(self):
        source = FakeSource(error=ProviderExhaustedError("unsplash", "rate limit reached", status=429))
        with self.assertRaises(ProviderExhaustedError):
            await self.curator(source).curate("dubai-marina")


class TestCurateBatch(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.config = CurationConfig(min_width=0, min_height=0, pacing=0, batch_cap=5)

    async def test_cap_reports_remaining(self):
        curator = PhotoCurator([FakeSource(scenario_photos())], self.store, config=self.config)
        targets = [(f"dubai-{i}", ["Dubai skyline"]) for i in range(7)]
        batch = await curator.curate_batch(targets)

        self.assertEqual(len(batch.results), 5)
        self.assertEqual(batch.succeeded, 5)
        self.assertEqual(batch.remaining, ["dubai-5", "dubai-6"])
        self.assertIsNone(batch.exhausted)

    async def test_exhaustion_stops_batch(self):
        class FlakySource(FakeSource):
            async def candidates(self, client, slug, queries):
                if slug == "dubai-2":
                    raise ProviderExhaustedError("unsplash", "rate limit reached", status=429)
                return await super().candidates(client, slug, queries)

        curator = PhotoCurator([FlakySource(scenario_photos())], self.store, config=self.config)
        targets = [(f"dubai-{i}", None) for i in range(6)]
        batch = await curator.curate_batch(targets)

        self.assertEqual([r.slug for r in batch.results], ["dubai-0", "dubai-1"])
        self.assertEqual(batch.exhausted, "unsplash")
        self.assertEqual(batch.remaining, ["dubai-2", "dubai-3", "dubai-4", "dubai-5"])


if __name__ == "__main__":
    unittest.main()
