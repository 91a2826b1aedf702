import unittest

from tests.helpers import make_photo
from uaewire.config import ProviderScoring, ScoringConfig, Tier
from uaewire.models import PhotoProvider
from uaewire.photos import PhotoScorer, passes_relevance_gate


class TestPhotoScoring(unittest.TestCase):
    def setUp(self):
        self.scorer = PhotoScorer()

    def test_google_places_tiers(self):
        photo = make_photo("g1", 3000, 2000, provider=PhotoProvider.GOOGLE_PLACES, verified=True)
        self.assertEqual(self.scorer.score(photo), 90)
        photo = make_photo("g2", 1600, 1600, provider=PhotoProvider.GOOGLE_PLACES, verified=True)
        self.assertEqual(self.scorer.score(photo), 78)

    def test_unsplash_tiers(self):
        self.assertEqual(self.scorer.score(make_photo("u1", 3000, 2000, likes=600)), 85)
        self.assertEqual(self.scorer.score(make_photo("u2", 1500, 1000, likes=50)), 55)
        self.assertEqual(self.scorer.score(make_photo("u3", 1800, 1800, likes=150)), 65)

    def test_monotonic_in_width_and_likes(self):
        previous = -1.0
        for width in (800, 1599, 1600, 2399, 2400, 4000):
            score = self.scorer.score(make_photo("w", width, 1000, likes=0))
            self.assertGreaterEqual(score, previous)
            previous = score

        previous = -1.0
        for likes in (0, 99, 100, 499, 500, 10000):
            score = self.scorer.score(make_photo("l", 1000, 1000, likes=likes))
            self.assertGreaterEqual(score, previous)
            previous = score

    def test_unsorted_tiers_still_use_best_bonus(self):
        rules = ProviderScoring(
            base=50,
            resolution_tiers=[Tier(threshold=1600, bonus=10), Tier(threshold=2400, bonus=20)],
        )
        scorer = PhotoScorer(ScoringConfig(unsplash=rules))
        self.assertEqual(scorer.score(make_photo("u", 3000, 3000)), 70)

    def test_score_is_clamped(self):
        rules = ProviderScoring(
            base=95,
            resolution_tiers=[Tier(threshold=0, bonus=20)],
            landscape_bonus=10,
        )
        scorer = PhotoScorer(ScoringConfig(unsplash=rules))
        self.assertEqual(scorer.score(make_photo("u", 3000, 2000)), 100)

    def test_negative_penalty_is_capped(self):
        photo = make_photo("u", 3000, 2000, description="person typing on laptop in office")
        self.assertEqual(self.scorer.negative_penalty(photo, ["person", "typing", "laptop", "office"]), 45)
        photo = make_photo("u", 3000, 2000, description="coffee on a desk")
        self.assertEqual(self.scorer.negative_penalty(photo, ["coffee", "desk", "selfie"]), 30)

    def test_verified_photos_skip_penalty(self):
        photo = make_photo("g", 3000, 2000, description="office lobby", verified=True)
        self.assertEqual(self.scorer.negative_penalty(photo, ["office"]), 0)


class TestRelevanceGate(unittest.TestCase):
    def test_stock_photo_must_mention_place(self):
        photo = make_photo("u", 3000, 2000, description="Sunset over the desert")
        self.assertFalse(passes_relevance_gate(photo, ["dubai", "marina"]))
        photo = make_photo("u", 3000, 2000, description="Dubai Marina at night")
        self.assertTrue(passes_relevance_gate(photo, ["dubai", "marina"]))

    def test_provider_tags_count(self):
        photo = make_photo("u", 3000, 2000, description="City lights")
        photo = photo.model_copy(update={"provider_tags": ["Marina", "yachts"]})
        self.assertTrue(passes_relevance_gate(photo, ["marina"]))

    def test_verified_and_unrestricted_pass(self):
        verified = make_photo("g", 3000, 2000, description="", verified=True)
        self.assertTrue(passes_relevance_gate(verified, ["dubai"]))
        stock = make_photo("u", 3000, 2000, description="Anything")
        self.assertTrue(passes_relevance_gate(stock, []))


if __name__ == "__main__":
    unittest.main()
