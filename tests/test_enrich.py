import base64
import unittest

import httpx

from tests.helpers import make_item
from uaewire.ingestion import PreviewEnricher
from uaewire.ingestion.enrich import decode_google_news_url, find_preview_image

PUBLISHER_URL = "https://www.reuters.com/world/middle-east/adq-port-stake-2025-10-06/"


def google_news_link(target: str) -> str:
    payload = b"\x08\x13\x22\x2b" + target.encode("utf-8") + b"\xd2\x01\x00"
    encoded = base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")
    return f"https://news.google.com/rss/articles/{encoded}?oc=5"


def page(image: str) -> str:
    return (
        "<html><head><title>ADQ takes stake</title>"
        f'<meta property="og:image" content="{image}"/>'
        "</head><body><p>Story body.</p></body></html>"
    )


class TestDecoding(unittest.TestCase):
    def test_decodes_publisher_url(self):
        self.assertEqual(decode_google_news_url(google_news_link(PUBLISHER_URL)), PUBLISHER_URL)

    def test_non_article_link(self):
        self.assertIsNone(decode_google_news_url("https://news.google.com/topics/abc"))

    def test_find_preview_image(self):
        html = page("https://cdn.example.com/lead.jpg")
        self.assertEqual(find_preview_image(html, "https://example.com/a"), "https://cdn.example.com/lead.jpg")

    def test_missing_image(self):
        html = "<html><head><title>No image</title></head><body></body></html>"
        self.assertIsNone(find_preview_image(html, "https://example.com/a"))


class TestPreviewEnricher(unittest.IsolatedAsyncioTestCase):
    async def test_resolves_and_attaches_image(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text=page("https://cdn.example.com/lead.jpg"))

        enricher = PreviewEnricher(pacing=0, transport=httpx.MockTransport(handler))
        item = make_item("ADQ takes stake", url=google_news_link(PUBLISHER_URL))
        result = await enricher.enrich([item], limit=5)

        self.assertEqual(result.enriched, 1)
        self.assertEqual(result.items[0].url, PUBLISHER_URL)
        self.assertEqual(result.items[0].image_url, "https://cdn.example.com/lead.jpg")
        self.assertEqual(requested, [PUBLISHER_URL])

    async def test_limit_and_failures(self):
        def handler(request):
            if "broken" in str(request.url):
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text=page("https://cdn.example.com/x.jpg"))

        enricher = PreviewEnricher(pacing=0, batch_size=2, transport=httpx.MockTransport(handler))
        items = [
            make_item("one", url="https://example.com/one"),
            make_item("two", url="https://example.com/broken"),
            make_item("three", url="https://example.com/three"),
            make_item("four", url="https://example.com/four"),
        ]
        result = await enricher.enrich(items, limit=3)

        self.assertEqual(result.attempted, 3)
        self.assertEqual(result.enriched, 2)
        self.assertEqual(result.unenriched, 1)
        self.assertEqual([i.title for i in result.items], ["one", "two", "three", "four"])
        self.assertIsNone(result.items[1].image_url)
        self.assertIsNone(result.items[3].image_url)

    async def test_existing_image_is_kept(self):
        def handler(request):
            raise AssertionError("no request expected")

        enricher = PreviewEnricher(pacing=0, transport=httpx.MockTransport(handler))
        item = make_item("x").model_copy(update={"image_url": "https://img.example.com/own.jpg"})
        result = await enricher.enrich([item])
        self.assertEqual(result.items[0].image_url, "https://img.example.com/own.jpg")
        self.assertEqual(result.enriched, 0)


if __name__ == "__main__":
    unittest.main()
