import asyncio
import unittest

import httpx

from uaewire.ingestion import GoogleNewsAdapter, NaverNewsAdapter, backfill_suffix
from uaewire.ingestion.naver import publisher_from_url, strip_html
from uaewire.models import Lane, NewsSource, Priority

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
<channel>
<title>"ADQ" - Google News</title>
<item>
  <title>ADQ buys stake in port operator - Reuters</title>
  <link>https://news.google.com/rss/articles/CBMiabc?oc=5</link>
  <pubDate>Mon, 06 Oct 2025 08:00:00 GMT</pubDate>
  <source url="https://www.reuters.com">Reuters</source>
  <media:content url="https://img.example.com/adq.jpg" medium="image"/>
</item>
<item>
  <title>ADQ expands logistics portfolio - Gulf News</title>
  <link>https://news.google.com/rss/articles/CBMidef?oc=5</link>
  <pubDate>Mon, 06 Oct 2025 07:00:00 GMT</pubDate>
  <source url="https://gulfnews.com">Gulf News</source>
</item>
<item>
  <title>Third item - Khaleej Times</title>
  <link>https://news.google.com/rss/articles/CBMighi?oc=5</link>
  <pubDate>Mon, 06 Oct 2025 06:00:00 GMT</pubDate>
  <source url="https://www.khaleejtimes.com">Khaleej Times</source>
</item>
</channel>
</rss>
"""


class TestGoogleNewsAdapter(unittest.IsolatedAsyncioTestCase):
    async def test_parses_feed(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=RSS)

        adapter = GoogleNewsAdapter(pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["ADQ"], lane=Lane.DEAL, result_cap=2)

        self.assertTrue(result.success)
        self.assertEqual(len(result.items), 2)
        first = result.items[0]
        self.assertEqual(first.title, "ADQ buys stake in port operator")
        self.assertEqual(first.publisher, "Reuters")
        self.assertEqual(first.priority, Priority.REUTERS)
        self.assertEqual(first.source, NewsSource.GOOGLE)
        self.assertEqual(first.tags, ["ADQ", "lane:deal"])
        self.assertEqual(first.image_url, "https://img.example.com/adq.jpg")
        self.assertEqual(first.published_at.hour, 8)
        self.assertEqual(result.items[1].priority, Priority.GULF_NEWS)

        params = seen[0].url.params
        self.assertEqual(params["q"], "ADQ")
        self.assertEqual(params["ceid"], "AE:en")

    async def test_korean_locale(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=RSS)

        adapter = GoogleNewsAdapter(locale="ko", pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["한국 UAE"], result_cap=1)
        self.assertEqual(seen[0].url.params["hl"], "ko")
        self.assertEqual(result.items[0].language, "ko")
        self.assertEqual(result.items[0].tags, ["한국 UAE"])

    async def test_failed_query_does_not_abort_batch(self):
        def handler(request):
            if request.url.params["q"] == "broken":
                return httpx.Response(503)
            return httpx.Response(200, text=RSS)

        adapter = GoogleNewsAdapter(pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["broken", "ADQ"], result_cap=3)

        self.assertEqual(result.queries_attempted, 2)
        self.assertEqual(len(result.items), 3)
        self.assertEqual(len(result.query_errors), 1)
        self.assertEqual(result.query_errors[0].query, "broken")
        self.assertEqual(result.query_errors[0].error, "HTTP 503")

    async def test_timeout_is_recorded(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        adapter = GoogleNewsAdapter(pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["ADQ"])
        self.assertEqual(result.items, [])
        self.assertEqual(result.query_errors[0].error, "Request timed out")

    async def test_deadline_skips_queries_not_yet_started(self):
        def handler(request):
            return httpx.Response(200, text=RSS)

        adapter = GoogleNewsAdapter(pacing=0.3, transport=httpx.MockTransport(handler))
        result = await adapter.search(["ADQ", "ADNOC", "ADIA"], result_cap=3, deadline=0.1)

        self.assertEqual(result.queries_attempted, 1)
        self.assertEqual(len(result.items), 3)
        self.assertEqual([e.query for e in result.query_errors], ["ADNOC", "ADIA"])
        self.assertEqual(result.query_errors[0].error, "Deadline reached before query ran")

    async def test_deadline_cuts_off_stalled_query(self):
        async def handler(request):
            await asyncio.sleep(10)
            return httpx.Response(200, text=RSS)

        adapter = GoogleNewsAdapter(pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["ADQ"], deadline=0.1)
        self.assertEqual(result.items, [])
        self.assertEqual(result.query_errors[0].error, "Request timed out")

    def test_unknown_locale(self):
        with self.assertRaises(ValueError):
            GoogleNewsAdapter(locale="fr")


def naver_payload(*items):
    return {"total": len(items), "start": 1, "display": len(items), "items": list(items)}


def naver_item(title, link, pub="Mon, 06 Oct 2025 17:00:00 +0900"):
    return {
        "title": title,
        "originallink": link,
        "link": "https://n.news.naver.com/article/001/0001",
        "description": "<b>UAE</b>와 한국 &amp; 협력",
        "pubDate": pub,
    }


class TestNaverNewsAdapter(unittest.IsolatedAsyncioTestCase):
    async def test_missing_credentials_makes_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        adapter = NaverNewsAdapter(None, pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["한국 UAE"], lane=Lane.KOREA_UAE)

        self.assertEqual(result.items, [])
        self.assertEqual(len(result.query_errors), 1)
        self.assertEqual(result.query_errors[0].query, "*")
        self.assertEqual(result.query_errors[0].lane, "korea_uae")

    async def test_search_normalizes_and_dedupes(self):
        seen = []
        item = naver_item("<b>한국</b> UAE 투자 &quot;확대&quot;", "https://www.hankyung.com/article/1")

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=naver_payload(item, item))

        adapter = NaverNewsAdapter(("id", "secret"), pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["한국 UAE 투자", "UAE 투자"], lane=Lane.KOREA_UAE, result_cap=10)

        self.assertEqual(len(result.items), 1)
        news = result.items[0]
        self.assertEqual(news.title, '한국 UAE 투자 "확대"')
        self.assertEqual(news.summary, "UAE와 한국 & 협력")
        self.assertEqual(news.publisher, "한국경제")
        self.assertEqual(news.source, NewsSource.NAVER)
        self.assertEqual(news.language, "ko")
        self.assertEqual(news.published_at.hour, 8)

        request = seen[0]
        self.assertEqual(request.headers["X-Naver-Client-Id"], "id")
        self.assertEqual(request.headers["X-Naver-Client-Secret"], "secret")
        self.assertEqual(request.url.params["display"], "10")
        self.assertEqual(request.url.params["sort"], "date")

    async def test_auth_failure_is_recorded(self):
        def handler(request):
            return httpx.Response(401, json={"errorMessage": "Authentication failed"})

        adapter = NaverNewsAdapter(("id", "bad"), pacing=0, transport=httpx.MockTransport(handler))
        result = await adapter.search(["UAE"])
        self.assertEqual(result.query_errors[0].error, "HTTP 401")


class TestHelpers(unittest.TestCase):
    def test_strip_html(self):
        self.assertEqual(strip_html("<b>ADNOC</b> &amp; KEPCO"), "ADNOC & KEPCO")

    def test_publisher_from_url(self):
        self.assertEqual(publisher_from_url("https://www.yna.co.kr/view/1"), "연합뉴스")
        self.assertEqual(publisher_from_url("https://www.example.kr/a"), "example.kr")
        self.assertEqual(publisher_from_url("https://NEWS.MT.CO.KR/view/2"), "머니투데이")
        self.assertEqual(publisher_from_url("https://hankyung.com/a"), "한국경제")
        self.assertIsNone(publisher_from_url(""))

    def test_backfill_suffix(self):
        self.assertEqual(backfill_suffix("2024-02"), " after:2024-02-01 before:2024-02-29")
        self.assertEqual(backfill_suffix("2025-11"), " after:2025-11-01 before:2025-11-30")


if __name__ == "__main__":
    unittest.main()
