import asyncio
import unittest

from uaewire.concurrency import gather_settled, pause


class TestGatherSettled(unittest.IsolatedAsyncioTestCase):
    async def test_failure_does_not_cancel_siblings(self):
        async def ok(value, delay=0.0):
            await asyncio.sleep(delay)
            return value

        async def fail():
            raise RuntimeError("provider down")

        results = await gather_settled([ok(1, 0.01), fail(), ok(3)], labels=["a", "b", "c"])

        self.assertEqual([r.label for r in results], ["a", "b", "c"])
        self.assertEqual([r.value for r in results if r.ok], [1, 3])
        self.assertFalse(results[1].ok)
        self.assertEqual(results[1].describe_error(), "provider down")

    async def test_timeout_is_per_task(self):
        async def slow():
            await asyncio.sleep(1)
            return "late"

        async def fast():
            return "early"

        results = await gather_settled([slow(), fast()], timeout=0.05)
        self.assertFalse(results[0].ok)
        self.assertEqual(results[0].describe_error(), "Timed out")
        self.assertEqual(results[1].value, "early")

    async def test_label_count_must_match(self):
        async def noop():
            return None

        coro = noop()
        with self.assertRaises(ValueError):
            await gather_settled([coro], labels=["a", "b"])
        coro.close()

    async def test_zero_pause_returns_immediately(self):
        await pause(0)


if __name__ == "__main__":
    unittest.main()
