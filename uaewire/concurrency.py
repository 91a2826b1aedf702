"""All-settled fan-out helpers."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Settled(Generic[T]):
    """Outcome of one task in a settled join."""

    label: str
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe_error(self) -> str:
        if self.error is None:
            return ""
        if isinstance(self.error, asyncio.TimeoutError):
            return "Timed out"
        return str(self.error) or type(self.error).__name__


async def gather_settled(
    aws: Sequence[Awaitable[T]],
    labels: Optional[Sequence[str]] = None,
    timeout: Optional[float] = None,
) -> List[Settled[T]]:
    """
    Run awaitables concurrently and report each outcome individually.

    A failing or timed-out task never cancels its siblings. Results are
    returned in input order.
    """
    if labels is None:
        labels = [str(i) for i in range(len(aws))]
    if len(labels) != len(aws):
        raise ValueError("labels must match awaitables")

    async def settle(label: str, aw: Awaitable[T]) -> Settled[T]:
        try:
            if timeout is not None:
                value = await asyncio.wait_for(aw, timeout=timeout)
            else:
                value = await aw
            return Settled(label=label, value=value)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            return Settled(label=label, error=e)

    return list(await asyncio.gather(*(settle(l, a) for l, a in zip(labels, aws))))


async def pause(seconds: float) -> None:
    """Pacing delay between sequential external calls; zero skips the sleep."""
    if seconds > 0:
        await asyncio.sleep(seconds)
