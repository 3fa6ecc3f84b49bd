"""Async password hasher with bounded concurrency.

Each derivation allocates roughly ``memory_cost`` KiB, so an unbounded
number of concurrent hashes can exhaust memory. This wrapper runs the
blocking derivation in worker threads behind a semaphore.
"""

import asyncio
from typing import Any, Callable, TypeVar

from passhash.core.config import get_settings
from passhash.core.exceptions import InvalidParameterError
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.infrastructure.auth.password_hasher import ArgonPasswordHasher

T = TypeVar("T")


class BoundedPasswordHasher:
    """Run hash and verify off the event loop, at most N at a time.

    A derivation that has started always runs to completion in its thread.
    Cancelling the awaiting task only stops waiting for the result.
    """

    def __init__(self, hasher: ArgonPasswordHasher, max_concurrency: int) -> None:
        if isinstance(max_concurrency, bool) or not isinstance(max_concurrency, int) or max_concurrency < 1:
            raise InvalidParameterError(
                f"max_concurrency must be a positive integer, got {max_concurrency!r}"
            )
        self._hasher = hasher
        self._max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)

    @classmethod
    def from_settings(cls, settings: Any | None = None) -> "BoundedPasswordHasher":
        """Build a bounded hasher from the configured defaults and limit."""
        if settings is None:
            settings = get_settings()
        hasher = ArgonPasswordHasher(ArgonParameters.from_settings(settings))
        return cls(hasher, max_concurrency=settings.max_concurrency)

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        """Run func in a worker thread while holding a concurrency permit.

        The permit is released when the thread finishes, not when the caller
        stops waiting, so a cancelled call still counts against the limit
        until its derivation completes.
        """
        await self._semaphore.acquire()
        try:
            task = asyncio.ensure_future(asyncio.to_thread(func, *args))
        except BaseException:
            self._semaphore.release()
            raise
        task.add_done_callback(self._release)
        return await asyncio.shield(task)

    def _release(self, task: "asyncio.Future[Any]") -> None:
        self._semaphore.release()
        # Mark the outcome as retrieved when nobody is awaiting it any more
        if not task.cancelled():
            task.exception()

    async def hash(self, password: str | bytes) -> str:
        return await self._run(self._hasher.hash, password)

    async def verify(self, password: str | bytes, encoded_hash: str) -> bool:
        return await self._run(self._hasher.verify, password, encoded_hash)
