"""Per-account exclusive access within one process."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from .exceptions import LedgerConflictError

logger = logging.getLogger(__name__)


class AccountLockRegistry:
    """Hands out one ``asyncio.Lock`` per account id.

    Locks are held weakly and disappear once nobody waits on them, so the
    registry does not grow with the number of accounts ever touched.
    Different accounts never share a lock.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, account_id: str) -> asyncio.Lock:
        lock = self._locks.get(account_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[account_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, account_id: str, timeout: float | None = None) -> AsyncIterator[None]:
        lock = self.lock_for(account_id)
        try:
            await asyncio.wait_for(lock.acquire(), timeout)
        except asyncio.TimeoutError:
            logger.warning("Timed out waiting %.1fs for account %s", timeout or 0, account_id)
            raise LedgerConflictError(
                f"account {account_id} is busy, retry the request",
                account_id=account_id,
            ) from None
        try:
            yield
        finally:
            lock.release()

    def __len__(self) -> int:
        return len(self._locks)
