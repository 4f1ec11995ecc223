"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from topup_market.core.config import Settings, get_settings
from topup_market.infrastructure.database.session import get_engine, get_session_factory
from topup_market.modules.ledger.locks import AccountLockRegistry
from topup_market.modules.ledger.service import LedgerService


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    # shared by every request in this process
    account_locks: AccountLockRegistry = field(default_factory=AccountLockRegistry)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    def ledger_service(self) -> LedgerService:
        return LedgerService(
            session_factory=get_session_factory(),
            locks=self.account_locks,
            settings=self.settings.ledger,
        )


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
