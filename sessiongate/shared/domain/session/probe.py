"""One-time read of cached accounts at mount."""

from __future__ import annotations

import logging
from typing import Optional

from sessiongate.shared.core.errors import ProbeError
from sessiongate.shared.domain.identity.protocols import IdentityClient

from .state import ProbeResolved
from .store import SessionStateStore

logger = logging.getLogger(__name__)


class InitialProbe:
    """Seeds the store from the provider's account cache.

    Runs at most once per mount. No retry, no polling.
    """

    def __init__(self, client: IdentityClient, store: SessionStateStore) -> None:
        self.client = client
        self.store = store
        self._result: Optional[ProbeResolved] = None
        self._ran = False

    @property
    def result(self) -> Optional[ProbeResolved]:
        return self._result

    def run(self) -> bool:
        """Enumerate cached accounts and apply the result.

        Returns:
            True if the probe decided the session, False if it ran after an
            event had already done so, or had already run

        Raises:
            ProbeError: If the identity client failed to enumerate accounts
        """
        if self._ran:
            logger.debug("InitialProbe already ran for this mount")
            return False
        self._ran = True

        try:
            accounts = tuple(self.client.enumerate_accounts())
        except Exception as exc:
            raise ProbeError(
                f"Could not read cached accounts: {exc}",
                details={"exception": type(exc).__name__},
            ) from exc

        logger.info(f"InitialProbe found {len(accounts)} cached account(s)")
        self._result = ProbeResolved(accounts)
        return self.store.apply(self._result)
