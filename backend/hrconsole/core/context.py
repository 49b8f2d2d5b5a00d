"""Console context: the signed-in session and the views opened for it."""

from __future__ import annotations

import logging

from hrconsole.core.config import Settings
from hrconsole.core.session import SessionStore
from hrconsole.models.auth import ConsoleSession
from hrconsole.services.employee_editor import EmployeeEditor
from hrconsole.services.hr_api_client import HrApiClient
from hrconsole.services.leave_aggregator import LeaveAggregator
from hrconsole.services.notifications import Notifier
from hrconsole.services.search_coordinator import SearchCoordinator

logger = logging.getLogger(__name__)


class ConsoleContext:
    """Holds the operator session and its views.

    The session is restored from the store on start, replaced on login and
    dropped on logout. Views are bound to one session and are rebuilt
    whenever it changes, so a logged-out context has none.
    """

    def __init__(self, settings: Settings, client: HrApiClient, store: SessionStore) -> None:
        self.settings = settings
        self.client = client
        self.store = store
        self.notifier = Notifier()
        self.session: ConsoleSession | None = None
        self.listing: SearchCoordinator | None = None
        self.editor: EmployeeEditor | None = None
        self.leaves: LeaveAggregator | None = None

    @property
    def authenticated(self) -> bool:
        return self.session is not None

    async def restore(self) -> None:
        session = self.store.load()
        if session is None:
            return
        self._open(session)
        logger.info("Restored session for user=%s", session.user.username)

    async def login(self, username: str, password: str) -> ConsoleSession:
        session = await self.client.login(username, password)
        await self._close_views()
        self.store.save(session)
        self._open(session)
        logger.info("User %s logged in", username)
        return session

    async def logout(self) -> None:
        if self.session is not None:
            logger.info("User %s logged out", self.session.user.username)
        await self._close_views()
        self.session = None
        self.store.clear()
        self.notifier = Notifier()

    async def close(self) -> None:
        await self._close_views()

    def _open(self, session: ConsoleSession) -> None:
        self.session = session
        self.notifier = Notifier()
        self.listing = SearchCoordinator(self.client, session, self.settings, self.notifier)
        self.editor = EmployeeEditor(self.client, session, self.settings, self.notifier)
        self.leaves = LeaveAggregator(self.client, session, self.settings, self.notifier)

    async def _close_views(self) -> None:
        if self.listing is not None:
            await self.listing.close()
        self.listing = None
        self.editor = None
        self.leaves = None
