"""
Application State
=================

Explicit application state for the tour client, plus the controller that
drives page changes, editor sessions and transient messages.

Nothing here is a module-level singleton: create an AppState, hand it to a
TourApp, and pass either to whatever needs them.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.tours.catalog import TourCatalog
from src.tours.editor import EditorSession
from src.tours.errors import NotFoundError, TourError, ValidationError
from src.tours.playback import PlaybackCursor

logger = logging.getLogger(__name__)

DEMO_USER_ID = 'mock-user-123'

MSG_SHARE_NOT_IMPLEMENTED = 'Share functionality is not yet implemented.'


class Page(Enum):
    LANDING = 'landing'
    LOGIN = 'login'
    SIGNUP = 'signup'
    DASHBOARD = 'dashboard'
    EDITOR = 'editor'
    PLAYER = 'player'


@dataclass
class AppState:
    """Everything the client needs to render a screen."""

    catalog: TourCatalog = field(default_factory=TourCatalog.with_fixtures)
    page: Page = Page.LANDING
    user: Optional[str] = None
    theme: str = 'dark'
    message: str = ''
    editor: Optional[EditorSession] = None
    player: Optional[PlaybackCursor] = None


class TourApp:
    """
    Controller for the tour client.

    Actions never raise TourError to the caller; failures are reported
    through state.message instead.
    """

    def __init__(self, state: Optional[AppState] = None, scheduler=None, record_delay=None):
        self.state = state or AppState()
        self.scheduler = scheduler
        self.record_delay = record_delay
        if self.state.catalog.identity is None and self.state.catalog.store is not None:
            self.state.catalog.identity = self

    # IdentityProvider
    def current_user(self) -> Optional[str]:
        return self.state.user

    def _set_message(self, message: str):
        self.state.message = message

    def _report(self, error: TourError):
        logger.info("Action failed: %s", error)
        self._set_message(str(error))

    def dismiss_message(self):
        self.state.message = ''

    # ------------------------------------------------------------
    # Session / navigation
    # ------------------------------------------------------------

    def go_to(self, page: Page):
        self.state.page = page

    def login(self, email: str, password: str, signup: bool = False) -> bool:
        """Simulated authentication: any non-empty email and password succeeds."""
        try:
            if not email or not password:
                raise ValidationError('Please fill in all fields.')
            self.state.user = DEMO_USER_ID
            if self.state.catalog.store is not None:
                self.state.catalog.load()
        except TourError as e:
            self._report(e)
            return False

        self.state.page = Page.DASHBOARD
        self._set_message(f"Successfully {'signed up' if signup else 'logged in'}!")
        return True

    def logout(self):
        self._discard_editor()
        self.state.player = None
        self.state.user = None
        self.state.page = Page.LANDING

    def toggle_theme(self) -> str:
        self.state.theme = 'light' if self.state.theme == 'dark' else 'dark'
        return self.state.theme

    # ------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------

    def dashboard_summary(self) -> dict:
        catalog = self.state.catalog
        return {
            'total_views': catalog.total_views(),
            'total_tours': catalog.total_tours(),
            'total_shares': catalog.total_shares(),
        }

    def delete_tour(self, tour_id) -> bool:
        try:
            if not self.state.catalog.delete(tour_id):
                raise NotFoundError(tour_id=tour_id)
        except TourError as e:
            self._report(e)
            return False
        self._set_message('Tour deleted successfully!')
        return True

    def share_tour(self, tour_id):
        self._set_message(MSG_SHARE_NOT_IMPLEMENTED)

    def play_tour(self, tour_id) -> Optional[PlaybackCursor]:
        try:
            tour = self.state.catalog.get(tour_id)
            if tour is None:
                raise NotFoundError(tour_id=tour_id)
            if not tour.steps:
                raise ValidationError('This tour has no steps yet.')
        except TourError as e:
            self._report(e)
            return None
        self.state.player = PlaybackCursor(tour.steps, standalone=True)
        self.state.page = Page.PLAYER
        return self.state.player

    def close_player(self):
        self.state.player = None
        self.state.page = Page.DASHBOARD

    # ------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------

    def _open_editor(self, tour) -> EditorSession:
        self._discard_editor()
        self.state.editor = EditorSession(
            tour=tour,
            catalog=self.state.catalog,
            scheduler=self.scheduler,
            record_delay=self.record_delay,
            notify=self._set_message,
        )
        self.state.page = Page.EDITOR
        return self.state.editor

    def create_tour(self) -> EditorSession:
        return self._open_editor(None)

    def edit_tour(self, tour_id) -> Optional[EditorSession]:
        tour = self.state.catalog.get(tour_id)
        if tour is None:
            self._report(NotFoundError(tour_id=tour_id))
            return None
        return self._open_editor(tour)

    def save_editor(self):
        editor = self.state.editor
        if editor is None:
            return None
        was_new = editor.is_new
        try:
            saved = editor.save()
        except TourError as e:
            self._report(e)
            return None

        self.state.editor = None
        self.state.page = Page.DASHBOARD
        self._set_message('Tour created successfully!' if was_new else 'Tour updated successfully!')
        return saved

    def cancel_editor(self):
        editor = self.state.editor
        if editor is not None:
            try:
                editor.cancel()
            except TourError as e:
                self._report(e)
                return
        self.state.editor = None
        self.state.page = Page.DASHBOARD

    def _discard_editor(self):
        editor = self.state.editor
        if editor is not None and not editor.is_closed:
            # Leaving the editor page abandons the session, preview included
            editor.end_preview()
            editor.cancel()
        self.state.editor = None
