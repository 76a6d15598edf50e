"""
Application State Tests
=======================

Page flow, messages and dashboard numbers driven through TourApp.
"""

import pytest

from src.tours.app_state import (
    DEMO_USER_ID, MSG_SHARE_NOT_IMPLEMENTED, AppState, Page, TourApp,
)
from src.tours.catalog import TourCatalog
from src.tours.editor import MSG_RECORDING_FINISHED, MSG_RECORDING_STARTED


@pytest.fixture
def app(scheduler):
    return TourApp(scheduler=scheduler, record_delay=2.0)


@pytest.fixture
def logged_in(app):
    assert app.login('me@example.com', 'pw')
    return app


class TestLogin:
    def test_starts_on_landing(self, app):
        assert app.state.page is Page.LANDING
        assert app.state.user is None
        assert app.state.theme == 'dark'

    def test_login_success(self, app):
        assert app.login('me@example.com', 'pw') is True
        assert app.state.page is Page.DASHBOARD
        assert app.state.user == DEMO_USER_ID
        assert app.state.message == 'Successfully logged in!'

    def test_signup_message(self, app):
        app.login('me@example.com', 'pw', signup=True)
        assert app.state.message == 'Successfully signed up!'

    @pytest.mark.parametrize("email,password", [('', 'pw'), ('me@example.com', ''), ('', '')])
    def test_missing_fields(self, app, email, password):
        assert app.login(email, password) is False
        assert app.state.page is Page.LANDING
        assert app.state.message == 'Please fill in all fields.'

    def test_logout_discards_editor(self, logged_in):
        session = logged_in.create_tour()
        logged_in.logout()
        assert session.is_closed
        assert logged_in.state.editor is None
        assert logged_in.state.page is Page.LANDING
        assert logged_in.state.user is None

    def test_toggle_theme(self, app):
        assert app.toggle_theme() == 'light'
        assert app.toggle_theme() == 'dark'

    def test_login_loads_from_store(self, store, scheduler):
        store.seed_fixtures(DEMO_USER_ID)
        app = TourApp(AppState(catalog=TourCatalog(store=store)), scheduler=scheduler)
        app.login('me@example.com', 'pw')
        assert app.state.catalog.total_tours() == 2
        assert app.state.catalog.total_views() == 23


class TestDashboard:
    def test_summary(self, logged_in):
        assert logged_in.dashboard_summary() == {'total_views': 23, 'total_tours': 2, 'total_shares': 4}

    def test_delete_updates_summary(self, logged_in):
        assert logged_in.delete_tour('tour-2') is True
        assert logged_in.state.message == 'Tour deleted successfully!'
        assert logged_in.dashboard_summary()['total_views'] == 15

    def test_share_is_placeholder(self, logged_in):
        logged_in.share_tour('tour-1')
        assert logged_in.state.message == MSG_SHARE_NOT_IMPLEMENTED

    def test_dismiss_message(self, logged_in):
        logged_in.dismiss_message()
        assert logged_in.state.message == ''

    def test_delete_failure_reported(self, store, scheduler):
        app = TourApp(AppState(catalog=TourCatalog(store=store)), scheduler=scheduler)
        app.login('me@example.com', 'pw')
        assert app.delete_tour('missing') is False
        assert app.state.message == 'Tour not found'

    def test_delete_unknown_without_store_reported(self, logged_in):
        assert logged_in.delete_tour('missing') is False
        assert logged_in.state.message == 'Tour not found'
        assert logged_in.dashboard_summary()['total_tours'] == 2


class TestPlayer:
    def test_play_tour(self, logged_in):
        cursor = logged_in.play_tour('tour-1')
        assert logged_in.state.page is Page.PLAYER
        assert cursor.standalone is True
        cursor.next()
        cursor.next()
        assert cursor.advance_label == 'End Tour'
        assert cursor.next() is False
        assert cursor.completed

        logged_in.close_player()
        assert logged_in.state.page is Page.DASHBOARD
        assert logged_in.state.player is None

    def test_play_missing_tour(self, logged_in):
        assert logged_in.play_tour('missing') is None
        assert logged_in.state.page is Page.DASHBOARD
        assert logged_in.state.message == 'Tour not found'

    def test_play_empty_tour(self, logged_in):
        session = logged_in.create_tour()
        session.title = 'Empty'
        saved = logged_in.save_editor()
        assert logged_in.play_tour(saved.id) is None
        assert logged_in.state.message == 'This tour has no steps yet.'


class TestEditorFlow:
    def test_create_and_save(self, logged_in):
        session = logged_in.create_tour()
        assert logged_in.state.page is Page.EDITOR
        session.title = 'Demo'
        session.add_step()
        session.add_step()

        saved = logged_in.save_editor()
        assert logged_in.state.page is Page.DASHBOARD
        assert logged_in.state.editor is None
        assert logged_in.state.message == 'Tour created successfully!'
        assert logged_in.dashboard_summary()['total_tours'] == 3
        assert saved.is_public is False

    def test_edit_and_save(self, logged_in):
        session = logged_in.edit_tour('tour-1')
        session.title = 'Renamed'
        logged_in.save_editor()
        assert logged_in.state.message == 'Tour updated successfully!'
        assert logged_in.state.catalog.get('tour-1').title == 'Renamed'
        assert logged_in.dashboard_summary()['total_views'] == 23

    def test_edit_missing(self, logged_in):
        assert logged_in.edit_tour('missing') is None
        assert logged_in.state.page is Page.DASHBOARD

    def test_cancel(self, logged_in):
        session = logged_in.edit_tour('tour-1')
        session.title = 'Nope'
        logged_in.cancel_editor()
        assert logged_in.state.page is Page.DASHBOARD
        assert logged_in.state.catalog.get('tour-1').title == 'Getting Started with Arcade'

    def test_recording_messages(self, logged_in, scheduler):
        session = logged_in.create_tour()
        session.record()
        assert logged_in.state.message == MSG_RECORDING_STARTED
        scheduler.advance(2.0)
        assert logged_in.state.message == MSG_RECORDING_FINISHED

    def test_leaving_editor_mid_recording(self, logged_in, scheduler):
        session = logged_in.create_tour()
        session.record()
        logged_in.save_editor()
        scheduler.fire_all()
        assert logged_in.state.message == 'Tour created successfully!'
        assert logged_in.state.page is Page.DASHBOARD

    def test_save_while_previewing_is_reported(self, logged_in):
        session = logged_in.edit_tour('tour-2')
        session.preview()
        assert logged_in.save_editor() is None
        assert logged_in.state.page is Page.EDITOR
        assert logged_in.state.message == 'Close the preview before saving'

    def test_opening_editor_closes_previous_session(self, logged_in):
        first = logged_in.edit_tour('tour-2')
        first.preview()
        second = logged_in.create_tour()
        assert first.is_closed
        assert logged_in.state.editor is second
