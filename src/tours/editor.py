"""
Tour Editor Session
===================

In-memory editing surface over one tour. The session works on a private
copy of the tour; the catalog only sees the result when save() is called.

States:
    IDLE -> RECORDING     record()
    RECORDING -> IDLE     recording timer fires, a recorded step is appended
    IDLE -> PREVIEWING    preview()   (needs at least one step)
    PREVIEWING -> IDLE    end_preview()
    IDLE -> CLOSED        save() / cancel()

save() and cancel() are also accepted while RECORDING. cancel() drops the
pending timer at once; save() drops it only after the tour was persisted,
so a failed save leaves the recording running. A timer that fires anyway
after the session closed is ignored.

Usage:
    session = EditorSession(tour=None, catalog=catalog)
    session.title = 'Onboarding'
    step = session.add_step()
    session.update_step(step.id, 'Click here to begin')
    cursor = session.preview()
    cursor.next()
    session.end_preview()
    saved = session.save()
"""

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Tuple

from config.settings import settings
from src.tours.errors import StaleSessionError, ValidationError
from src.tours.models import Analytics, Step, Tour, new_id
from src.tours.playback import PlaybackCursor
from src.tours.recording import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

DEFAULT_STEP_TEXT = 'Add your text here.'
RECORDED_STEP_TEXT = 'This is a recorded step.'

MSG_RECORDING_STARTED = 'Screen recording started...'
MSG_RECORDING_FINISHED = 'Recording finished and a step was added.'


class EditorState(Enum):
    IDLE = 'idle'
    RECORDING = 'recording'
    PREVIEWING = 'previewing'
    CLOSED = 'closed'


class EditorSession:
    """
    Editing session for a single tour.

    Args:
        tour: Tour to edit, or None to create a new one
        catalog: TourCatalog that receives the result of save()
        scheduler: Scheduler for the recording timer (default: threads)
        record_delay: Seconds a simulated recording takes
        notify: Callback receiving transient user-facing messages
    """

    def __init__(self, tour: Optional[Tour] = None, catalog=None,
                 scheduler: Optional[Scheduler] = None,
                 record_delay: Optional[float] = None,
                 notify: Optional[Callable[[str], None]] = None):
        self.catalog = catalog
        self.scheduler = scheduler or ThreadingScheduler()
        self.record_delay = settings.RECORDING_DELAY_SECONDS if record_delay is None else record_delay
        self.notify = notify

        if tour is not None:
            self._working = tour.copy()
        else:
            self._working = Tour(title='', steps=[], is_public=False)

        self.state = EditorState.IDLE
        self.cursor: Optional[PlaybackCursor] = None

        self._lock = threading.RLock()
        self._recording_handle = None
        self._recording_generation = 0

    # ------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._working.title

    @title.setter
    def title(self, value: str):
        with self._lock:
            self._require_editable()
            self._working.title = value

    @property
    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._working.steps)

    @property
    def tour_id(self) -> Optional[str]:
        return self._working.id

    @property
    def is_new(self) -> bool:
        return self._working.id is None

    @property
    def is_recording(self) -> bool:
        return self.state is EditorState.RECORDING

    @property
    def is_previewing(self) -> bool:
        return self.state is EditorState.PREVIEWING

    @property
    def is_closed(self) -> bool:
        return self.state is EditorState.CLOSED

    @property
    def current_step_index(self) -> Optional[int]:
        """Preview position, or None outside preview."""
        if self.cursor is None:
            return None
        return self.cursor.step_index

    # ------------------------------------------------------------
    # Step editing
    # ------------------------------------------------------------

    def add_step(self, text: Optional[str] = None, image: Optional[str] = None) -> Step:
        with self._lock:
            self._require_editable()
            return self._append_step(DEFAULT_STEP_TEXT if text is None else text, image)

    def update_step(self, step_id, text: str) -> None:
        with self._lock:
            self._require_editable()
            self._working.update_step_text(step_id, text)

    def delete_step(self, step_id) -> None:
        with self._lock:
            self._require_editable()
            self._working.remove_step(step_id)

    def _append_step(self, text, image=None):
        if image is None:
            image = settings.placeholder_image(f'Screenshot {len(self._working.steps) + 1}')
        return self._working.add_step(Step(text=text, image=image))

    # ------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------

    def record(self) -> None:
        """Start a simulated screen recording."""
        with self._lock:
            self._require_open()
            if self.state is not EditorState.IDLE:
                raise ValidationError(f"Cannot start recording while {self.state.value}")

            self._recording_generation += 1
            generation = self._recording_generation
            self.state = EditorState.RECORDING
            self._recording_handle = self.scheduler.call_later(
                self.record_delay, lambda: self._finish_recording(generation)
            )
            logger.info("Recording started (%.1fs)", self.record_delay)
        self._notify(MSG_RECORDING_STARTED)

    def _finish_recording(self, generation: int) -> None:
        try:
            with self._lock:
                self._check_recording(generation)
                self._recording_handle = None
                self.state = EditorState.IDLE
                self._append_step(RECORDED_STEP_TEXT)
        except StaleSessionError as e:
            logger.debug("Ignoring recording completion: %s", e)
            return

        logger.info("Recording finished, %d steps", len(self._working.steps))
        self._notify(MSG_RECORDING_FINISHED)

    def _check_recording(self, generation: int) -> None:
        if self.state is EditorState.CLOSED:
            raise StaleSessionError("Editor session already ended")
        if self.state is not EditorState.RECORDING or generation != self._recording_generation:
            raise StaleSessionError("Recording was superseded")

    def _stop_recording(self) -> None:
        if self._recording_handle is not None:
            self._recording_handle.cancel()
            self._recording_handle = None
            logger.info("Pending recording cancelled")

    # ------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------

    def preview(self) -> PlaybackCursor:
        """Enter preview mode at the first step."""
        with self._lock:
            self._require_open()
            if self.state is not EditorState.IDLE:
                raise ValidationError(f"Cannot preview while {self.state.value}")
            if not self._working.steps:
                raise ValidationError("Add at least one step before previewing")

            self.cursor = PlaybackCursor(self._working.steps, standalone=False)
            self.state = EditorState.PREVIEWING
            return self.cursor

    def end_preview(self) -> None:
        with self._lock:
            self._require_open()
            if self.state is not EditorState.PREVIEWING:
                return
            self.cursor = None
            self.state = EditorState.IDLE

    # ------------------------------------------------------------
    # Session end
    # ------------------------------------------------------------

    def save(self) -> Tour:
        """
        Hand the working copy to the catalog and end the session.

        New tours get an id, zeroed analytics, is_public=False and a fresh
        created_at. Existing tours keep their id, analytics and is_public.
        If the catalog raises, the session stays open and unchanged.
        """
        with self._lock:
            self._require_open()
            if self.state is EditorState.PREVIEWING:
                raise ValidationError("Close the preview before saving")
            is_new = self._working.id is None
            if is_new:
                tour = Tour(
                    id=new_id(),
                    title=self._working.title,
                    steps=[Step(id=s.id, text=s.text, image=s.image) for s in self._working.steps],
                    analytics=Analytics(views=0, shares=0),
                    is_public=False,
                    created_at=datetime.now(),
                )
            else:
                tour = self._working.copy()

        # Persist outside the lock; a failure leaves the session and any
        # pending recording exactly as they were.
        if self.catalog is None:
            saved = tour
        elif is_new:
            saved = self.catalog.create(tour)
        else:
            saved = self.catalog.update(tour)

        with self._lock:
            self._stop_recording()
            self._close()
        logger.info("Editor session saved tour %s", saved.id)
        return saved

    def cancel(self) -> None:
        """Discard the working copy without touching the catalog."""
        with self._lock:
            self._require_open()
            if self.state is EditorState.PREVIEWING:
                raise ValidationError("Close the preview before cancelling")
            self._stop_recording()
            self._close()
            logger.info("Editor session cancelled")

    def _close(self):
        self.cursor = None
        self.state = EditorState.CLOSED

    # ------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------

    def _require_open(self):
        if self.state is EditorState.CLOSED:
            raise StaleSessionError("Editor session already ended")

    def _require_editable(self):
        self._require_open()
        if self.state is EditorState.PREVIEWING:
            raise ValidationError("Return from preview to edit steps")

    def _notify(self, message: str):
        if self.notify is not None:
            self.notify(message)
