"""
Arcade Tours - Tour Editing Core
=================================
Step sequencing, editing, preview/playback navigation and the simulated
recording flow.

  - models.py:    Step and Tour aggregate
  - editor.py:    EditorSession state machine (idle/recording/previewing)
  - playback.py:  PlaybackCursor for preview and standalone playback
  - catalog.py:   TourCatalog, the client-side collection of tours
  - recording.py: Cancellable timers for the recording flow
  - app_state.py: Explicit application state and controller
"""

from src.tours.errors import (
    TourError, ValidationError, NotFoundError, StaleSessionError,
    NotAuthenticatedError, OutOfRangeError,
)
from src.tours.models import Step, Tour, Analytics
from src.tours.playback import PlaybackCursor
from src.tours.editor import EditorSession, EditorState
from src.tours.catalog import TourCatalog

__all__ = [
    'TourError',
    'ValidationError',
    'NotFoundError',
    'StaleSessionError',
    'NotAuthenticatedError',
    'OutOfRangeError',
    'Step',
    'Tour',
    'Analytics',
    'PlaybackCursor',
    'EditorSession',
    'EditorState',
    'TourCatalog',
]
