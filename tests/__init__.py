"""
Arcade Tours Test Suite

Test Categories:
- Models: Step/Tour invariants and serialization
- Editor: Session state machine and the recording flow
- Playback: Cursor bounds and completion
- Catalog: Upsert/remove and aggregate counters
- Store: SQLite persistence
- API: Tour and auth endpoints

Run all tests:
    python run.py test

Run specific test file:
    pytest tests/test_editor_session.py
"""
