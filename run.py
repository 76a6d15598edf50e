"""
Arcade Tours - Main Runner Script
==================================

Properly run any module from the project root.
Handles Python path setup automatically.

Usage:
    python run.py api               # Start the Tour API (uvicorn, port 5000)
    python run.py init-db           # Create database tables
    python run.py seed <owner_id>   # Insert the sample tours for an owner
    python run.py play [args...]    # Standalone terminal player
    python run.py test              # Run all tests
"""

import sys
import os
import logging

# Add project root to Python path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)


def main():
    """Main entry point"""

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1].lower()

    # Remove command from sys.argv so submodules get correct args
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    from config.settings import settings
    handlers = [logging.StreamHandler()]
    if settings.LOG_TO_FILE:
        os.makedirs(os.path.dirname(settings.LOG_FILE) or '.', exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        handlers=handlers,
    )

    if command == 'api':
        import uvicorn
        uvicorn.run('apps.tour_portal.api.main:app', host='127.0.0.1',
                    port=int(os.getenv('PORT', 5000)), reload=settings.is_development)

    elif command == 'init-db':
        from src.database.tour_store import SQLiteTourStore
        store = SQLiteTourStore(settings.database_path)
        store.init_schema()
        print(f"Database ready: {settings.database_path}")

    elif command == 'seed':
        if not sys.argv[1:]:
            print("Usage: python run.py seed <owner_id>")
            sys.exit(1)
        from src.database.tour_store import SQLiteTourStore
        store = SQLiteTourStore(settings.database_path)
        store.init_schema()
        created = store.seed_fixtures(sys.argv[1])
        print(f"Seeded {created} sample tour(s) for {sys.argv[1]}")

    elif command == 'play':
        from scripts.play_tour import main as play_main
        sys.exit(play_main(sys.argv[1:]))

    elif command == 'test':
        import pytest
        sys.exit(pytest.main(['tests', '-v'] + sys.argv[1:]))

    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
