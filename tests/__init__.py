"""FreeFlow Test Suite.

Test organization mirrors the freeflow/ package:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_cli.py          # Entry point
    ├── test_core/           # Config, logging, exceptions, timers
    ├── test_engine/         # Scheduler, session, depth, budget, tiers
    ├── test_gui/            # GUI structure and Tk host
    └── test_content/        # Completion report

Markers:
    - @pytest.mark.slow: Tests taking > 1 second
    - @pytest.mark.realtime: Tests that sleep on the wall clock
"""
