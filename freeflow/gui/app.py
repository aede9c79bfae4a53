"""Main application window.

Onboarding -> Dive -> Completion, with "Dive again" looping back to a
fresh dive. The Tk mainloop is the timer host for every session.
"""

import tkinter as tk
from typing import Optional

from freeflow.core.logging import get_logger
from freeflow.engine.models import DiveOutcome, DiveSummary
from freeflow.engine.session import DiveSession
from freeflow.engine.variants import VariantConfig
from freeflow.gui.host import TkTimerHost
from freeflow.gui.screens import CompletionScreen, DiveScreen, OnboardingScreen, ScreenBase
from freeflow.gui.theme import apply_theme

logger = get_logger(__name__)


class FreeFlowApp:
    """Creates the root window and swaps between the three screens."""

    def __init__(self, variant: VariantConfig, time_scale: float = 1.0):
        self.variant = variant
        self.time_scale = time_scale
        self.root: Optional[tk.Tk] = None
        self._host: Optional[TkTimerHost] = None
        self._screen: Optional[ScreenBase] = None
        self._session: Optional[DiveSession] = None

    def run(self) -> None:
        """Start the application."""
        self._create_window()
        self._show_onboarding()

        assert self.root is not None
        logger.info("GUI ready, entering mainloop", extra={"context": {"variant": self.variant.name}})
        self.root.mainloop()

    def close(self) -> None:
        """Close application gracefully, abandoning any dive in progress."""
        assert self.root is not None
        if self._session is not None and self._session.is_active():
            self._session.end(DiveOutcome.ABANDONED)
        logger.info("Application closing")
        self.root.quit()
        self.root.destroy()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _create_window(self) -> None:
        self.root = tk.Tk()
        self.root.title("FreeFlow")
        self.root.geometry("420x800")
        self.root.minsize(380, 640)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        apply_theme(self.root)
        self._host = TkTimerHost(self.root, time_scale=self.time_scale)

    def _swap(self, screen: ScreenBase) -> None:
        if self._screen is not None:
            self._screen.destroy()
        self._screen = screen
        screen.show()

    def _show_onboarding(self) -> None:
        assert self.root is not None
        self._swap(OnboardingScreen(self.root, self.variant, on_start=self._start_dive))

    def _start_dive(self) -> None:
        assert self.root is not None and self._host is not None
        session = DiveSession(self.variant, self._host)
        session.on_end(self._on_dive_end)
        self._session = session
        self._swap(DiveScreen(self.root, session))
        session.start()

    def _on_dive_end(self, summary: DiveSummary) -> None:
        if self.root is None or summary.outcome is DiveOutcome.ABANDONED:
            return
        self._swap(CompletionScreen(self.root, summary, on_restart=self._start_dive))
