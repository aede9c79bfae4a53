"""The three dive screens: onboarding, dive, completion.

Screens only draw. All dive state lives in DiveSession; the dive screen
subscribes to its sinks and forwards taps back into it.
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from freeflow.content.dive_summary import render_dive_summary
from freeflow.core.logging import get_logger
from freeflow.engine.models import DismissReason, DiveSummary, SpawnEvent
from freeflow.engine.session import DiveSession
from freeflow.engine.variants import VariantConfig
from freeflow.gui.theme import (
    BUBBLE_HEIGHT,
    BUBBLE_WIDTH,
    COLORS,
    FONTS,
    STACK_LIMIT,
    STACK_OFFSET,
)

logger = get_logger(__name__)


class ScreenBase:
    """A full-window frame that can be shown and torn down."""

    def __init__(self, parent: tk.Misc):
        self.parent = parent
        self.frame = ttk.Frame(parent)

    def show(self) -> None:
        self.frame.pack(fill=tk.BOTH, expand=True)

    def destroy(self) -> None:
        self.frame.destroy()


class OnboardingScreen(ScreenBase):
    """Title, tagline, variant blurb, Start Dive."""

    def __init__(self, parent: tk.Misc, variant: VariantConfig, on_start: Callable[[], None]):
        super().__init__(parent)
        self.variant = variant
        self._on_start = on_start
        self._build()

    def _build(self) -> None:
        ttk.Label(self.frame, text="FreeFlow", style="Title.TLabel").pack(pady=(80, 8))
        ttk.Label(
            self.frame, text="Allergy shot for your attention", style="Tagline.TLabel"
        ).pack()

        info = ttk.Frame(self.frame)
        info.pack(expand=True)
        minutes = int(self.variant.session_duration // 60)
        for line in (
            f"{minutes}-minute dive",
            f"0m → {self.variant.max_depth:.0f}m depth",
            self.variant.description,
        ):
            ttk.Label(info, text=line, wraplength=360, justify=tk.CENTER).pack(pady=6)

        ttk.Button(
            self.frame, text="Start Dive", style="Accent.TButton", command=self._on_start
        ).pack(fill=tk.X, padx=40, pady=(0, 60))


class DiveScreen(ScreenBase):
    """Black lock screen with a stack of notification cards.

    Newest card sits in front. Clicking a card reports a tap.
    """

    def __init__(self, parent: tk.Misc, session: DiveSession):
        super().__init__(parent)
        self.session = session
        self._status_var = tk.StringVar(value="00:00  ·  0.0m")
        self._canvas: Optional[tk.Canvas] = None
        self._build()

        session.on_spawn(self._on_spawn)
        session.on_dismiss(self._on_dismiss)
        session.on_tick(self._on_tick)

    def _build(self) -> None:
        ttk.Label(self.frame, textvariable=self._status_var, style="Muted.TLabel").pack(
            pady=(24, 0)
        )
        self._canvas = tk.Canvas(self.frame, bg=COLORS["bg"], highlightthickness=0)
        self._canvas.pack(fill=tk.BOTH, expand=True)

    def _on_tick(self, elapsed: float, depth: float) -> None:
        label = f"{self.session.elapsed_display()}  ·  {depth:.1f}m"
        if self.session.budget is not None:
            label += f"  ·  {self.session.budget.remaining} checks left"
        self._status_var.set(label)

    def _on_spawn(self, event: SpawnEvent) -> None:
        self._redraw()

    def _on_dismiss(self, event: SpawnEvent, reason: DismissReason) -> None:
        self._redraw()

    def _redraw(self) -> None:
        canvas = self._canvas
        if canvas is None:
            return
        canvas.delete("card")
        width = canvas.winfo_width() or 420
        height = canvas.winfo_height() or 700
        left = (width - BUBBLE_WIDTH) // 2
        bottom = int(height * 0.85)

        live = self.session.live_events[-STACK_LIMIT:]
        # Newest first; each older card is lowered beneath the ones before it
        for depth_index, event in enumerate(reversed(live)):
            top = bottom - BUBBLE_HEIGHT - depth_index * STACK_OFFSET
            tag = f"card-{event.id}"
            canvas.create_rectangle(
                left,
                top,
                left + BUBBLE_WIDTH,
                top + BUBBLE_HEIGHT,
                fill=COLORS["bubble"],
                outline=COLORS["bubble_edge"],
                tags=("card", tag),
            )
            canvas.create_text(
                left + 16,
                top + BUBBLE_HEIGHT // 2,
                anchor=tk.W,
                text="New notification",
                fill=COLORS["bubble_text"],
                font=FONTS["default"],
                tags=("card", tag),
            )
            canvas.tag_bind(tag, "<Button-1>", lambda _e, eid=event.id: self._tap(eid))
            canvas.tag_lower(tag)

    def _tap(self, event_id: str) -> None:
        self.session.record_interaction(event_id)


class CompletionScreen(ScreenBase):
    """Tier label in its colour, the rendered report, Dive again."""

    def __init__(self, parent: tk.Misc, summary: DiveSummary, on_restart: Callable[[], None]):
        super().__init__(parent)
        self.summary = summary
        self._on_restart = on_restart
        self._build()

    def _build(self) -> None:
        tier = self.summary.tier
        tk.Label(
            self.frame,
            text=tier.label,
            font=FONTS["heading"],
            fg=tier.color,
            bg=COLORS["bg"],
        ).pack(pady=(60, 12))
        ttk.Label(
            self.frame,
            text=render_dive_summary(self.summary),
            style="Mono.TLabel",
            justify=tk.LEFT,
        ).pack(padx=24, expand=True)
        ttk.Button(
            self.frame, text="Dive again", style="Accent.TButton", command=self._on_restart
        ).pack(fill=tk.X, padx=40, pady=(0, 60))
