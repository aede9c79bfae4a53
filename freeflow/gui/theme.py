"""Visual theme and styling.

Pure black lock-screen background, cyan accents, pale-blue
notification bubbles.
"""

import tkinter as tk
from tkinter import ttk

from freeflow.core.logging import get_logger

logger = get_logger(__name__)


# Color palette
COLORS = {
    "bg": "#000000",
    "fg": "#e0f7ff",
    "accent": "#00e5ff",
    "accent_dim": "#4fb3c4",
    "muted": "#5f7d86",
    "bubble": "#d9f2ff",
    "bubble_edge": "#ffffff",
    "bubble_text": "#1b2a33",
}

# Fonts
FONTS = {
    "title": ("Helvetica", 40, "bold"),
    "tagline": ("Helvetica", 16),
    "default": ("Helvetica", 12),
    "small": ("Helvetica", 10),
    "heading": ("Helvetica", 24, "bold"),
    "mono": ("Courier", 11),
}

# Notification card geometry
BUBBLE_WIDTH = 340
BUBBLE_HEIGHT = 72
STACK_OFFSET = 8  # Vertical gap between stacked cards
STACK_LIMIT = 6  # Cards drawn before the stack stops growing


def apply_theme(root: tk.Tk) -> None:
    """Apply theme colours and fonts to the root window."""
    root.configure(bg=COLORS["bg"])
    root.option_add("*Font", FONTS["default"])
    root.option_add("*Background", COLORS["bg"])
    root.option_add("*Foreground", COLORS["fg"])
    configure_styles()
    logger.debug("Theme applied")


def configure_styles() -> None:
    """Configure ttk widget styles."""
    style = ttk.Style()
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass  # fallback to default theme

    style.configure(".", background=COLORS["bg"], foreground=COLORS["fg"])
    style.configure("TFrame", background=COLORS["bg"])
    style.configure("TLabel", background=COLORS["bg"], foreground=COLORS["fg"])
    style.configure("Title.TLabel", font=FONTS["title"], foreground=COLORS["accent"])
    style.configure("Tagline.TLabel", font=FONTS["tagline"], foreground=COLORS["accent_dim"])
    style.configure("Heading.TLabel", font=FONTS["heading"])
    style.configure("Muted.TLabel", foreground=COLORS["muted"])
    style.configure("Mono.TLabel", font=FONTS["mono"])

    style.configure("Accent.TButton", padding=(16, 10), background=COLORS["accent"], foreground="black")
    style.map("Accent.TButton", background=[("active", "#00b8cc")])
