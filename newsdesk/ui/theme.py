"""Couleurs et styles ttk partagés par toutes les fenêtres."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

ACCENT_COLOR = "#3B82F6"
BACKGROUND_COLOR = "#121212"
CARD_COLOR = "#181818"
STATUS_NEUTRAL_COLOR = "#B3B3B3"
STATUS_ERROR_COLOR = "#F87171"
STATUS_SUCCESS_COLOR = "#10B981"
LISTBOX_SELECTION_FG = "#FFFFFF"
USER_BUBBLE_COLOR = "#3B82F6"
BOT_BUBBLE_COLOR = "#2B2B2B"


def configure_styles(root: tk.Misc) -> None:
    style = ttk.Style()
    style.configure("Main.TFrame", background=BACKGROUND_COLOR)
    style.configure("Header.TFrame", background=BACKGROUND_COLOR)
    style.configure("Card.TFrame", background=CARD_COLOR)
    style.configure(
        "HeaderTitle.TLabel",
        background=BACKGROUND_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 20, "bold"),
    )
    style.configure(
        "PageTitle.TLabel",
        background=BACKGROUND_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 18, "bold"),
    )
    style.configure(
        "Subtitle.TLabel",
        background=BACKGROUND_COLOR,
        foreground=STATUS_NEUTRAL_COLOR,
        font=("Helvetica", 11),
    )
    style.configure(
        "Section.TLabel",
        background=CARD_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 12, "bold"),
    )
    style.configure(
        "Body.TLabel",
        background=CARD_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 11),
    )
    style.configure(
        "Muted.TLabel",
        background=CARD_COLOR,
        foreground=STATUS_NEUTRAL_COLOR,
        font=("Helvetica", 10),
    )
    style.configure(
        "Error.TLabel",
        background=CARD_COLOR,
        foreground=STATUS_ERROR_COLOR,
        font=("Helvetica", 11),
    )
    style.configure(
        "Success.TLabel",
        background=CARD_COLOR,
        foreground=STATUS_SUCCESS_COLOR,
        font=("Helvetica", 11),
    )
    style.configure(
        "Status.TLabel",
        background=BACKGROUND_COLOR,
        foreground=STATUS_NEUTRAL_COLOR,
        font=("Helvetica", 11),
    )
    style.configure("Accent.TButton", font=("Helvetica", 11, "bold"))
    style.map(
        "Accent.TButton",
        background=[("active", "#60A5FA"), ("pressed", "#2563EB")],
    )
    style.configure("TButton", padding=(16, 8))
    style.map("TButton", background=[("disabled", "#2B2B2B")])
    style.configure(
        "Vertical.TScrollbar",
        troughcolor=CARD_COLOR,
        background=CARD_COLOR,
        bordercolor=CARD_COLOR,
    )
    style.configure(
        "Profile.TLabel",
        background=BACKGROUND_COLOR,
        foreground="#FFFFFF",
        font=("Helvetica", 12, "bold"),
        padding=4,
    )
    style.configure("Treeview", rowheight=28)
    root.option_add("*Font", "Helvetica 11")
