"""Fenêtre de l'assistant de discussion."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from newsdesk.chat import BOT, ChatMessage, ChatSession
from newsdesk.ui.theme import BOT_BUBBLE_COLOR, CARD_COLOR, STATUS_NEUTRAL_COLOR, USER_BUBBLE_COLOR


class ChatWindow:
    """Fenêtre flottante affichant le journal de ``ChatSession``."""

    def __init__(
        self,
        master: tk.Misc,
        *,
        delay_ms: int = 1000,
        session: ChatSession | None = None,
    ) -> None:
        self._session = session or ChatSession()
        self._delay_ms = delay_ms
        self._reply_after_id: str | None = None

        self.window = tk.Toplevel(master)
        self.window.title("Assistant NewsDesk")
        self.window.geometry("450x600")
        self.window.configure(bg=CARD_COLOR)
        self.window.columnconfigure(0, weight=1)
        self.window.rowconfigure(1, weight=1)
        self.window.protocol("WM_DELETE_WINDOW", self.close)

        header = ttk.Frame(self.window, style="Card.TFrame", padding=(16, 12))
        header.grid(row=0, column=0, sticky="we")
        ttk.Label(header, text="🤖 Assistant d'actualités", style="Section.TLabel").pack(anchor="w")
        ttk.Label(header, text="Réponses préenregistrées", style="Muted.TLabel").pack(anchor="w")

        self._log = tk.Text(
            self.window,
            wrap=tk.WORD,
            bg=CARD_COLOR,
            fg="#FFFFFF",
            relief=tk.FLAT,
            padx=12,
            pady=12,
            state=tk.DISABLED,
        )
        self._log.grid(row=1, column=0, sticky="nsew")
        self._log.tag_configure("user", justify=tk.RIGHT, background=USER_BUBBLE_COLOR, rmargin=8)
        self._log.tag_configure("bot", justify=tk.LEFT, background=BOT_BUBBLE_COLOR, lmargin1=8)
        self._log.tag_configure("meta", foreground=STATUS_NEUTRAL_COLOR, font=("Helvetica", 9))

        footer = ttk.Frame(self.window, style="Card.TFrame", padding=(12, 10))
        footer.grid(row=2, column=0, sticky="we")
        footer.columnconfigure(0, weight=1)
        self._input_var = tk.StringVar()
        self._entry = ttk.Entry(footer, textvariable=self._input_var)
        self._entry.grid(row=0, column=0, sticky="we", ipady=4)
        self._entry.bind("<Return>", lambda _: self.send())
        self._send_button = ttk.Button(footer, text="Envoyer", style="Accent.TButton", command=self.send)
        self._send_button.grid(row=0, column=1, padx=(8, 0))
        self._typing_label = ttk.Label(footer, text="", style="Muted.TLabel")
        self._typing_label.grid(row=1, column=0, sticky="w", pady=(4, 0))

        for message in self._session.messages:
            self._append(message)
        self._entry.focus()

    @property
    def is_open(self) -> bool:
        return bool(self.window.winfo_exists())

    def focus(self) -> None:
        self.window.deiconify()
        self.window.lift()
        self._entry.focus()

    def _append(self, message: ChatMessage) -> None:
        tag = "bot" if message.sender == BOT else "user"
        self._log.configure(state=tk.NORMAL)
        self._log.insert(tk.END, f"{message.text}\n", tag)
        self._log.insert(tk.END, f"{message.timestamp:%H:%M}\n\n", ("meta", tag))
        self._log.configure(state=tk.DISABLED)
        self._log.see(tk.END)

    def send(self) -> None:
        text = self._input_var.get()
        message = self._session.send(text)
        if message is None:
            return
        self._input_var.set("")
        self._append(message)
        self._send_button.configure(state=tk.DISABLED)
        self._typing_label.configure(text="L'assistant écrit…")
        self._reply_after_id = self.window.after(self._delay_ms, lambda: self._reply(text))

    def _reply(self, text: str) -> None:
        self._reply_after_id = None
        self._append(self._session.reply(text))
        self._send_button.configure(state=tk.NORMAL)
        self._typing_label.configure(text="")

    def close(self) -> None:
        if self._reply_after_id:
            self.window.after_cancel(self._reply_after_id)
            self._reply_after_id = None
        if self.window.winfo_exists():
            self.window.destroy()
