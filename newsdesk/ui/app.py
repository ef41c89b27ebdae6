"""Interface Tkinter principale."""

from __future__ import annotations

import io
import logging
import queue
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Callable
from urllib.request import urlopen

import sv_ttk
from PIL import Image, ImageDraw, ImageTk

from newsdesk.config import AppConfig
from newsdesk.routing import Page, Router
from newsdesk.services import NewsApi, SessionStore
from newsdesk.state import SessionState
from newsdesk.tasks import Lifecycle, TaskRunner
from newsdesk.ui.chat import ChatWindow
from newsdesk.ui.pages import (
    AppContext,
    ArticlePage,
    FeedPage,
    LoginPage,
    ProfilePage,
    RegisterPage,
    SavedPage,
    TrendingPage,
)
from newsdesk.ui.theme import (
    BACKGROUND_COLOR,
    STATUS_ERROR_COLOR,
    STATUS_NEUTRAL_COLOR,
    STATUS_SUCCESS_COLOR,
    configure_styles,
)
from newsdesk.views.profile import initials

logger = logging.getLogger(__name__)

WINDOW_VERTICAL_MARGIN = 80
HEADER_HEIGHT = 72
DISPATCH_INTERVAL_MS = 50
NOTIFICATION_DURATION_MS = 4000
AVATAR_SIZE = 40

NAVIGATION = (
    ("Fil", "feed"),
    ("Enregistrés", "saved"),
    ("Tendances", "trending"),
)


class UiDispatcher:
    """File d'attente vidée périodiquement par la boucle Tk.

    Les threads de travail n'appellent jamais Tk directement ; ils déposent
    une fonction ici.
    """

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._after_id: str | None = None
        self._poll()

    def put(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def _poll(self) -> None:
        self._after_id = self._root.after(DISPATCH_INTERVAL_MS, self._poll)
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            callback()

    def stop(self) -> None:
        if self._after_id:
            self._root.after_cancel(self._after_id)
            self._after_id = None


class MainWindow:
    """Fenêtre principale de l'application."""

    def __init__(self, config: AppConfig, api: NewsApi, session: SessionStore) -> None:
        self._config = config
        self._api = api
        self._session = session
        self._app_lifecycle = Lifecycle()

        self.root = tk.Tk()
        self.root.title("NewsDesk – Actualités")

        screen_width = self.root.winfo_screenwidth()
        screen_height = self.root.winfo_screenheight()
        self._target_width = max(int(screen_width * 0.6), 960)
        self._target_height = max(screen_height - WINDOW_VERTICAL_MARGIN, 640)
        self.root.geometry(f"{self._target_width}x{self._target_height}")
        self.root.minsize(960, 600)

        sv_ttk.set_theme(config.theme)
        self.root.configure(bg=BACKGROUND_COLOR)
        configure_styles(self.root)

        self._dispatcher = UiDispatcher(self.root)
        self._runner = TaskRunner(self._dispatcher.put)
        self._session.set_notifier(self._notify_threadsafe)
        self._session.subscribe(lambda _state: self._dispatcher.put(self._on_session_changed))

        self._notification_after_id: str | None = None
        self._profile_photo: ImageTk.PhotoImage | None = None
        self._profile_menu: tk.Menu | None = None
        self._chat_window: ChatWindow | None = None
        self._loading_indicator: ttk.Progressbar | None = None
        self._mounted: tk.Widget | None = None

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(1, weight=1)

        self._build_header()
        self._build_content()
        self._build_status_bar()

        self._context = AppContext(
            api=api,
            session=session,
            runner=self._runner,
            navigate=self.navigate,
            notify=self.notify,
            page_size=config.page_size,
        )
        self._router = Router(session.state, self)
        self._register_routes()
        self._update_auth_ui()
        self.root.protocol("WM_DELETE_WINDOW", self.close)

    # --------------------------------------------------------------------- UI -
    def _build_header(self) -> None:
        frame = ttk.Frame(self.root, style="Header.TFrame", padding=(24, 8))
        frame.grid(row=0, column=0, sticky="nwe")
        frame.columnconfigure(1, weight=1)
        frame.configure(height=HEADER_HEIGHT)

        title = ttk.Label(frame, text="📰 NewsDesk", style="HeaderTitle.TLabel")
        title.grid(row=0, column=0, sticky="w", padx=(0, 24))

        self._nav_frame = ttk.Frame(frame, style="Header.TFrame")
        self._nav_frame.grid(row=0, column=1, sticky="w")
        for column, (label, route) in enumerate(NAVIGATION):
            button = ttk.Button(
                self._nav_frame,
                text=label,
                command=lambda r=route: self.navigate(r),
            )
            button.grid(row=0, column=column, padx=4)

        actions = ttk.Frame(frame, style="Header.TFrame")
        actions.grid(row=0, column=2, sticky="e")

        self._theme_button = ttk.Button(actions, text="🌓", width=3, command=self._toggle_theme)
        self._theme_button.grid(row=0, column=0, padx=4)

        self._chat_button = ttk.Button(actions, text="💬 Assistant", command=self.open_chat)
        self._chat_button.grid(row=0, column=1, padx=4)

        self._profile_label = ttk.Label(
            actions,
            text="🙂",
            style="Profile.TLabel",
            cursor="hand2",
        )
        self._profile_label.grid(row=0, column=2, padx=(12, 0))
        self._profile_label.bind("<Button-1>", self._show_profile_menu)

        self._profile_menu = tk.Menu(self.root, tearoff=0)
        self._profile_menu.add_command(label="Profil", command=lambda: self.navigate("profile"))
        self._profile_menu.add_command(label="Enregistrés", command=lambda: self.navigate("saved"))
        self._profile_menu.add_separator()
        self._profile_menu.add_command(label="Déconnexion", command=self.logout)

    def _build_content(self) -> None:
        self._content = ttk.Frame(self.root, style="Main.TFrame", padding=(24, 16))
        self._content.grid(row=1, column=0, sticky="nsew")
        self._content.columnconfigure(0, weight=1)
        self._content.rowconfigure(0, weight=1)

    def _build_status_bar(self) -> None:
        self._status_label = ttk.Label(
            self.root,
            text="",
            style="Status.TLabel",
            padding=(24, 6),
        )
        self._status_label.grid(row=2, column=0, sticky="we")

    def _register_routes(self) -> None:
        ctx = self._context
        self._router.register("login", lambda: LoginPage(self._content, ctx), public=True)
        self._router.register("register", lambda: RegisterPage(self._content, ctx), public=True)
        self._router.register("feed", lambda: FeedPage(self._content, ctx))
        self._router.register("saved", lambda: SavedPage(self._content, ctx))
        self._router.register("profile", lambda: ProfilePage(self._content, ctx))
        self._router.register("trending", lambda: TrendingPage(self._content, ctx))
        self._router.register(
            "article",
            lambda article_id: ArticlePage(self._content, ctx, article_id),
        )

    # ------------------------------------------------------------ RouterHost -
    def show_loading(self) -> None:
        self._clear_content()
        frame = ttk.Frame(self._content, style="Main.TFrame")
        frame.grid(row=0, column=0)
        indicator = ttk.Progressbar(frame, mode="indeterminate", length=160)
        indicator.pack(pady=24)
        indicator.start(12)
        self._loading_indicator = indicator
        self._mounted = frame

    def mount(self, name: str, page: Page) -> None:
        self._clear_content()
        if isinstance(page, tk.Widget):
            page.grid(row=0, column=0, sticky="nsew")
            self._mounted = page

    def _clear_content(self) -> None:
        if self._loading_indicator is not None:
            self._loading_indicator.stop()
            self._loading_indicator = None
        if self._mounted is not None and self._mounted.winfo_exists():
            # Les pages sont détruites par leur propre dispose().
            if not hasattr(self._mounted, "dispose"):
                self._mounted.destroy()
        self._mounted = None

    # ------------------------------------------------------------- Navigation -
    def navigate(self, route: str, **params: Any) -> None:
        self._router.navigate(route, **params)
        self._update_nav_state()

    def _update_nav_state(self) -> None:
        current = self._router.current_route
        for button, (_, route) in zip(self._nav_frame.winfo_children(), NAVIGATION):
            button.configure(style="Accent.TButton" if route == current else "TButton")

    # -------------------------------------------------------------- Session -
    def _on_session_changed(self) -> None:
        self._update_auth_ui()
        self._router.refresh()
        self._update_nav_state()

    def _update_auth_ui(self) -> None:
        """Met à jour l'en-tête en fonction de l'état d'authentification."""
        state: SessionState = self._session.state
        authenticated = state.is_authenticated
        for button in self._nav_frame.winfo_children():
            button.configure(state=tk.NORMAL if authenticated else tk.DISABLED)
        self._chat_button.configure(state=tk.NORMAL if authenticated else tk.DISABLED)
        if not authenticated and self._chat_window is not None:
            self._chat_window.close()
            self._chat_window = None
        self._update_profile_avatar()

    def logout(self) -> None:
        if not self._session.state.is_authenticated:
            return
        self._runner.submit(self._app_lifecycle, self._session.logout, lambda _: None)

    def _show_profile_menu(self, event: tk.Event) -> None:
        if not self._session.state.is_authenticated or not self._profile_menu:
            return

        try:
            self._profile_menu.tk_popup(event.x_root, event.y_root)
        finally:
            self._profile_menu.grab_release()

    def _update_profile_avatar(self) -> None:
        user = self._session.user
        self._profile_label.configure(image="", text=initials(user) if user else "🙂")
        self._profile_label.image = None
        if user is None or not user.avatar_url:
            return

        avatar_url = user.avatar_url
        self._runner.submit(
            self._app_lifecycle,
            lambda: _download(avatar_url),
            self._apply_avatar,
            lambda exc: logger.info("Avatar indisponible (%s) : %s", avatar_url, exc),
        )

    def _apply_avatar(self, data: bytes) -> None:
        try:
            image = Image.open(io.BytesIO(data)).convert("RGBA")
            image = image.resize((AVATAR_SIZE, AVATAR_SIZE), Image.LANCZOS)
            mask = Image.new("L", image.size, 0)
            drawer = ImageDraw.Draw(mask)
            drawer.ellipse((0, 0, image.size[0], image.size[1]), fill=255)
            image.putalpha(mask)
            self._profile_photo = ImageTk.PhotoImage(image)
        except (OSError, ValueError) as exc:
            logger.info("Avatar illisible : %s", exc)
            self._profile_photo = None
            return

        self._profile_label.configure(image=self._profile_photo, text="")
        self._profile_label.image = self._profile_photo

    # --------------------------------------------------------- Notifications -
    def notify(self, level: str, message: str) -> None:
        """Affiche une notification transitoire dans la barre d'état."""
        colors = {"success": STATUS_SUCCESS_COLOR, "error": STATUS_ERROR_COLOR}
        self._status_label.configure(
            text=message,
            foreground=colors.get(level, STATUS_NEUTRAL_COLOR),
        )
        if self._notification_after_id:
            self.root.after_cancel(self._notification_after_id)
        self._notification_after_id = self.root.after(
            NOTIFICATION_DURATION_MS,
            self._clear_notification,
        )
        if level == "error":
            messagebox.showerror("NewsDesk", message, parent=self.root)

    def _notify_threadsafe(self, level: str, message: str) -> None:
        self._dispatcher.put(lambda: self.notify(level, message))

    def _clear_notification(self) -> None:
        self._notification_after_id = None
        self._status_label.configure(text="", foreground=STATUS_NEUTRAL_COLOR)

    # ----------------------------------------------------------------- Misc -
    def _toggle_theme(self) -> None:
        sv_ttk.toggle_theme()
        configure_styles(self.root)

    def open_chat(self) -> None:
        if not self._session.state.is_authenticated:
            return
        if self._chat_window is not None and self._chat_window.is_open:
            self._chat_window.focus()
            return
        self._chat_window = ChatWindow(self.root, delay_ms=self._config.chat_delay_ms)

    # ----------------------------------------------------------------- Public -
    def run(self) -> None:
        self._router.navigate("feed")
        self._runner.submit(
            self._app_lifecycle,
            self._session.initialize,
            lambda _: self._on_session_changed(),
        )
        self.root.mainloop()

    def close(self) -> None:
        self._app_lifecycle.dispose()
        self._dispatcher.stop()
        self._runner.shutdown()
        self.root.destroy()


def _download(url: str) -> bytes:
    with urlopen(url, timeout=5) as response:
        return response.read()


