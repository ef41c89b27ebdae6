"""Pages Tkinter affichées dans la zone centrale de la fenêtre."""

from __future__ import annotations

import tkinter as tk
import webbrowser
from dataclasses import dataclass
from tkinter import ttk
from typing import Callable

from newsdesk.models import Article
from newsdesk.services import NewsApi, SessionStore
from newsdesk.services.session_store import Notifier
from newsdesk.tasks import TaskRunner
from newsdesk.ui.theme import CARD_COLOR
from newsdesk.views import (
    ArticleModel,
    FeedModel,
    LoginForm,
    ProfileModel,
    RegisterForm,
    SavedModel,
    TrendingModel,
)
from newsdesk.views.auth import password_strength, strength_label
from newsdesk.views.base import PageModel
from newsdesk.views.feed import CATEGORIES, SOURCES, TAGS
from newsdesk.views.formatting import format_long_date, format_relative
from newsdesk.views.profile import initials

SEARCH_DEBOUNCE_MS = 300


@dataclass(frozen=True)
class AppContext:
    """Dépendances transmises explicitement à chaque page."""

    api: NewsApi
    session: SessionStore
    runner: TaskRunner
    navigate: Callable[..., None]
    notify: Notifier
    page_size: int = 12


class PageFrame(ttk.Frame):
    """Page liée à un modèle ; ``dispose`` coupe ses requêtes en cours."""

    def __init__(self, parent: tk.Misc, ctx: AppContext, model: PageModel) -> None:
        super().__init__(parent, style="Main.TFrame")
        self._ctx = ctx
        self._model = model
        model.bind(self.render)
        self.columnconfigure(0, weight=1)

    def render(self) -> None:
        """Synchronise les widgets avec le modèle."""

    def _title(self, text: str, subtitle: str = "") -> ttk.Frame:
        frame = ttk.Frame(self, style="Main.TFrame")
        frame.grid(row=0, column=0, columnspan=2, sticky="we", pady=(0, 16))
        frame.columnconfigure(0, weight=1)
        ttk.Label(frame, text=text, style="PageTitle.TLabel").grid(row=0, column=0, sticky="w")
        if subtitle:
            ttk.Label(frame, text=subtitle, style="Subtitle.TLabel").grid(
                row=1, column=0, sticky="w"
            )
        return frame

    def dispose(self) -> None:
        self._model.dispose()
        self.destroy()


class ArticleList(ttk.Frame):
    """Tableau d'articles : titre, source et date."""

    def __init__(self, parent: tk.Misc, *, on_open: Callable[[Article], None]) -> None:
        super().__init__(parent, style="Card.TFrame")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)
        self._articles: dict[str, Article] = {}
        self._on_open = on_open

        self._tree = ttk.Treeview(
            self,
            columns=("source", "date"),
            show="tree headings",
            selectmode="browse",
        )
        self._tree.heading("#0", text="Titre")
        self._tree.heading("source", text="Source")
        self._tree.heading("date", text="Publié")
        self._tree.column("#0", stretch=True, width=480)
        self._tree.column("source", width=160, stretch=False)
        self._tree.column("date", width=120, stretch=False)
        self._tree.grid(row=0, column=0, sticky="nsew")
        self._tree.bind("<Double-1>", self._open_selected)
        self._tree.bind("<Return>", self._open_selected)

        scrollbar = ttk.Scrollbar(self, orient=tk.VERTICAL, command=self._tree.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self._tree.configure(yscrollcommand=scrollbar.set)

    def set_articles(self, articles: list[Article]) -> None:
        self._tree.delete(*self._tree.get_children())
        self._articles = {}
        for index, article in enumerate(articles):
            # Deux articles peuvent partager un identifiant vide.
            iid = f"{index}:{article.id}"
            self._articles[iid] = article
            title = f"🔖 {article.title}" if article.saved else article.title
            self._tree.insert(
                "",
                tk.END,
                iid=iid,
                text=title,
                values=(article.source, format_relative(article.published_at)),
            )

    def selected(self) -> Article | None:
        selection = self._tree.selection()
        return self._articles.get(selection[0]) if selection else None

    def _open_selected(self, _event: tk.Event) -> None:
        article = self.selected()
        if article is not None:
            self._on_open(article)


def _open_article(ctx: AppContext, article: Article) -> None:
    ctx.navigate("article", article_id=article.id)


# --------------------------------------------------------------------- Auth -
class LoginPage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(
            parent,
            ctx,
            LoginForm(ctx.session, ctx.runner, on_success=lambda _: ctx.navigate("feed")),
        )
        self._model: LoginForm
        self._email_var = tk.StringVar()
        self._password_var = tk.StringVar()
        self._show_password = tk.BooleanVar(value=False)

        card = ttk.Frame(self, style="Card.TFrame", padding=(32, 28))
        card.grid(row=0, column=0, pady=48)
        card.columnconfigure(0, weight=1)

        ttk.Label(card, text="Connexion", style="Section.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(card, text="E-mail", style="Muted.TLabel").grid(
            row=1, column=0, sticky="w", pady=(16, 2)
        )
        email = ttk.Entry(card, textvariable=self._email_var, width=40)
        email.grid(row=2, column=0, sticky="we")
        email.focus()

        ttk.Label(card, text="Mot de passe", style="Muted.TLabel").grid(
            row=3, column=0, sticky="w", pady=(12, 2)
        )
        self._password_entry = ttk.Entry(card, textvariable=self._password_var, show="•", width=40)
        self._password_entry.grid(row=4, column=0, sticky="we")
        self._password_entry.bind("<Return>", lambda _: self._submit())

        ttk.Checkbutton(
            card,
            text="Afficher le mot de passe",
            variable=self._show_password,
            command=self._toggle_password,
        ).grid(row=5, column=0, sticky="w", pady=(8, 0))

        self._error_label = ttk.Label(card, text="", style="Error.TLabel", wraplength=320)
        self._error_label.grid(row=6, column=0, sticky="w", pady=(12, 0))

        self._submit_button = ttk.Button(
            card,
            text="Se connecter",
            style="Accent.TButton",
            command=self._submit,
        )
        self._submit_button.grid(row=7, column=0, sticky="we", pady=(16, 0))

        ttk.Button(
            card,
            text="Pas encore de compte ? S'inscrire",
            command=lambda: ctx.navigate("register"),
        ).grid(row=8, column=0, sticky="we", pady=(8, 0))

    def _toggle_password(self) -> None:
        self._password_entry.configure(show="" if self._show_password.get() else "•")

    def _submit(self) -> None:
        self._model.submit(self._email_var.get(), self._password_var.get())

    def render(self) -> None:
        self._error_label.configure(text=self._model.error)
        self._submit_button.configure(
            text="Connexion…" if self._model.loading else "Se connecter",
            state=tk.DISABLED if self._model.loading else tk.NORMAL,
        )


class RegisterPage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(
            parent,
            ctx,
            RegisterForm(ctx.session, ctx.runner, on_success=lambda _: ctx.navigate("feed")),
        )
        self._model: RegisterForm
        self._name_var = tk.StringVar()
        self._email_var = tk.StringVar()
        self._password_var = tk.StringVar()
        self._password_var.trace_add("write", lambda *_: self.render())

        card = ttk.Frame(self, style="Card.TFrame", padding=(32, 28))
        card.grid(row=0, column=0, pady=48)
        card.columnconfigure(0, weight=1)

        ttk.Label(card, text="Créer un compte", style="Section.TLabel").grid(
            row=0, column=0, sticky="w"
        )
        fields = (
            ("Nom complet", self._name_var, ""),
            ("E-mail", self._email_var, ""),
            ("Mot de passe", self._password_var, "•"),
        )
        row = 1
        for label, variable, show in fields:
            ttk.Label(card, text=label, style="Muted.TLabel").grid(
                row=row, column=0, sticky="w", pady=(12, 2)
            )
            ttk.Entry(card, textvariable=variable, show=show, width=40).grid(
                row=row + 1, column=0, sticky="we"
            )
            row += 2

        self._strength_label = ttk.Label(card, text="", style="Muted.TLabel")
        self._strength_label.grid(row=row, column=0, sticky="w", pady=(6, 0))

        self._error_label = ttk.Label(card, text="", style="Error.TLabel", wraplength=320)
        self._error_label.grid(row=row + 1, column=0, sticky="w", pady=(12, 0))

        self._submit_button = ttk.Button(
            card,
            text="S'inscrire",
            style="Accent.TButton",
            command=self._submit,
            state=tk.DISABLED,
        )
        self._submit_button.grid(row=row + 2, column=0, sticky="we", pady=(16, 0))

        ttk.Button(
            card,
            text="Déjà inscrit ? Se connecter",
            command=lambda: ctx.navigate("login"),
        ).grid(row=row + 3, column=0, sticky="we", pady=(8, 0))

    def _submit(self) -> None:
        self._model.submit(self._name_var.get(), self._email_var.get(), self._password_var.get())

    def render(self) -> None:
        password = self._password_var.get()
        if password:
            strength = password_strength(password)
            self._strength_label.configure(
                text=f"Robustesse : {strength_label(strength)} ({strength}/5)"
            )
        else:
            self._strength_label.configure(text="")
        self._error_label.configure(text=self._model.error)
        self._submit_button.configure(
            text="Création…" if self._model.loading else "S'inscrire",
            state=tk.NORMAL if self._model.can_submit(password) else tk.DISABLED,
        )


# --------------------------------------------------------------------- Feed -
class FeedPage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(
            parent,
            ctx,
            FeedModel(ctx.api, ctx.runner, page_size=ctx.page_size, notifier=ctx.notify),
        )
        self._model: FeedModel
        self._search_var = tk.StringVar()
        self._search_after_id: str | None = None
        self._date_from_var = tk.StringVar()
        self._date_to_var = tk.StringVar()
        self._checks: dict[tuple[str, str], tk.BooleanVar] = {}

        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=0)
        self.rowconfigure(2, weight=1)

        header = self._title("Fil d'actualité", "Restez informé des dernières nouvelles")
        self._refresh_button = ttk.Button(header, text="Actualiser", command=self._model.refresh)
        self._refresh_button.grid(row=0, column=1, rowspan=2, sticky="e")

        search = ttk.Entry(self, textvariable=self._search_var, justify="center")
        search.grid(row=1, column=0, sticky="we", pady=(0, 12), ipady=6)
        search.bind("<Return>", lambda _: self._apply_search())
        self._search_var.trace_add("write", self._on_search_var_changed)

        body = ttk.Frame(self, style="Card.TFrame", padding=(16, 12))
        body.grid(row=2, column=0, sticky="nsew")
        body.columnconfigure(0, weight=1)
        body.rowconfigure(0, weight=1)

        self._list = ArticleList(body, on_open=lambda a: _open_article(ctx, a))
        self._list.grid(row=0, column=0, sticky="nsew")

        self._message_label = ttk.Label(body, text="", style="Muted.TLabel")
        self._message_label.grid(row=1, column=0, sticky="w", pady=(8, 0))

        actions = ttk.Frame(body, style="Card.TFrame")
        actions.grid(row=2, column=0, sticky="e", pady=(8, 0))
        ttk.Button(actions, text="Enregistrer", command=self._save_selected).pack(
            side=tk.LEFT, padx=4
        )
        ttk.Button(actions, text="Ouvrir", command=self._open_selected).pack(side=tk.LEFT, padx=4)
        self._more_button = ttk.Button(
            actions,
            text="Charger plus d'articles",
            style="Accent.TButton",
            command=self._model.load_more,
        )
        self._more_button.pack(side=tk.LEFT, padx=4)

        self._build_sidebar()
        self._model.refresh()

    def _build_sidebar(self) -> None:
        sidebar = ttk.Frame(self, style="Card.TFrame", padding=(16, 12))
        sidebar.grid(row=1, column=1, rowspan=2, sticky="ns", padx=(16, 0))

        row = 0
        for title, field, values in (
            ("Catégories", "categories", CATEGORIES),
            ("Sources", "sources", SOURCES),
            ("Tags", "tags", TAGS),
        ):
            ttk.Label(sidebar, text=title, style="Section.TLabel").grid(
                row=row, column=0, columnspan=2, sticky="w", pady=(8, 4)
            )
            row += 1
            for index, value in enumerate(values):
                variable = tk.BooleanVar(value=False)
                self._checks[(field, value)] = variable
                ttk.Checkbutton(
                    sidebar,
                    text=value,
                    variable=variable,
                    command=lambda f=field, v=value: self._model.toggle(f, v),
                ).grid(row=row + index // 2, column=index % 2, sticky="w")
            row += (len(values) + 1) // 2

        ttk.Label(sidebar, text="Période (AAAA-MM-JJ)", style="Section.TLabel").grid(
            row=row, column=0, columnspan=2, sticky="w", pady=(8, 4)
        )
        ttk.Entry(sidebar, textvariable=self._date_from_var, width=12).grid(
            row=row + 1, column=0, sticky="w"
        )
        ttk.Entry(sidebar, textvariable=self._date_to_var, width=12).grid(
            row=row + 1, column=1, sticky="w"
        )
        ttk.Button(sidebar, text="Appliquer", command=self._apply_dates).grid(
            row=row + 2, column=0, sticky="w", pady=(8, 0)
        )
        ttk.Button(sidebar, text="Effacer les filtres", command=self._clear_filters).grid(
            row=row + 3, column=0, columnspan=2, sticky="we", pady=(16, 0)
        )

    def _on_search_var_changed(self, *_: object) -> None:
        if self._search_after_id:
            self.after_cancel(self._search_after_id)
        self._search_after_id = self.after(SEARCH_DEBOUNCE_MS, self._apply_search)

    def _apply_search(self) -> None:
        if self._search_after_id:
            self.after_cancel(self._search_after_id)
        self._search_after_id = None
        self._model.update_filters(search=self._search_var.get())

    def _apply_dates(self) -> None:
        self._model.update_filters(
            date_from=self._date_from_var.get().strip(),
            date_to=self._date_to_var.get().strip(),
        )

    def _clear_filters(self) -> None:
        for variable in self._checks.values():
            variable.set(False)
        self._date_from_var.set("")
        self._date_to_var.set("")
        self._search_var.set("")
        self._model.clear_filters()

    def _save_selected(self) -> None:
        article = self._list.selected()
        if article is not None:
            self._model.save(article)

    def _open_selected(self) -> None:
        article = self._list.selected()
        if article is not None:
            _open_article(self._ctx, article)

    def render(self) -> None:
        model = self._model
        self._list.set_articles(model.articles)
        if model.error:
            message = model.error
        elif model.loading:
            message = "Chargement…"
        elif model.is_empty:
            message = "Aucun article trouvé. Essayez d'ajuster vos filtres ou votre recherche."
        elif not model.has_more:
            message = "Vous avez atteint la fin des articles."
        else:
            message = f"{len(model.articles)} articles"
        self._message_label.configure(text=message)
        self._refresh_button.configure(state=tk.DISABLED if model.loading else tk.NORMAL)
        can_load_more = bool(model.articles) and model.has_more and not model.loading
        self._more_button.configure(state=tk.NORMAL if can_load_more else tk.DISABLED)

    def dispose(self) -> None:
        if self._search_after_id:
            self.after_cancel(self._search_after_id)
            self._search_after_id = None
        super().dispose()


# -------------------------------------------------------------------- Saved -
class SavedPage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(parent, ctx, SavedModel(ctx.api, ctx.runner, notifier=ctx.notify))
        self._model: SavedModel
        self._search_var = tk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._model.set_search(self._search_var.get()))
        self.rowconfigure(2, weight=1)

        header = self._title("Articles enregistrés")
        self._count_label = ttk.Label(header, text="", style="Subtitle.TLabel")
        self._count_label.grid(row=1, column=0, sticky="w")
        self._refresh_button = ttk.Button(header, text="Actualiser", command=self._model.load)
        self._refresh_button.grid(row=0, column=1, rowspan=2, sticky="e")

        ttk.Entry(self, textvariable=self._search_var, justify="center").grid(
            row=1, column=0, sticky="we", pady=(0, 12), ipady=6
        )

        body = ttk.Frame(self, style="Card.TFrame", padding=(16, 12))
        body.grid(row=2, column=0, sticky="nsew")
        body.columnconfigure(0, weight=1)
        body.rowconfigure(0, weight=1)

        self._list = ArticleList(body, on_open=lambda a: _open_article(ctx, a))
        self._list.grid(row=0, column=0, sticky="nsew")

        self._message_label = ttk.Label(body, text="", style="Muted.TLabel")
        self._message_label.grid(row=1, column=0, sticky="w", pady=(8, 0))

        footer = ttk.Frame(body, style="Card.TFrame")
        footer.grid(row=2, column=0, sticky="we", pady=(8, 0))
        footer.columnconfigure(0, weight=1)
        self._stats_label = ttk.Label(footer, text="", style="Body.TLabel")
        self._stats_label.grid(row=0, column=0, sticky="w")
        ttk.Button(footer, text="Parcourir les articles", command=lambda: ctx.navigate("feed")).grid(
            row=0, column=1, padx=4
        )
        ttk.Button(footer, text="Retirer", command=self._remove_selected).grid(
            row=0, column=2, padx=4
        )

        self._model.load()

    def _remove_selected(self) -> None:
        article = self._list.selected()
        if article is not None:
            self._model.remove(article.id)

    def render(self) -> None:
        model = self._model
        filtered = model.filtered
        self._list.set_articles(filtered)
        self._count_label.configure(text=model.count_label)
        if model.loading:
            message = "Chargement…"
        elif model.error:
            message = f"{model.error}. Cliquez sur « Actualiser » pour réessayer."
        elif not model.items:
            message = "Aucun article enregistré. Enregistrez des articles depuis le fil."
        elif not filtered:
            message = "Aucun article ne correspond à votre recherche."
        else:
            message = ""
        self._message_label.configure(text=message)
        stats = model.stats
        self._stats_label.configure(
            text=(
                f"{stats.total} enregistrés · {stats.sources} sources · "
                f"{stats.categories} catégories"
            )
            if model.items
            else ""
        )
        self._refresh_button.configure(state=tk.DISABLED if model.loading else tk.NORMAL)


# ------------------------------------------------------------------ Article -
class ArticlePage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext, article_id: str) -> None:
        super().__init__(
            parent,
            ctx,
            ArticleModel(ctx.api, ctx.runner, article_id, notifier=ctx.notify),
        )
        self._model: ArticleModel
        self.rowconfigure(1, weight=1)

        top = ttk.Frame(self, style="Main.TFrame")
        top.grid(row=0, column=0, sticky="we", pady=(0, 12))
        top.columnconfigure(1, weight=1)
        ttk.Button(top, text="← Retour", command=lambda: ctx.navigate("feed")).grid(
            row=0, column=0, sticky="w"
        )
        self._open_button = ttk.Button(top, text="Lire l'article original", command=self._open_url)
        self._open_button.grid(row=0, column=2, padx=4)
        self._save_button = ttk.Button(
            top,
            text="Enregistrer",
            style="Accent.TButton",
            command=self._model.toggle_save,
        )
        self._save_button.grid(row=0, column=3, padx=4)

        card = ttk.Frame(self, style="Card.TFrame", padding=(24, 20))
        card.grid(row=1, column=0, sticky="nsew")
        card.columnconfigure(0, weight=1)
        card.rowconfigure(3, weight=1)

        self._title_label = ttk.Label(card, text="", style="Section.TLabel", wraplength=800)
        self._title_label.grid(row=0, column=0, sticky="w")
        self._meta_label = ttk.Label(card, text="", style="Muted.TLabel")
        self._meta_label.grid(row=1, column=0, sticky="w", pady=(4, 0))
        self._categories_label = ttk.Label(card, text="", style="Muted.TLabel")
        self._categories_label.grid(row=2, column=0, sticky="w", pady=(4, 12))

        self._text = tk.Text(
            card,
            wrap=tk.WORD,
            bg=CARD_COLOR,
            fg="#FFFFFF",
            relief=tk.FLAT,
            borderwidth=0,
            highlightthickness=0,
            height=12,
        )
        self._text.grid(row=3, column=0, sticky="nsew")

        self._tags_label = ttk.Label(card, text="", style="Muted.TLabel")
        self._tags_label.grid(row=4, column=0, sticky="w", pady=(8, 0))

        ttk.Label(card, text="Articles liés", style="Section.TLabel").grid(
            row=5, column=0, sticky="w", pady=(16, 4)
        )
        self._related = ArticleList(card, on_open=lambda a: _open_article(ctx, a))
        self._related.grid(row=6, column=0, sticky="nsew")

        self._model.load()

    def _open_url(self) -> None:
        article = self._model.article
        if article is not None and article.url:
            webbrowser.open(article.url)

    def _set_text(self, text: str) -> None:
        self._text.configure(state=tk.NORMAL)
        self._text.delete("1.0", tk.END)
        self._text.insert("1.0", text)
        self._text.configure(state=tk.DISABLED)

    def render(self) -> None:
        model = self._model
        article = model.article
        if model.loading:
            self._title_label.configure(text="Chargement…")
            return
        if model.error or article is None:
            self._title_label.configure(text=model.error or "Article introuvable")
            self._set_text(
                "L'article que vous cherchez n'existe pas ou a été supprimé."
            )
            self._save_button.configure(state=tk.DISABLED)
            return

        self._title_label.configure(text=article.title)
        meta = [article.source]
        if article.author:
            meta.append(f"par {article.author}")
        if article.published_at:
            meta.append(
                f"{format_long_date(article.published_at)} ({format_relative(article.published_at)})"
            )
        self._meta_label.configure(text=" · ".join(part for part in meta if part))
        self._categories_label.configure(text=" · ".join(article.categories))
        body = article.description
        if article.content:
            body = f"{body}\n\n{article.content}" if body else article.content
        self._set_text(body)
        self._tags_label.configure(
            text=" ".join(f"#{tag}" for tag in article.tags)
        )
        self._related.set_articles(article.related)
        self._save_button.configure(
            text="Retirer des enregistrés" if model.bookmarked else "Enregistrer",
            state=tk.DISABLED if model.saving else tk.NORMAL,
        )


# ------------------------------------------------------------------ Profile -
class ProfilePage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(parent, ctx, ProfileModel(ctx.session, ctx.api, ctx.runner))
        self._model: ProfileModel
        self._name_var = tk.StringVar(value=self._model.name)
        self._avatar_var = tk.StringVar(value=self._model.avatar_url)
        self.columnconfigure(1, weight=0)

        self._title("Paramètres du profil", "Gérez votre compte et vos préférences")

        main = ttk.Frame(self, style="Card.TFrame", padding=(24, 20))
        main.grid(row=1, column=0, sticky="nsew")
        main.columnconfigure(1, weight=1)

        self._initials_label = ttk.Label(main, text="", style="HeaderTitle.TLabel")
        self._initials_label.grid(row=0, column=0, rowspan=2, padx=(0, 16))
        self._name_label = ttk.Label(main, text="", style="Section.TLabel")
        self._name_label.grid(row=0, column=1, sticky="w")
        self._since_label = ttk.Label(main, text="", style="Muted.TLabel")
        self._since_label.grid(row=1, column=1, sticky="w")

        rows: list[tuple[str, tk.Widget]] = [
            ("Nom complet", ttk.Entry(main, textvariable=self._name_var)),
            ("URL de l'avatar", ttk.Entry(main, textvariable=self._avatar_var)),
        ]
        email_entry = ttk.Entry(main)
        user = self._model.user
        email_entry.insert(0, user.email if user else "")
        email_entry.configure(state=tk.DISABLED)
        rows.append(("E-mail (non modifiable)", email_entry))

        for index, (label, widget) in enumerate(rows, start=2):
            ttk.Label(main, text=label, style="Muted.TLabel").grid(
                row=index, column=0, sticky="w", pady=(12, 0)
            )
            widget.grid(row=index, column=1, sticky="we", pady=(12, 0))

        self._profile_button = ttk.Button(
            main,
            text="Enregistrer le profil",
            style="Accent.TButton",
            command=self._save_profile,
        )
        self._profile_button.grid(row=5, column=1, sticky="e", pady=(16, 0))

        ttk.Label(main, text="Centres d'intérêt", style="Section.TLabel").grid(
            row=6, column=0, columnspan=2, sticky="w", pady=(24, 4)
        )
        ttk.Label(
            main,
            text="Séparez plusieurs sujets par des virgules (Technology, Science, Sports…)",
            style="Muted.TLabel",
        ).grid(row=7, column=0, columnspan=2, sticky="w")
        self._interests = tk.Text(
            main,
            height=3,
            wrap=tk.WORD,
            bg=CARD_COLOR,
            fg="#FFFFFF",
            insertbackground="#FFFFFF",
        )
        self._interests.insert("1.0", self._model.interests_text)
        self._interests.grid(row=8, column=0, columnspan=2, sticky="we", pady=(4, 0))
        self._interests_button = ttk.Button(
            main,
            text="Mettre à jour les centres d'intérêt",
            command=self._save_interests,
        )
        self._interests_button.grid(row=9, column=1, sticky="e", pady=(12, 0))

        ttk.Label(main, text="Mot de passe", style="Section.TLabel").grid(
            row=10, column=0, columnspan=2, sticky="w", pady=(24, 4)
        )
        self._current_password = tk.StringVar()
        self._new_password = tk.StringVar()
        self._confirm_password = tk.StringVar()
        password_rows = (
            ("Mot de passe actuel", self._current_password),
            ("Nouveau mot de passe", self._new_password),
            ("Confirmation", self._confirm_password),
        )
        for index, (label, variable) in enumerate(password_rows, start=11):
            ttk.Label(main, text=label, style="Muted.TLabel").grid(
                row=index, column=0, sticky="w", pady=(8, 0)
            )
            ttk.Entry(main, textvariable=variable, show="•").grid(
                row=index, column=1, sticky="we", pady=(8, 0)
            )
        self._password_button = ttk.Button(
            main,
            text="Changer le mot de passe",
            command=self._change_password,
        )
        self._password_button.grid(row=14, column=1, sticky="e", pady=(12, 0))

        self._feedback_label = ttk.Label(main, text="", style="Success.TLabel")
        self._feedback_label.grid(row=15, column=0, columnspan=2, sticky="w", pady=(12, 0))

        side = ttk.Frame(self, style="Card.TFrame", padding=(20, 18))
        side.grid(row=1, column=1, sticky="ns", padx=(16, 0))
        ttk.Label(side, text="Statistiques du compte", style="Section.TLabel").grid(
            row=0, column=0, sticky="w"
        )
        self._stats_label = ttk.Label(side, text="", style="Body.TLabel", justify=tk.LEFT)
        self._stats_label.grid(row=1, column=0, sticky="w", pady=(8, 16))
        ttk.Label(side, text="Raccourcis", style="Section.TLabel").grid(row=2, column=0, sticky="w")
        ttk.Button(side, text="Articles enregistrés", command=lambda: ctx.navigate("saved")).grid(
            row=3, column=0, sticky="we", pady=(8, 0)
        )
        ttk.Button(side, text="Tendances", command=lambda: ctx.navigate("trending")).grid(
            row=4, column=0, sticky="we", pady=(8, 16)
        )
        ttk.Label(side, text="Informations du compte", style="Section.TLabel").grid(
            row=5, column=0, sticky="w"
        )
        self._account_label = ttk.Label(side, text="", style="Muted.TLabel", justify=tk.LEFT)
        self._account_label.grid(row=6, column=0, sticky="w", pady=(8, 0))

        self.render()
        self._model.load_stats()

    def _save_profile(self) -> None:
        self._model.save_profile(self._name_var.get().strip(), self._avatar_var.get().strip())

    def _save_interests(self) -> None:
        self._model.save_interests(self._interests.get("1.0", tk.END))

    def _change_password(self) -> None:
        if self._model.change_password(
            self._current_password.get(),
            self._new_password.get(),
            self._confirm_password.get(),
        ):
            for variable in (self._current_password, self._new_password, self._confirm_password):
                variable.set("")

    def render(self) -> None:
        model = self._model
        user = model.user
        self._initials_label.configure(text=initials(user))
        self._name_label.configure(
            text=self._name_var.get() or (user.name if user and user.name else "Utilisateur sans nom")
        )
        self._since_label.configure(text=f"Membre depuis le {format_long_date(model.stats.join_date)}")
        self._stats_label.configure(
            text=(
                f"Articles enregistrés : {model.stats.saved_articles}\n"
                f"Catégories : {len(model.stats.categories)}\n"
                f"Inscription : {format_long_date(model.stats.join_date)}"
            )
        )
        if user is not None:
            short_id = f"{user.id[:8]}…" if user.id else "?"
            self._account_label.configure(text=f"ID : {short_id}\n{user.email}\nStatut : actif")

        if model.error:
            self._feedback_label.configure(text=model.error, style="Error.TLabel")
        else:
            self._feedback_label.configure(text=model.success, style="Success.TLabel")
        state = tk.DISABLED if model.loading else tk.NORMAL
        self._profile_button.configure(
            state=state,
            text="Enregistrement…" if model.loading else "Enregistrer le profil",
        )
        self._interests_button.configure(state=state)
        self._password_button.configure(state=state)


# ----------------------------------------------------------------- Trending -
class TrendingPage(PageFrame):
    def __init__(self, parent: tk.Misc, ctx: AppContext) -> None:
        super().__init__(parent, ctx, TrendingModel(ctx.api, ctx.runner))
        self._model: TrendingModel
        self.columnconfigure(1, weight=1)
        self.rowconfigure(2, weight=1)

        header = self._title("Tendances", "Ce qui retient l'attention des lecteurs")
        self._totals_label = ttk.Label(header, text="", style="Subtitle.TLabel")
        self._totals_label.grid(row=2, column=0, sticky="w")
        ttk.Button(header, text="Actualiser", command=self._model.load).grid(
            row=0, column=1, rowspan=2, sticky="e"
        )

        self._categories_frame = self._card(1, 0, "Catégories")
        self._sources_frame = self._card(1, 1, "Sources")
        today = ttk.Frame(self, style="Card.TFrame", padding=(16, 12))
        today.grid(row=2, column=0, columnspan=2, sticky="nsew", pady=(16, 0))
        today.columnconfigure(0, weight=1)
        today.rowconfigure(1, weight=1)
        ttk.Label(today, text="Populaires aujourd'hui", style="Section.TLabel").grid(
            row=0, column=0, sticky="w", pady=(0, 8)
        )
        self._today = ArticleList(today, on_open=lambda a: _open_article(ctx, a))
        self._today.grid(row=1, column=0, sticky="nsew")
        self._tags_label = ttk.Label(today, text="", style="Muted.TLabel", wraplength=800)
        self._tags_label.grid(row=2, column=0, sticky="w", pady=(8, 0))

        self._model.load()

    def _card(self, row: int, column: int, title: str) -> ttk.Frame:
        card = ttk.Frame(self, style="Card.TFrame", padding=(16, 12))
        card.grid(row=row, column=column, sticky="nsew", padx=(0 if column == 0 else 16, 0))
        card.columnconfigure(1, weight=1)
        ttk.Label(card, text=title, style="Section.TLabel").grid(
            row=0, column=0, columnspan=3, sticky="w", pady=(0, 8)
        )
        return card

    @staticmethod
    def _fill(frame: ttk.Frame, rows: list[tuple[str, int]], maximum: int) -> None:
        for child in frame.grid_slaves():
            if int(child.grid_info()["row"]) > 0:
                child.destroy()
        for index, (name, count) in enumerate(rows, start=1):
            ttk.Label(frame, text=name, style="Body.TLabel").grid(row=index, column=0, sticky="w")
            bar = ttk.Progressbar(frame, maximum=max(maximum, 1), value=count, length=160)
            bar.grid(row=index, column=1, sticky="we", padx=8, pady=2)
            ttk.Label(frame, text=str(count), style="Muted.TLabel").grid(row=index, column=2)

    def render(self) -> None:
        model = self._model
        stats = model.stats
        if model.loading:
            self._totals_label.configure(text="Chargement…")
            return
        if model.error:
            self._totals_label.configure(text=model.error)
            return

        self._totals_label.configure(
            text=f"{stats.total_articles} articles · {stats.total_users} lecteurs"
        )
        categories = [
            (f"{item.name} ({model.share(item.count):.0f} %)", item.count)
            for item in stats.categories
        ]
        self._fill(
            self._categories_frame,
            categories,
            max((item.count for item in stats.categories), default=0),
        )
        self._fill(
            self._sources_frame,
            [(item.name, item.count) for item in stats.sources],
            max((item.count for item in stats.sources), default=0),
        )
        self._today.set_articles(stats.trending_today)
        self._tags_label.configure(
            text="  ".join(f"#{item.name} ({item.count})" for item in stats.tags)
        )


__all__ = [
    "AppContext",
    "ArticlePage",
    "FeedPage",
    "LoginPage",
    "ProfilePage",
    "RegisterPage",
    "SavedPage",
    "TrendingPage",
]
