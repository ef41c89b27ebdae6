"""Encapsulation des points d'accès REST consommés par le client."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote

from newsdesk.models import AccountStats, Article, TokenPair, TrendingStats, User, articles_from
from newsdesk.services.http import ApiError, HttpClient

FEED_PATH = "/news/feed"
SEARCH_PATH = "/news/search"


@dataclass(frozen=True, slots=True)
class FeedFilters:
    """Filtres saisis dans la barre latérale du fil d'actualité."""

    search: str = ""
    categories: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    date_from: str = ""
    date_to: str = ""

    def merge(self, **changes: Any) -> "FeedFilters":
        for key in ("categories", "sources", "tags"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        return not (
            self.search.strip()
            or self.categories
            or self.sources
            or self.tags
            or self.date_from
            or self.date_to
        )


def build_feed_request(
    filters: FeedFilters,
    *,
    page: int | None = None,
    limit: int | None = None,
) -> tuple[str, dict[str, Any]]:
    """Choisit l'endpoint et les paramètres correspondant aux filtres.

    Une recherche textuelle ou des catégories passent par ``/news/search`` ;
    sinon le fil personnalisé ``/news/feed`` est interrogé.
    """
    search = filters.search.strip()
    params: dict[str, Any] = {}

    if search or filters.categories:
        path = SEARCH_PATH
        if search:
            params["q"] = search
        if filters.categories:
            params["categories"] = ",".join(filters.categories)
    else:
        path = FEED_PATH
        if filters.sources:
            params["sources"] = ",".join(filters.sources)
        if filters.tags:
            params["tags"] = ",".join(filters.tags)
        if filters.date_from:
            params["dateFrom"] = filters.date_from
        if filters.date_to:
            params["dateTo"] = filters.date_to

    if page is not None:
        params["page"] = page
    if limit is not None:
        params["limit"] = limit
    return path, params


def _user_from(payload: Any) -> User:
    """Accepte ``{"user": {...}}`` comme un utilisateur nu."""
    if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
        return User.from_dict(payload["user"])
    if isinstance(payload, dict) and payload.get("email"):
        return User.from_dict(payload)
    raise ApiError("Réponse du serveur sans utilisateur.", payload=payload)


@dataclass(slots=True)
class AuthResult:
    tokens: TokenPair
    user: User


class NewsApi:
    """Service responsable des appels aux endpoints ``/auth``, ``/news`` et ``/stats``."""

    def __init__(self, http: HttpClient, *, interests_endpoint: str = "profile") -> None:
        self._http = http
        self._interests_endpoint = interests_endpoint

    # ------------------------------------------------------------------ Auth -
    def _auth(self, path: str, body: dict[str, Any]) -> AuthResult:
        data = self._http.post(path, json=body) or {}
        token = data.get("token")
        if not token:
            raise ApiError("Réponse d'authentification sans jeton.", payload=data)
        return AuthResult(
            tokens=TokenPair(access_token=token, refresh_token=data.get("refreshToken") or ""),
            user=_user_from(data),
        )

    def login(self, email: str, password: str) -> AuthResult:
        return self._auth("/auth/login", {"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> AuthResult:
        return self._auth(
            "/auth/register",
            {"name": name, "email": email, "password": password},
        )

    def logout(self) -> None:
        self._http.post("/auth/logout")

    def fetch_profile(self) -> User:
        return _user_from(self._http.get("/auth/profile"))

    def update_profile(self, changes: dict[str, Any]) -> User:
        return _user_from(self._http.put("/auth/profile", json=changes))

    def update_interests(self, interests: list[str]) -> User:
        path = "/auth/interests" if self._interests_endpoint == "interests" else "/auth/profile"
        return _user_from(self._http.put(path, json={"interests": list(interests)}))

    def change_password(self, current_password: str, new_password: str) -> None:
        self._http.put(
            "/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    def account_stats(self) -> AccountStats:
        return AccountStats.from_dict(self._http.get("/auth/stats") or {})

    # ------------------------------------------------------------------ News -
    def feed(
        self,
        filters: FeedFilters | None = None,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Article]:
        path, params = build_feed_request(filters or FeedFilters(), page=page, limit=limit)
        data = self._http.get(path, params=params or None) or {}
        return articles_from(data.get("articles"))

    def search(self, query: str = "", categories: list[str] | None = None) -> list[Article]:
        filters = FeedFilters(search=query, categories=tuple(categories or ()))
        return self.feed(filters)

    def article(self, article_id: str) -> Article:
        data = self._http.get(f"/news/articles/{quote(article_id, safe='')}")
        if not isinstance(data, dict):
            raise ApiError("Article introuvable.", status=404)
        return Article.from_dict(data)

    def save_article(self, article: Article) -> None:
        self._http.post("/news/save", json=article.to_payload())

    def unsave_article(self, article_id: str) -> None:
        self._http.delete(f"/news/save/{quote(article_id, safe='')}")

    def saved_articles(self) -> list[Article]:
        data = self._http.get("/news/saved") or {}
        return articles_from(data.get("savedArticles"))

    def remove_saved(self, article_id: str) -> None:
        self._http.delete(f"/news/saved/{quote(article_id, safe='')}")

    # ----------------------------------------------------------------- Stats -
    def trending(self) -> TrendingStats:
        return TrendingStats.from_dict(self._http.get("/stats/trending") or {})
