"""Objets métier échangés avec l'API NewsDesk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class User:
    """Utilisateur authentifié tel que renvoyé par le serveur."""

    id: str
    email: str
    name: str | None = None
    avatar_url: str | None = None
    interests: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            email=data.get("email", ""),
            name=data.get("name") or None,
            avatar_url=data.get("avatarUrl") or None,
            interests=list(data.get("interests") or []),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.email


@dataclass(frozen=True, slots=True)
class TokenPair:
    """Jetons d'accès et de rafraîchissement émis par le serveur."""

    access_token: str
    refresh_token: str


@dataclass(slots=True)
class Article:
    """Article de presse ; chaque récupération produit une copie indépendante."""

    id: str
    title: str
    description: str = ""
    url: str = ""
    source: str = ""
    author: str | None = None
    image_url: str | None = None
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    published_at: str | None = None
    content: str | None = None
    saved: bool = False
    related: list["Article"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        source = data.get("source") or ""
        if isinstance(source, dict):
            source = source.get("name", "")
        return cls(
            id=str(data.get("id") or data.get("_id") or data.get("url") or ""),
            title=data.get("title") or "Sans titre",
            description=data.get("description") or "",
            url=data.get("url") or "",
            source=source,
            author=data.get("author") or None,
            image_url=data.get("imageUrl") or data.get("urlToImage") or None,
            categories=list(data.get("categories") or []),
            tags=list(data.get("tags") or []),
            published_at=data.get("publishedAt"),
            content=data.get("content") or None,
            saved=bool(data.get("saved", False)),
            related=[cls.from_dict(item) for item in data.get("related") or []],
        )

    def to_payload(self) -> dict[str, Any]:
        """Corps attendu par ``POST /news/save`` ; les champs absents sont omis."""
        payload = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "author": self.author,
            "imageUrl": self.image_url,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "publishedAt": self.published_at,
        }
        return {key: value for key, value in payload.items() if value is not None}


def articles_from(items: list[dict[str, Any]] | None) -> list[Article]:
    return [Article.from_dict(item) for item in items or []]


@dataclass(frozen=True, slots=True)
class NamedCount:
    name: str
    count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> "NamedCount":
        if isinstance(data, str):
            return cls(name=data)
        name = data.get("name") or data.get("_id") or data.get("category") or ""
        return cls(name=str(name), count=int(data.get("count", 0) or 0))


@dataclass(slots=True)
class TrendingStats:
    """Indicateurs agrégés de la page Tendances."""

    categories: list[NamedCount] = field(default_factory=list)
    sources: list[NamedCount] = field(default_factory=list)
    tags: list[NamedCount] = field(default_factory=list)
    total_articles: int = 0
    total_users: int = 0
    trending_today: list[Article] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrendingStats":
        return cls(
            categories=[NamedCount.from_dict(item) for item in data.get("categories") or []],
            sources=[NamedCount.from_dict(item) for item in data.get("sources") or []],
            tags=[NamedCount.from_dict(item) for item in data.get("tags") or []],
            total_articles=int(data.get("totalArticles", 0) or 0),
            total_users=int(data.get("totalUsers", 0) or 0),
            trending_today=articles_from(data.get("trendingToday")),
        )


@dataclass(slots=True)
class AccountStats:
    saved_articles: int = 0
    categories: list[str] = field(default_factory=list)
    join_date: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountStats":
        return cls(
            saved_articles=int(data.get("savedArticles", 0) or 0),
            categories=list(data.get("categories") or []),
            join_date=data.get("joinDate"),
        )
