"""Assistant de discussion à réponses préenregistrées.

Aucun appel réseau ni mémoire de conversation : la réponse est choisie par
recherche de mots-clés dans le message, la première règle qui correspond
l'emporte.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)

USER = "user"
BOT = "bot"

GREETING = (
    "👋 Bonjour ! Je suis votre assistant d'actualités. Je peux vous aider à "
    "découvrir des articles, à naviguer dans l'application et à trouver les "
    "sujets du moment. Que souhaitez-vous explorer aujourd'hui ?"
)
APOLOGY = "Désolé, je n'arrive pas à répondre pour le moment. Réessayez plus tard."

STOP_WORDS = frozenset(
    {
        "what", "is", "about", "tell", "me", "explain", "the", "a", "an", "and", "or", "but",
        "qu'est-ce", "que", "c'est", "explique", "expliquer", "parle-moi", "de", "du",
        "des", "le", "la", "les", "un", "une", "et", "ou", "mais",
    }
)

GENERIC_REPLIES = (
    "Question intéressante ! Essayez une recherche par mots-clés ou filtrez le "
    "fil par catégorie pour trouver des articles sur ce sujet.",
    "Avec plaisir ! Notre base couvre de nombreux sujets. Quel aspect vous "
    "intéresse le plus ?",
    "Bonne question ! Utilisez la barre de recherche ou les filtres de catégorie "
    "pour trouver les articles les plus pertinents.",
    "Je peux vous aider à creuser ce sujet : cherchez des termes proches ou "
    "utilisez les filtres de la barre latérale.",
    "Sujet passionnant ! Voulez-vous que je vous suggère des termes de recherche ?",
)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: int
    text: str
    sender: str
    timestamp: datetime


Reply = str | Callable[[str], str]


@dataclass(frozen=True, slots=True)
class CannedRule:
    """Correspond si un mot de ``any_of`` et tous ceux de ``all_of`` sont présents."""

    reply: Reply
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if self.any_of and not any(word in text for word in self.any_of):
            return False
        return all(word in text for word in self.all_of)

    def answer(self, text: str) -> str:
        return self.reply(text) if callable(self.reply) else self.reply


def extract_topic(text: str) -> str | None:
    """Premier mot du message qui n'est pas un mot vide."""
    words = [word for word in text.split(" ") if word and word.lower() not in STOP_WORDS]
    return words[0] if words else None


def _explain(text: str) -> str:
    topic = extract_topic(text)
    if topic:
        return (
            f"Bonne question sur « {topic} » ! Cherchez « {topic} » dans la barre de "
            "recherche ou parcourez la catégorie correspondante pour la couverture "
            "la plus récente."
        )
    return (
        "Avec plaisir ! Pour les informations les plus à jour, recherchez un sujet "
        "précis dans notre base d'articles. Que voulez-vous approfondir ?"
    )


FIND_RULES: tuple[CannedRule, ...] = (
    CannedRule(
        "Pour la technologie, cherchez « intelligence artificielle », « cybersécurité » "
        "ou « startups », ou filtrez par la catégorie Technology.",
        any_of=("technology", "tech", "technologie"),
    ),
    CannedRule(
        "Pour la politique, cherchez « élection », « gouvernement » ou « parlement », "
        "ou filtrez par la catégorie Politics.",
        any_of=("politics", "political", "politique"),
    ),
    CannedRule(
        "Le sport est couvert ! Cherchez une équipe, une ligue ou un événement comme "
        "« Jeux olympiques » ou « Coupe du monde », ou filtrez par Sports.",
        any_of=("sports", "sport"),
    ),
    CannedRule(
        "Pour l'économie, cherchez « bourse », « cryptomonnaie » ou « investissement », "
        "ou filtrez par la catégorie Business.",
        any_of=("business", "economy", "finance", "économie"),
    ),
    CannedRule(
        "Je peux vous aider à trouver des articles sur n'importe quel sujet ! Saisissez "
        "des mots-clés dans la barre de recherche ou utilisez les filtres de catégorie."
    ),
)


def _find(text: str) -> str:
    for rule in FIND_RULES:
        if rule.matches(text):
            return rule.answer(text)
    return FIND_RULES[-1].answer(text)


DEFAULT_RULES: tuple[CannedRule, ...] = (
    CannedRule(
        "Bonjour ! Je suis votre assistant d'actualités. Je peux vous aider à découvrir "
        "des articles et à trouver les sujets du moment. Par quoi commençons-nous ?",
        any_of=("hello", "hi", "hey", "bonjour", "salut"),
    ),
    CannedRule(
        "Ouvrez la page Tendances depuis la barre de navigation pour voir :\n\n"
        "• les articles les plus populaires\n• les catégories en vogue\n"
        "• les mots-clés fréquents\n• la répartition par source\n\n"
        "Les données reflètent l'activité réelle des lecteurs !",
        any_of=("trending", "popular", "hot", "viral", "tendance", "populaire"),
    ),
    CannedRule(_find, any_of=("find", "search", "show me", "cherche", "trouve", "montre")),
    CannedRule(
        "Pour enregistrer un article, cliquez sur « Enregistrer » dans le fil ou sur la "
        "page de l'article. Retrouvez-les ensuite dans la section Enregistrés.",
        any_of=("save", "bookmark", "enregistr", "favori"),
    ),
    CannedRule(
        "Vous pouvez filtrer les articles de plusieurs façons :\n"
        "• la barre de recherche pour les mots-clés\n• les catégories\n"
        "• les sources\n• les dates\n• les tags\nTous les filtres se combinent.",
        any_of=("filter", "narrow down", "refine", "filtre", "affiner"),
    ),
    CannedRule(
        "Août 2005 a été marqué par l'ouragan Katrina, l'un des plus meurtriers de "
        "l'histoire des États-Unis. Notre base se concentre sur l'actualité récente : "
        "voulez-vous des articles sur la prévention des catastrophes ou le climat ?",
        all_of=("2005",),
        any_of=("august", "août", "aout"),
    ),
    CannedRule(
        "Notre base contient les articles des derniers mois. Cherchez un sujet précis "
        "ou parcourez les catégories pour trouver les articles récents.",
        any_of=("2024", "2023", "2022", "2021", "2020"),
    ),
    CannedRule(
        "Vous cherchez l'actualité d'août 2025 ? Utilisez la barre de recherche pour "
        "les événements récents ou parcourez les catégories. Quel sujet vous intéresse ?",
        all_of=("2025",),
        any_of=("aug", "août", "aout"),
    ),
    CannedRule(_explain, any_of=("what is", "explain", "tell me about", "qu'est-ce", "explique")),
    CannedRule(
        "Pour bien utiliser NewsDesk :\n\n🔍 Recherche par mots-clés\n"
        "📂 Filtres par catégorie, source et date\n🔖 Enregistrement des articles\n"
        "📊 Page Tendances pour les statistiques\n🤖 Et moi pour vos questions !\n\n"
        "Par quoi voulez-vous commencer ?",
        any_of=("help", "how to", "guide", "aide", "comment"),
    ),
    CannedRule(
        "Je me concentre sur l'actualité plutôt que sur la météo. Je peux en revanche "
        "vous aider à trouver des articles liés au climat !",
        any_of=("weather", "temperature", "météo", "température"),
    ),
    CannedRule(
        "L'IA est un sujet passionnant ! Cherchez « intelligence artificielle », "
        "« machine learning » ou « robotique », ou filtrez par Technology.",
        any_of=("ai", "artificial intelligence", "machine learning", "intelligence artificielle"),
    ),
    CannedRule(
        "Cryptomonnaies et blockchain sont très suivies ! Cherchez « bitcoin », "
        "« ethereum » ou « blockchain », ou filtrez par Business.",
        any_of=("crypto", "bitcoin", "blockchain"),
    ),
    CannedRule(
        "Santé et sciences : cherchez « recherche médicale », « vaccins », « climat » "
        "ou « espace », ou filtrez par Health et Science.",
        any_of=("health", "medical", "science", "santé", "médical"),
    ),
    CannedRule(
        "Pour le divertissement, cherchez un film ou une personnalité, ou filtrez par "
        "la catégorie Entertainment.",
        any_of=("movie", "celebrity", "entertainment", "film", "cinéma"),
    ),
    CannedRule(
        "Pour les grands titres, consultez la page Tendances : elle met en avant les "
        "articles qui suscitent le plus d'intérêt.",
        any_of=("major", "important", "big", "majeur"),
    ),
    CannedRule(
        "Le fil principal affiche les articles du plus récent au plus ancien. Utilisez "
        "la recherche pour cibler un sujet récent.",
        any_of=("latest", "recent", "new", "dernier", "récent"),
    ),
    CannedRule(
        "Pour l'actualité urgente, consultez le fil principal et la page Tendances, qui "
        "fait souvent remonter les dernières nouvelles.",
        any_of=("breaking", "urgent", "emergency", "urgence"),
    ),
)


@dataclass
class ChatSession:
    """Journal de discussion en ajout seul et sélection des réponses."""

    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = datetime.now
    rules: tuple[CannedRule, ...] = DEFAULT_RULES
    generic_replies: tuple[str, ...] = GENERIC_REPLIES
    messages: list[ChatMessage] = field(default_factory=list)
    pending: bool = False

    def __post_init__(self) -> None:
        self._ids = itertools.count(1)
        if not self.messages:
            self._append(GREETING, BOT)

    def _append(self, text: str, sender: str) -> ChatMessage:
        message = ChatMessage(id=next(self._ids), text=text, sender=sender, timestamp=self.clock())
        self.messages.append(message)
        return message

    def send(self, text: str) -> ChatMessage | None:
        """Ajoute le message de l'utilisateur ; None si vide ou réponse en attente."""
        if not text.strip() or self.pending:
            return None
        self.pending = True
        return self._append(text, USER)

    def reply(self, text: str) -> ChatMessage:
        """Ajoute la réponse du bot au message ``text``."""
        try:
            answer = self.generate(text)
        except Exception:  # noqa: BLE001
            logger.exception("Impossible de générer une réponse")
            answer = APOLOGY
        finally:
            self.pending = False
        return self._append(answer, BOT)

    def generate(self, text: str) -> str:
        lowered = text.lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule.answer(lowered)
        return self.rng.choice(self.generic_replies)
