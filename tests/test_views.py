"""Tests des modèles de page (sans Tkinter)."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from newsdesk.models import AccountStats, Article, NamedCount, TrendingStats, User
from newsdesk.services.http import ApiError
from newsdesk.services.news_api import FeedFilters
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
from newsdesk.views.formatting import format_long_date, format_relative, format_short_date
from newsdesk.views.profile import initials, parse_interests


def make_articles(count, prefix="a", **fields):
    return [Article(id=f"{prefix}{index}", title=f"Titre {index}", **fields) for index in range(count)]


class TestFeedModel:
    def test_first_page_is_requested_without_pagination(self, api, runner):
        api.feed.return_value = make_articles(3)
        model = FeedModel(api, runner, page_size=3)

        model.refresh()

        api.feed.assert_called_once_with(FeedFilters())
        assert len(model.articles) == 3
        assert model.page == 2
        assert model.has_more is True

    def test_load_more_appends_next_page(self, api, runner):
        api.feed.side_effect = [make_articles(2), make_articles(1, prefix="b")]
        model = FeedModel(api, runner, page_size=2)

        model.refresh()
        model.load_more()

        api.feed.assert_called_with(FeedFilters(), page=2, limit=2)
        assert [a.id for a in model.articles] == ["a0", "a1", "b0"]
        assert model.has_more is False
        assert model.load_more() is False

    def test_load_is_ignored_while_loading(self, api, deferred, deferred_runner):
        api.feed.return_value = []
        model = FeedModel(api, deferred_runner)

        assert model.refresh() is True
        assert model.refresh() is False
        deferred.flush()

        assert api.feed.call_count == 1
        assert model.loading is False

    def test_error_sets_message(self, api, runner):
        api.feed.side_effect = ApiError("down", status=500)
        model = FeedModel(api, runner)

        model.refresh()

        assert model.error == "Impossible de charger les articles"
        assert model.loading is False

    def test_filter_changes_reload_from_first_page(self, api, runner):
        api.feed.return_value = []
        model = FeedModel(api, runner)

        model.toggle("categories", "Technology")
        model.update_filters(search="ia")

        assert api.feed.call_args.args[0] == FeedFilters(search="ia", categories=("Technology",))

        model.toggle("categories", "Technology")
        assert model.filters.categories == ()

    def test_filter_change_during_load_reloads_with_new_filters(
        self, api, deferred, deferred_runner
    ):
        stale = make_articles(2, prefix="old")
        fresh = make_articles(1, prefix="ai")
        api.feed.side_effect = [stale, fresh]
        model = FeedModel(api, deferred_runner)

        model.refresh()
        model.update_filters(search="ai")
        deferred.flush()
        deferred.flush()

        assert api.feed.call_count == 2
        assert api.feed.call_args.args[0] == FeedFilters(search="ai")
        assert [a.id for a in model.articles] == ["ai0"]
        assert model.loading is False

    def test_stale_result_is_never_shown(self, api, deferred, deferred_runner):
        api.feed.side_effect = [make_articles(2, prefix="old"), make_articles(1, prefix="new")]
        model = FeedModel(api, deferred_runner)

        model.refresh()
        model.toggle("categories", "Technology")
        deferred.flush()

        assert model.articles == []
        assert model.loading is True

    def test_filter_change_during_failed_load_still_reloads(
        self, api, deferred, deferred_runner
    ):
        api.feed.side_effect = [ApiError("down", status=500), make_articles(1)]
        model = FeedModel(api, deferred_runner)

        model.refresh()
        model.clear_filters()
        deferred.flush()
        deferred.flush()

        assert api.feed.call_count == 2
        assert model.error == ""
        assert len(model.articles) == 1

    def test_refresh_during_load_is_still_ignored(self, api, deferred, deferred_runner):
        api.feed.return_value = []
        model = FeedModel(api, deferred_runner)

        model.refresh()
        model.refresh()
        deferred.flush()
        deferred.flush()

        assert api.feed.call_count == 1

    def test_next_pages_use_first_page_length_as_limit(self, api, runner):
        api.feed.side_effect = [make_articles(20), make_articles(20, prefix="b")]
        model = FeedModel(api, runner, page_size=12)

        model.refresh()
        assert model.has_more is True
        model.load_more()

        api.feed.assert_called_with(FeedFilters(), page=2, limit=20)
        assert len(model.articles) == 40
        assert model.has_more is True

    def test_short_first_page_ends_pagination(self, api, runner):
        api.feed.return_value = make_articles(5)
        model = FeedModel(api, runner, page_size=12)

        model.refresh()

        assert model.has_more is False
        assert model.load_more() is False

    def test_save_marks_article_and_notifies(self, api, runner):
        notifier = Mock()
        model = FeedModel(api, runner, notifier=notifier)
        article = Article(id="a1", title="T")

        model.save(article)

        api.save_article.assert_called_once_with(article)
        assert article.saved is True
        notifier.assert_called_once_with("success", "Article enregistré !")

    def test_disposed_model_ignores_late_results(self, api, deferred, deferred_runner):
        api.feed.return_value = make_articles(2)
        on_change = Mock()
        model = FeedModel(api, deferred_runner, on_change=on_change)
        model.refresh()
        on_change.reset_mock()

        model.dispose()
        deferred.flush()

        assert model.articles == []
        on_change.assert_not_called()


class TestSavedModel:
    @pytest.fixture
    def model(self, api, runner):
        api.saved_articles.return_value = [
            Article(id="1", title="Climate report", source="BBC", categories=["science"]),
            Article(id="2", title="Markets", description="Stocks rally", source="CNN",
                    categories=["business", "world"]),
            Article(id="3", title="Election", source="BBC", categories=["world"]),
        ]
        model = SavedModel(api, runner, notifier=Mock())
        model.load()
        return model

    def test_stats(self, model):
        assert (model.stats.total, model.stats.sources, model.stats.categories) == (3, 2, 3)
        assert model.count_label == "3 articles enregistrés"

    def test_search_matches_title_description_and_source(self, model):
        model.set_search("STOCKS")
        assert [a.id for a in model.filtered] == ["2"]

        model.set_search("bbc")
        assert [a.id for a in model.filtered] == ["1", "3"]

    def test_remove_drops_article_locally(self, api, model):
        model.remove("2")

        api.remove_saved.assert_called_once_with("2")
        assert [a.id for a in model.items] == ["1", "3"]

    def test_remove_failure_keeps_article(self, api, model):
        api.remove_saved.side_effect = ApiError("nope")
        model.remove("2")
        assert len(model.items) == 3

    def test_singular_label(self, api, runner):
        api.saved_articles.return_value = [Article(id="1", title="x")]
        model = SavedModel(api, runner)
        model.load()
        assert model.count_label == "1 article enregistré"


class TestArticleModel:
    def test_toggle_saves_then_unsaves(self, api, runner):
        api.article.return_value = Article(id="a1", title="T", saved=False)
        model = ArticleModel(api, runner, "a1")
        model.load()

        assert model.toggle_save() is True
        api.save_article.assert_called_once()
        assert model.bookmarked is True

        model.toggle_save()
        api.unsave_article.assert_called_once_with("a1")
        assert model.bookmarked is False

    def test_toggle_ignored_while_saving(self, api, deferred, deferred_runner):
        model = ArticleModel(api, deferred_runner, "a1")
        model.article = Article(id="a1", title="T")

        assert model.toggle_save() is True
        assert model.toggle_save() is False
        deferred.flush()

        assert api.save_article.call_count == 1
        assert model.saving is False

    def test_toggle_failure_keeps_flag(self, api, runner):
        notifier = Mock()
        api.unsave_article.side_effect = ApiError("nope")
        model = ArticleModel(api, runner, "a1", notifier=notifier)
        model.article = Article(id="a1", title="T", saved=True)
        model.bookmarked = True

        model.toggle_save()

        assert model.bookmarked is True
        notifier.assert_called_once_with("error", "Impossible de modifier l'enregistrement")

    def test_load_error(self, api, runner):
        api.article.side_effect = ApiError("missing", status=404)
        model = ArticleModel(api, runner, "zz")
        model.load()
        assert model.error == "Impossible de charger l'article"


class TestProfileModel:
    @pytest.fixture
    def session(self, demo_user):
        session = Mock()
        session.user = demo_user
        return session

    def test_prefills_from_session_user(self, session, api, runner):
        model = ProfileModel(session, api, runner)
        assert model.name == "Demo"
        assert model.interests_text == "tech"

    def test_save_interests_parses_text(self, session, api, runner):
        model = ProfileModel(session, api, runner)

        model.save_interests(" science, , sports ")

        session.update_interests.assert_called_once_with(["science", "sports"])
        assert model.success == "Centres d'intérêt mis à jour"

    def test_save_profile_failure(self, session, api, runner):
        session.update_profile.side_effect = ApiError("bad")
        model = ProfileModel(session, api, runner)

        model.save_profile("New", "http://x/a.png")

        assert model.error == "Échec de la mise à jour du profil"
        assert model.loading is False

    def test_change_password_requires_matching_confirmation(self, session, api, runner):
        model = ProfileModel(session, api, runner)

        assert model.change_password("old", "New123!", "Other123!") is False
        assert model.error == "Les mots de passe ne correspondent pas."
        session.change_password.assert_not_called()

    def test_change_password(self, session, api, runner):
        model = ProfileModel(session, api, runner)

        assert model.change_password("old", "New123!", "New123!") is True

        session.change_password.assert_called_once_with("old", "New123!")
        assert model.success == "Mot de passe modifié"

    def test_load_stats(self, session, api, runner):
        api.account_stats.return_value = AccountStats(saved_articles=4)
        model = ProfileModel(session, api, runner)
        model.load_stats()
        assert model.stats.saved_articles == 4


@pytest.mark.parametrize(
    ("user", "expected"),
    [
        (None, "?"),
        (User(id="1", email="a@b.c", name="Ada Lovelace"), "AL"),
        (User(id="1", email="demo@example.com"), "DE"),
    ],
)
def test_initials(user, expected):
    assert initials(user) == expected


def test_parse_interests():
    assert parse_interests("ai, climate ,") == ["ai", "climate"]
    assert parse_interests("") == []


class TestAuthForms:
    def test_login_requires_both_fields(self, runner):
        session = Mock()
        form = LoginForm(session, runner)

        assert form.submit("", "x") is False
        assert form.error
        session.login.assert_not_called()

    def test_login_success_calls_back(self, runner, demo_user):
        session = Mock()
        session.login.return_value = demo_user
        on_success = Mock()
        form = LoginForm(session, runner, on_success=on_success)

        form.submit(" demo@example.com ", "password123")

        session.login.assert_called_once_with("demo@example.com", "password123")
        on_success.assert_called_once_with(demo_user)

    def test_login_failure_shows_server_message(self, runner):
        session = Mock()
        session.login.side_effect = ApiError("x", payload={"message": "Invalid credentials"})
        form = LoginForm(session, runner)

        form.submit("a@b.c", "bad")

        assert form.error == "Invalid credentials"
        assert form.loading is False

    def test_register_rejects_weak_password(self, runner):
        session = Mock()
        form = RegisterForm(session, runner)

        assert form.can_submit("abc") is False
        assert form.submit("Name", "a@b.c", "abc") is False
        session.register.assert_not_called()

    @pytest.mark.parametrize(
        ("password", "score", "label"),
        [("", 0, "Faible"), ("abcdefgh", 2, "Moyen"), ("Abcdef1!", 5, "Fort")],
    )
    def test_password_strength(self, password, score, label):
        assert password_strength(password) == score
        assert strength_label(score) == label


class TestTrendingModel:
    def test_share_of_category_total(self, api, runner):
        api.trending.return_value = TrendingStats(
            categories=[NamedCount("tech", 3), NamedCount("world", 1)]
        )
        model = TrendingModel(api, runner)
        model.load()

        assert model.share(3) == 75.0

    def test_share_without_data(self, api, runner):
        assert TrendingModel(api, runner).share(5) == 0.0


class TestFormatting:
    def test_long_date(self):
        assert format_long_date("2025-08-04T10:00:00Z") == "4 août 2025"
        assert format_long_date("garbage") == "Inconnue"
        assert format_long_date(None) == "Inconnue"

    def test_short_date(self):
        assert format_short_date("2025-02-10T00:00:00Z") == "10 févr. 2025"

    def test_relative(self):
        now = datetime(2025, 8, 4, 12, 0, tzinfo=timezone.utc)
        assert format_relative("2025-08-04T11:30:00Z", now) == "À l'instant"
        assert format_relative("2025-08-04T09:00:00Z", now) == "il y a 3 h"
        assert format_relative("2025-08-01T09:00:00Z", now) == "1 août 2025"
