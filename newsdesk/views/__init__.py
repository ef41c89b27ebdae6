"""Modèles de page, indépendants de Tkinter."""

from newsdesk.views.article import ArticleModel
from newsdesk.views.auth import LoginForm, RegisterForm
from newsdesk.views.feed import FeedModel
from newsdesk.views.profile import ProfileModel
from newsdesk.views.saved import SavedModel
from newsdesk.views.trending import TrendingModel

__all__ = [
    "ArticleModel",
    "FeedModel",
    "LoginForm",
    "ProfileModel",
    "RegisterForm",
    "SavedModel",
    "TrendingModel",
]
