"""Services d'accès à l'API NewsDesk."""

from newsdesk.services.http import ApiError, HttpClient, extract_error_message
from newsdesk.services.news_api import FeedFilters, NewsApi, build_feed_request
from newsdesk.services.session_store import SessionStore
from newsdesk.services.token_store import TokenStore

__all__ = [
    "ApiError",
    "FeedFilters",
    "HttpClient",
    "NewsApi",
    "SessionStore",
    "TokenStore",
    "build_feed_request",
    "extract_error_message",
]
