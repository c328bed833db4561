from .base import RateFeedProvider
from .open_er_api import OpenERAPIProvider

__all__ = ['RateFeedProvider', 'OpenERAPIProvider']
