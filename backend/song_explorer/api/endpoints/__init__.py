"""
API endpoints package initialization
"""
from . import recommendations, search, songs, health

__all__ = ['recommendations', 'search', 'songs', 'health']
