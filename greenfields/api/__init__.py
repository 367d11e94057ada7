"""
Greenfields Routers
FastAPI router modules for the marketing site.
"""
from greenfields.api import contact, health, pages

__all__ = [
    "contact",
    "health",
    "pages",
]
