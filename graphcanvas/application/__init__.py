"""
Application Package

Application services and the dependency injection container.
"""

from .container import Container, Settings

__all__ = [
    "Container",
    "Settings",
]
