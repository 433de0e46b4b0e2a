"""
Application use cases.
Each use case takes repositories and services in its constructor and
exposes an async `execute`.
"""

from .base_use_case import BaseUseCase, AuthorizedUseCase, normalize_page

__all__ = ["BaseUseCase", "AuthorizedUseCase", "normalize_page"]
