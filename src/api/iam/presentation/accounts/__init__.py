"""Login, signup and logout entry points."""

from iam.presentation.accounts.routes import router

__all__ = ["router"]
