"""Dashboard and org settings entry points."""

from iam.presentation.dashboard.routes import router

__all__ = ["router"]
