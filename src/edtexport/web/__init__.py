"""Web entry point — HTML page plus the sanitized export endpoint."""

from edtexport.web.app import create_app, render_page
from edtexport.web.identity import resolve_user_identity

__all__ = ["create_app", "render_page", "resolve_user_identity"]
