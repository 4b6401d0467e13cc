"""Viewer identification for the species catalog.

Sign-in happens upstream of this application. The identity of the current
viewer arrives in a request header set by the fronting proxy, and Starlette's
authentication middleware turns it into ``request.user``.
"""

from fastapi import HTTPException, status
from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    SimpleUser,
)
from starlette.requests import HTTPConnection

DEFAULT_VIEWER_HEADER = "X-Viewer-Id"


class ViewerHeaderAuthBackend(AuthenticationBackend):
    """Authentication backend reading the viewer id from a request header."""

    def __init__(self, header_name: str = DEFAULT_VIEWER_HEADER) -> None:
        self.header_name = header_name

    async def authenticate(self, conn: HTTPConnection) -> tuple[AuthCredentials, SimpleUser] | None:
        """Authenticate the connection from the viewer header.

        Returns:
            Credentials and user when the header carries an id, None otherwise
        """
        viewer_id = conn.headers.get(self.header_name, "").strip()
        if not viewer_id:
            return None

        return AuthCredentials(["authenticated"]), SimpleUser(viewer_id)


def get_viewer_id(conn: HTTPConnection) -> str | None:
    """Return the signed-in viewer's id, or None for anonymous requests."""
    if "user" not in conn.scope:
        return None
    user = conn.user
    if not user.is_authenticated:
        return None
    return user.display_name


def require_viewer(conn: HTTPConnection) -> str:
    """FastAPI dependency that rejects anonymous requests with 401."""
    viewer_id = get_viewer_id(conn)
    if viewer_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    return viewer_id
