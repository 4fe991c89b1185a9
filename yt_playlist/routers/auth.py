"""Authentication router for the YouTube OAuth redirect flow."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse

from yt_playlist.config import settings
from yt_playlist.dependencies import get_handler
from yt_playlist.exceptions import AuthenticationRequiredError, YTPlaylistError
from yt_playlist.logger import auth_logger
from yt_playlist.schemas.auth import AuthMessage, AuthStatusResponse, YouTubeCallback
from yt_playlist.services.handler import PlaylistHandler

router = APIRouter(prefix="/auth")


@router.get("/youtube", response_model=AuthMessage)
def youtube_auth(
    request: Request,
    handler: Annotated[PlaylistHandler, Depends(get_handler)],
    code: Annotated[str | None, Query()] = None,
    state: Annotated[str | None, Query()] = None,
    error: Annotated[str | None, Query()] = None,
):
    """
    Check the stored token and run the OAuth flow when there is none.

    Without a token the browser is redirected to Google; Google sends it back
    here with ``code`` and ``state``, which are exchanged for a token that is
    saved to file.
    """
    try:
        if error:
            raise AuthenticationRequiredError(f"Authorization denied: {error}")

        callback = YouTubeCallback(code=code, state=state) if code else None
        result = handler.authenticate(
            allow_redirect=True,
            callback=callback,
            expected_state=request.cookies.get(settings.state_cookie_name),
        )
    except YTPlaylistError as e:
        auth_logger.error(f"Error when getting token: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error occurred during authentication: {e}",
        )

    if not result.is_authenticated:
        auth_logger.info("Redirecting.")
        response = RedirectResponse(url=result.redirect_url)
        response.set_cookie(
            settings.state_cookie_name,
            result.state,
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )
        return response

    if callback is not None:
        # Drop the code from the address bar
        response = RedirectResponse(url=handler.config.redirect_url)
        response.delete_cookie(settings.state_cookie_name)
        return response

    return AuthMessage(status="authenticated", message="Authentication token saved.")


@router.get("/youtube/status", response_model=AuthStatusResponse)
def youtube_auth_status(
    handler: Annotated[PlaylistHandler, Depends(get_handler)],
):
    """
    Indicate whether a usable YouTube token is available.

    An expired token is refreshed; no redirect is ever requested.
    """
    try:
        handler.authenticate(allow_redirect=False)
    except AuthenticationRequiredError:
        return AuthStatusResponse(authenticated=False, reason="missing_token")
    except YTPlaylistError as e:
        return AuthStatusResponse(authenticated=False, reason=str(e))

    token = handler.auth.current_token
    return AuthStatusResponse(
        authenticated=True,
        expires_at=token.expires_at if token else None,
    )
