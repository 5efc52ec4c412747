from __future__ import annotations

from google.oauth2.credentials import Credentials

from src.config import Settings, get_settings


SCOPES = [
    "https://www.googleapis.com/auth/tasks",
    "https://www.googleapis.com/auth/calendar",
]


class CredentialsError(RuntimeError):
    pass


def build_credentials(settings: Settings | None = None) -> Credentials:
    """Build an authorized-user credential from the pre-provisioned refresh token.

    No token is fetched here; google-auth refreshes the access token on the
    first request made with these credentials.
    """
    cfg = settings or get_settings()
    missing = [
        name
        for name, value in (
            ("GOOGLE_CLIENT_ID", cfg.google_client_id),
            ("GOOGLE_CLIENT_SECRET", cfg.google_client_secret),
            ("GOOGLE_REFRESH_TOKEN", cfg.google_refresh_token),
        )
        if not value
    ]
    if missing:
        raise CredentialsError(f"Missing required environment variables: {', '.join(missing)}")

    return Credentials(
        token=None,
        refresh_token=cfg.google_refresh_token,
        token_uri=cfg.google_token_uri,
        client_id=cfg.google_client_id,
        client_secret=cfg.google_client_secret,
        scopes=SCOPES,
    )
