"""
Google OAuth 2.0 credential handling for the Slides tools.
Loads the authorized-user token file, refreshes it when expired, and runs the
installed-app consent flow that produces the file in the first place.
"""

from pathlib import Path
from typing import List, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from slides_mcp.services import DriveService, ServiceBundle, SlidesService, TranslateService
from slides_mcp.utils.config_loader import AppConfig, get_config
from slides_mcp.utils.exceptions import AuthenticationError
from slides_mcp.utils.logging_config import get_logger

logger = get_logger(__name__)

# Slides, Drive (uploads, copies, exports, comments) and Cloud Translation
SLIDES_SCOPES = [
    "https://www.googleapis.com/auth/presentations",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/cloud-translation",
]


def load_credentials(token_path: Path, scopes: Optional[List[str]] = None) -> Credentials:
    """
    Load OAuth credentials from an authorized-user token file.

    Expired credentials with a refresh token are refreshed and written back.

    Args:
        token_path: Path to the token JSON file
        scopes: OAuth scopes (defaults to SLIDES_SCOPES)

    Returns:
        Valid credentials

    Raises:
        AuthenticationError: If the token file is missing, unreadable or cannot be refreshed
    """
    token_path = Path(token_path)
    scopes = scopes or SLIDES_SCOPES

    if not token_path.exists():
        raise AuthenticationError(
            f"OAuth token not found at {token_path}. "
            "Run 'python -m slides_mcp authorize' first."
        )

    try:
        creds = Credentials.from_authorized_user_file(str(token_path), scopes)
    except (ValueError, OSError) as e:
        raise AuthenticationError(f"Invalid OAuth token file {token_path}: {e}") from e

    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as e:
            raise AuthenticationError(
                f"Token refresh failed. Please re-authenticate: {e}"
            ) from e
        # Save refreshed token
        with open(token_path, "w") as token:
            token.write(creds.to_json())
        logger.info("Refreshed OAuth token", extra={"extra_data": {"token_path": str(token_path)}})

    return creds


def run_oauth_flow(
    client_secrets_path: Path,
    token_path: Path,
    scopes: Optional[List[str]] = None,
    port: int = 0
) -> Credentials:
    """
    Run the installed-app consent flow and store the resulting token.

    Args:
        client_secrets_path: OAuth client secrets JSON downloaded from Cloud Console
        token_path: Where to write the authorized-user token
        scopes: OAuth scopes (defaults to SLIDES_SCOPES)
        port: Local redirect port (0 picks a free one)

    Returns:
        Fresh credentials
    """
    client_secrets_path = Path(client_secrets_path)
    if not client_secrets_path.exists():
        raise AuthenticationError(f"OAuth client secrets not found at {client_secrets_path}")

    flow = InstalledAppFlow.from_client_secrets_file(
        str(client_secrets_path),
        scopes=scopes or SLIDES_SCOPES
    )
    creds = flow.run_local_server(port=port, access_type="offline", prompt="consent")

    token_path = Path(token_path)
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with open(token_path, "w") as token:
        token.write(creds.to_json())

    logger.info("Stored OAuth token", extra={"extra_data": {"token_path": str(token_path)}})
    return creds


def build_services(config: Optional[AppConfig] = None) -> ServiceBundle:
    """
    Build the Slides, Drive and Translate adapters from the configured token.

    Args:
        config: AppConfig instance (uses global config if None)
    """
    config = config or get_config()
    creds = load_credentials(config.token_path)
    return ServiceBundle(
        slides=SlidesService.from_credentials(creds),
        drive=DriveService.from_credentials(creds),
        translate=TranslateService.from_credentials(creds, batch_size=config.translate_batch_size),
    )
