import logging
from typing import Optional

import httpx

from ...core.config import settings
from ...application.ports.oauth_provider import OAuthProvider
from ...exceptions import OAuthProviderError

logger = logging.getLogger(__name__)


class KakaoOAuthProvider(OAuthProvider):
    name = "kakao"

    def __init__(self, client: Optional[httpx.Client] = None):
        self.client = client or httpx.Client(timeout=settings.KAKAO_TIMEOUT_SECONDS)
        self.client_id = settings.KAKAO_CLIENT_ID
        self.client_secret = settings.KAKAO_CLIENT_SECRET
        self.redirect_uri = settings.KAKAO_REDIRECT_URI
        self.token_url = settings.KAKAO_TOKEN_URL

    def exchange_code(self, code: str) -> str:
        if not self.client_id:
            raise OAuthProviderError("Kakao client id not configured")
        form = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }
        if self.client_secret:
            form["client_secret"] = self.client_secret
        try:
            response = self.client.post(self.token_url, data=form)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Kakao token exchange failed: {e}")
            raise OAuthProviderError("Kakao token exchange failed") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Kakao token response was not JSON: {e}")
            raise OAuthProviderError("Kakao token response was not JSON") from e

        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            raise OAuthProviderError("Kakao response did not include an access token")
        return access_token
