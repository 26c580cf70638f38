"""
Zoom OAuth token revocation
Tells the provider that a stored access token should no longer be honoured
"""

import logging
from typing import Any, Optional

import httpx

from ...config import OAuthClientConfig

logger = logging.getLogger(__name__)


class ZoomRevocationClient:
    """Best-effort client for the Zoom /oauth/revoke endpoint"""

    def __init__(
        self,
        config: OAuthClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.transport = transport

    async def revoke(self, access_token: str) -> Optional[Any]:
        """
        Revoke an access token.

        Returns the decoded JSON body, or None when the request could not be sent.
        Transport errors and error statuses are logged, never raised. A body that
        is not JSON raises ValueError.
        """
        auth = httpx.BasicAuth(self.config.client_id or "", self.config.client_secret or "")

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    self.config.revoke_url,
                    auth=auth,
                    data={"token": access_token},
                )
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Failed to revoke zoom_video token: {type(e).__name__}: {str(e)}")
            return None

        response_body = response.json()
        logger.info(f"revoke zoom_video: {response_body}")

        if response.is_error:
            logger.warning(f"⚠️ Zoom revoke returned HTTP {response.status_code}")

        return response_body
