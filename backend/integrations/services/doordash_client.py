import base64
import binascii
import logging
import time
from typing import Any, Dict, Optional

import jwt
import requests
from django.conf import settings

from ..config import ProviderSettings
from ..exceptions import IntegrationConfigurationError, MarketplaceAPIError

logger = logging.getLogger(__name__)

JWT_AUDIENCE = "doordash"
JWT_SIGNING_VERSION = "DD-JWT-V1"

MENUS_PATH = "/marketplace/api/v1/menus"
STORE_DETAILS_PATH = "/marketplace/api/v1/stores/{merchant_supplied_id}/store_details"


class DoorDashClient:
    """
    Signed client for the DoorDash Marketplace API.

    Every request carries a freshly minted HS256 token. Non-2xx answers raise
    ``MarketplaceAPIError`` with the parsed body; nothing is retried here.
    """

    def __init__(
        self,
        provider_settings: ProviderSettings,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.provider_settings = provider_settings
        self.base_url = (base_url or settings.DOORDASH_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.DOORDASH_API_TIMEOUT

    def build_jwt(self, now: Optional[int] = None) -> str:
        """
        Mint the bearer token.

        Raises:
            IntegrationConfigurationError: If the developer id, key id or
                signing secret is missing, or the secret is not base64.
        """
        config = self.provider_settings
        if not config.has_credentials:
            raise IntegrationConfigurationError(
                "DOORDASH", message="DoorDash credentials missing."
            )

        try:
            secret = base64.b64decode(config.signing_secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise IntegrationConfigurationError(
                "DOORDASH", message="DoorDash signing secret is not valid base64."
            ) from e

        issued_at = int(now if now is not None else time.time())
        claims = {
            "aud": JWT_AUDIENCE,
            "iss": config.developer_id,
            "kid": config.key_id,
            "iat": issued_at,
            "exp": issued_at + settings.DOORDASH_JWT_TTL_SECONDS,
        }
        return jwt.encode(
            claims,
            secret,
            algorithm="HS256",
            headers={"dd-ver": JWT_SIGNING_VERSION},
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.build_jwt()}",
            "auth-version": "v2",
            "User-Agent": self.provider_settings.user_agent or settings.DOORDASH_DEFAULT_USER_AGENT,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, body: Any = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.info(f"DoorDash {method} {path}")
        response = requests.request(
            method, url, headers=self._headers(), json=body, timeout=self.timeout
        )

        try:
            data = response.json()
        except ValueError:
            data = {"raw": response.text}

        if not response.ok:
            logger.warning(f"DoorDash {method} {path} failed with HTTP {response.status_code}")
            raise MarketplaceAPIError(response.status_code, data)
        return data

    def push_menu(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", MENUS_PATH, payload)

    def get_store_details(self, merchant_supplied_id: str) -> Dict[str, Any]:
        return self._request(
            "GET", STORE_DETAILS_PATH.format(merchant_supplied_id=merchant_supplied_id)
        )

    def update_store_details(self, merchant_supplied_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PATCH", STORE_DETAILS_PATH.format(merchant_supplied_id=merchant_supplied_id), body
        )
