from collections.abc import Generator

import httpx
from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError

from app.analysis.exceptions import AnalysisAuthError
from app.logging.logger import Log

COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class KeyAuth(httpx.Auth):
    """Attaches a static subscription key to every request."""

    def __init__(self, key: str) -> None:
        self._key = key

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers[SUBSCRIPTION_KEY_HEADER] = self._key
        yield request


class TokenAuth(httpx.Auth):
    """Attaches a bearer token obtained from an Azure identity credential."""

    def __init__(self, credential: TokenCredential, scope: str = COGNITIVE_SERVICES_SCOPE) -> None:
        self._credential = credential
        self._scope = scope

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        try:
            token = self._credential.get_token(self._scope)
        except AzureError as exc:
            Log.error(
                f"Failed to obtain identity token for scope {self._scope}. "
                f"Role assignments may not have propagated yet: {exc}"
            )
            raise AnalysisAuthError(
                "Failed to authenticate with the managed identity."
            ) from exc
        request.headers["Authorization"] = f"Bearer {token.token}"
        yield request
