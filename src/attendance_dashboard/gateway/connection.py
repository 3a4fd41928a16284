from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS

TokenProvider = Callable[[], Optional[str]]


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS


class ApiConnection:
    """HTTP session factory for the attendance service.

    The bearer token is looked up per call through ``token_provider`` so a
    connection can be shared while the signed-in user changes.
    """

    def __init__(
        self,
        config: ApiConfig,
        token_provider: TokenProvider,
        *,
        session: Optional[requests.Session] = None,
    ):
        self._config = config
        self._token_provider = token_provider
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    @property
    def timeout(self) -> float:
        return float(self._config.timeout)

    @property
    def session(self) -> requests.Session:
        return self._session

    def token(self) -> Optional[str]:
        return self._token_provider()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"
