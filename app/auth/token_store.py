"""Client-side persistence of the session tokens (accessToken / refreshToken)."""

import json
import logging
import os
from typing import Optional

from app.auth.schemas import TokenPair
from app.core.config import settings

logger = logging.getLogger(__name__)


class TokenStore:
    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or settings.token_store_path

    def save(self, tokens: TokenPair) -> None:
        data = tokens.model_dump(by_alias=True, exclude_none=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        logger.info("Session tokens stored in %s", self.path)

    def load(self) -> Optional[TokenPair]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, encoding="utf-8") as fh:
            data = json.load(fh)
        if not data.get("accessToken"):
            return None
        return TokenPair(**data)

    def access_token(self) -> Optional[str]:
        tokens = self.load()
        return tokens.access_token if tokens else None

    def clear(self) -> None:
        """Forget both tokens (logout)."""
        if os.path.exists(self.path):
            os.remove(self.path)
            logger.info("Session tokens cleared")
