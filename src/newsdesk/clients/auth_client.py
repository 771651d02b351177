"""Authentication client resolving the signed-in user."""

import logging

from pydantic import ValidationError as PydanticValidationError

from newsdesk.interfaces import Authenticator
from schemas import Identity

from .client import Client
from .exceptions import APIError, ResponseValidationError

logger = logging.getLogger(__name__)


class AuthClient(Client, Authenticator):
    """Resolves the identity behind the configured ``access_token``."""

    USER_PATH = "/auth/v1/user"

    async def get_current_user(self) -> Identity | None:
        if not self.access_token:
            return None

        try:
            response = await self.get(self.USER_PATH)
        except APIError as e:
            if e.status_code in (401, 403):
                logger.info(f"Session rejected by auth service ({e.status_code})")
                return None
            raise

        try:
            return Identity.model_validate(response.json())
        except PydanticValidationError as e:
            raise ResponseValidationError(
                "User record failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e
