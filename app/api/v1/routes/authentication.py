"""Demo bearer token issuer."""
import logging

from fastapi import APIRouter, Depends

from app.api.v1.schemas.city_schemas import AuthenticationRequestSchema
from app.config import Settings, get_settings
from app.core.dependencies import get_credential_verifier
from app.core.errors import AuthenticationError
from app.core.security import CredentialVerifier, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authentication", tags=["authentication"])


@router.post("/authenticate", response_model=str)
async def authenticate(
    body: AuthenticationRequestSchema,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange a user name and password for a signed token.

    Returns the JWT as a JSON string.
    """
    user = verifier.verify(body.user_name, body.password)
    if user is None:
        raise AuthenticationError("Invalid credentials")

    logger.info(f"Issued token for user {user.user_id}")
    return create_access_token(user, settings)
