import logging
from fastapi import APIRouter, HTTPException
from delivery_quote.schemas.auth import LoginIn, TokenOut
from delivery_quote.core.config import settings
from delivery_quote.core.security import create_access_token, verify_password
from delivery_quote.core.enums import UserRole, AuditAction
from delivery_quote.utils.hashing import payload_hash

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn):
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not set")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    if payload.username != settings.ADMIN_USERNAME or not verify_password(
        payload.password, settings.ADMIN_PASSWORD_HASH
    ):
        logger.warning(f"Failed admin login for '{payload.username}'")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    logger.info(
        f"audit action={AuditAction.LOGIN} user={payload.username} "
        f"payload_hash={payload_hash({'username': payload.username})}"
    )

    token = create_access_token(payload.username, UserRole.ADMIN)
    return {"access_token": token}
