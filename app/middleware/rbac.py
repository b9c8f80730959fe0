# app/middleware/rbac.py
import logging

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.core.error_messages import ErrorResponses
from app.models.base import to_object_id
from app.models.user import Role
from app.services.task_access import Caller
from app.utils.auth_utils import decode_token

logger = logging.getLogger(__name__)

# Missing or non-Bearer Authorization headers are rejected here with a 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def get_current_user(token: str = Depends(oauth2_scheme)) -> Caller:
    try:
        payload = decode_token(token)
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise ErrorResponses.INVALID_TOKEN

    user_id = payload.get("userId")
    role = payload.get("role")
    if to_object_id(user_id) is None or role not in {r.value for r in Role}:
        raise ErrorResponses.INVALID_TOKEN
    return Caller(user_id=user_id, role=Role(role))
