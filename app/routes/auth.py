# app/routes/auth.py
import hmac
import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import DuplicateKeyError

from app.core.config import settings
from app.core.error_messages import ErrorResponses  # Centralized error messages
from app.database import get_database
from app.models.user import Role, UserStore
from app.schemas.tasks import MessageResponse
from app.schemas.user import CreateAdminSchema, LoginSchema, RegisterSchema, TokenResponse
from app.utils.auth_utils import create_access_token
from app.utils.hash_utils import hash_password, verify_password

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["Auth"])


def get_user_store(db=Depends(get_database)) -> UserStore:
    return UserStore(db)


async def _create_account(users: UserStore, data: RegisterSchema, role: Role) -> str:
    if await users.find_by_email(data.email):
        raise ErrorResponses.USER_EXISTS
    try:
        user_id = await users.create(data.name, data.email, hash_password(data.password), role)
    except DuplicateKeyError:
        # lost a race with a concurrent registration for the same email
        raise ErrorResponses.USER_EXISTS
    logger.info("Registered %s account %s", role.value, user_id)
    return user_id


@auth_router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def register(data: RegisterSchema, users: UserStore = Depends(get_user_store)):
    await _create_account(users, data, Role.USER)
    return {"message": "User registered successfully"}


@auth_router.post("/login", response_model=TokenResponse)
async def login(data: LoginSchema, users: UserStore = Depends(get_user_store)):
    user = await users.find_by_email(data.email)
    if not user or not verify_password(data.password, user.password):
        logger.warning("Failed login attempt for %s", data.email)
        raise ErrorResponses.INVALID_CREDENTIALS

    token = create_access_token({"userId": user.id, "role": user.role.value})
    return {"token": token, "role": user.role}


@auth_router.post("/create-admin", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def create_admin(data: CreateAdminSchema, users: UserStore = Depends(get_user_store)):
    expected = settings.ADMIN_SECRET
    if not expected or not hmac.compare_digest(data.adminSecret.encode(), expected.encode()):
        logger.warning("Admin setup attempted with an invalid secret")
        raise ErrorResponses.INVALID_ADMIN_SECRET

    await _create_account(users, data, Role.ADMIN)
    return {"message": "Admin user created successfully"}
