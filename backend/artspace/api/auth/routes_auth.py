"""Authentication routes.

Login is an email lookup with no password; the demo has no credentials.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr

from artspace.api.deps import get_account_service
from artspace.domain.accounts.models import PaymentMethod, User, UserRole
from artspace.domain.accounts.services import AccountService

logger = logging.getLogger(__name__)

router = APIRouter()


class SignupRequest(BaseModel):
    """Signup request model."""
    name: str
    email: EmailStr
    role: UserRole = UserRole.BUYER
    payment_method: Optional[PaymentMethod] = None
    payment_identifier: Optional[str] = None  # required for artists


class LoginRequest(BaseModel):
    """Login request model."""
    email: EmailStr


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, accounts: AccountService = Depends(get_account_service)):
    """Sign up and start a session as the new user."""
    logger.info("Signup request: role=%s", request.role.value)
    return accounts.sign_up(
        name=request.name,
        email=request.email,
        role=request.role,
        payment_method=request.payment_method,
        payment_identifier=request.payment_identifier,
    )


@router.post("/login", response_model=User)
async def login(request: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    return accounts.log_in(request.email)


@router.post("/logout")
async def logout(accounts: AccountService = Depends(get_account_service)):
    accounts.log_out()
    return {"ok": True}


@router.get("/me", response_model=Optional[User])
async def me(accounts: AccountService = Depends(get_account_service)):
    """Current session user, or null."""
    return accounts.current_user()
