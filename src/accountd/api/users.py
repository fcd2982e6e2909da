"""Users API — signup and login.

Learn: Routes handle HTTP concerns (status codes, envelopes), the
service handles business logic. Failures are raised by the service as
ServiceError and rendered by the handlers in api/errors.py.
- POST /users/signup → create an account
- POST /users/login → email/password → bearer token
"""

from fastapi import APIRouter, Depends

from accountd.api.deps import get_account_service
from accountd.schemas.account import (
    Envelope,
    LoginRequest,
    SignupData,
    SignupRequest,
    TokenData,
)
from accountd.services.account_service import AccountService

router = APIRouter(prefix="/users")


@router.post("/signup", response_model=Envelope[SignupData], status_code=201)
async def signup(body: SignupRequest, svc: AccountService = Depends(get_account_service)):
    """Create a new user account."""
    user_id = await svc.signup(email=body.email, password=body.password, name=body.name)
    return Envelope(data=SignupData(user_id=user_id))


@router.post("/login", response_model=Envelope[TokenData])
async def login(body: LoginRequest, svc: AccountService = Depends(get_account_service)):
    """Login with email and password → bearer token."""
    issued = await svc.login(email=body.email, password=body.password)
    return Envelope(
        data=TokenData(
            access_token=issued.access_token,
            token_type=issued.token_type,
            expires_in=issued.expires_in,
        )
    )
