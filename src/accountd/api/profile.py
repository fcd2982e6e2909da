"""Profile API — the authenticated caller's own account."""

from fastapi import APIRouter, Depends

from accountd.api.deps import get_account_service
from accountd.auth.dependencies import require_auth
from accountd.schemas.account import Envelope, ProfileData, UserRead
from accountd.services.account_service import AccountService

router = APIRouter()


@router.get("/me", response_model=Envelope[ProfileData])
async def get_me(
    account_id: str = Depends(require_auth),
    svc: AccountService = Depends(get_account_service),
):
    """Get the current authenticated user's profile."""
    account = await svc.get_profile(account_id)
    return Envelope(data=ProfileData(user=UserRead.model_validate(account)))
