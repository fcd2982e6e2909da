"""Shared route dependencies: the account store and service.

Tests override get_account_store to run the API against an in-memory
store; everything above it (service, hasher, tokens, auth gate) stays real.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from accountd.auth.dependencies import get_password_hasher, get_token_issuer
from accountd.auth.jwt import TokenIssuer
from accountd.auth.password import PasswordHasher
from accountd.db.engine import get_db
from accountd.db.store import AccountStore, SqlAccountStore
from accountd.services.account_service import AccountService


def get_account_store(db: AsyncSession = Depends(get_db)) -> AccountStore:
    return SqlAccountStore(db)


def get_account_service(
    store: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(store, hasher, tokens)
