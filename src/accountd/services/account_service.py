"""Account service — signup, login, and profile lookup.

Learn: Service layer separates business logic from HTTP routing.
API routes call the service, the service calls the store, hasher and
token issuer. Every failure leaves here as a ServiceError with an
ErrorCode; collaborator exceptions (StoreError, HashingError) are
logged and turned into a generic InternalError so their details never
reach a client.

bcrypt is CPU-bound, so hashing and verification run in the threadpool
instead of blocking the event loop.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi.concurrency import run_in_threadpool

from accountd.auth.email import normalize_email
from accountd.auth.jwt import TokenIssuer
from accountd.auth.password import HashingError, PasswordHasher
from accountd.db.models import Account
from accountd.db.store import AccountStore, DuplicateAccountError, StoreError
from accountd.errors import (
    BadPasswordError,
    DuplicateEmailError,
    EmailNotFoundError,
    InternalError,
    InvalidInputError,
    InvalidTokenError,
)

logger = structlog.get_logger()

TOKEN_TYPE = "Bearer"


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    token_type: str
    expires_in: int


class AccountService:
    """Business logic for user accounts."""

    def __init__(self, store: AccountStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    # ─── Signup ─────────────────────────────────────────

    async def signup(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> str:
        """Create an account and return its id.

        Learn: The lookup before insert gives the friendly error in the
        common case. Two concurrent signups for the same address can both
        pass it; the store's unique constraint catches the loser, which
        also surfaces as DUPLICATE_EMAIL.
        """
        if not email or not password or not name:
            raise InvalidInputError("Email, password and name are required")

        try:
            normalized = normalize_email(email)
        except ValueError:
            raise InvalidInputError("Email address is not valid") from None

        try:
            if await self.store.get_by_email(normalized) is not None:
                raise DuplicateEmailError()

            password_hash = await run_in_threadpool(self.hasher.hash, password)
            account = await self.store.create(
                email=normalized, name=name, password_hash=password_hash
            )
        except DuplicateAccountError:
            logger.info("account.signup_race_lost")
            raise DuplicateEmailError() from None
        except (StoreError, HashingError) as e:
            logger.error("account.signup_failed", error_type=type(e).__name__, exc_info=True)
            raise InternalError() from e

        logger.info("account.created", account_id=str(account.id))
        return str(account.id)

    # ─── Login ──────────────────────────────────────────

    async def login(self, email: Optional[str], password: Optional[str]) -> IssuedToken:
        """Check credentials and issue a bearer token."""
        if not email or not password:
            raise InvalidInputError("Email and password are required")

        try:
            normalized = normalize_email(email)
        except ValueError:
            # No account can be stored under an address that doesn't normalize.
            raise EmailNotFoundError() from None

        try:
            account = await self.store.get_by_email(normalized)
            if account is None:
                logger.info("account.login_failed", reason="email_not_found")
                raise EmailNotFoundError()

            matches = await run_in_threadpool(
                self.hasher.verify, password, account.password_hash
            )
        except (StoreError, HashingError) as e:
            logger.error("account.login_error", error_type=type(e).__name__, exc_info=True)
            raise InternalError() from e

        if not matches:
            logger.info("account.login_failed", reason="bad_password", account_id=str(account.id))
            raise BadPasswordError()

        token = self.tokens.issue(account.id)
        logger.info("account.login", account_id=str(account.id))
        return IssuedToken(
            access_token=token,
            token_type=TOKEN_TYPE,
            expires_in=self.tokens.expires_in,
        )

    # ─── Profile ────────────────────────────────────────

    async def get_profile(self, account_id: str) -> Account:
        """Load the account a verified token points at.

        Learn: A valid token only proves the account existed at login.
        The store is asked again; an account that has since vanished is
        treated as a bad token, not a 404.
        """
        try:
            account = await self.store.get_by_id(account_id)
        except StoreError as e:
            logger.error("account.profile_error", error_type=type(e).__name__, exc_info=True)
            raise InternalError() from e

        if account is None:
            logger.info("auth.rejected", reason="account_missing", account_id=account_id)
            raise InvalidTokenError()
        return account
