"""Account store — the persistence contract the service depends on.

Learn: AccountService only ever talks to an AccountStore. The protocol
is small on purpose: find by email, find by id, create. SqlAccountStore
is the production implementation; tests swap in an in-memory one.

Failures are translated at this boundary:
- unique violation on email → DuplicateAccountError
- any other database error → StoreError
"""

import uuid
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accountd.db.models import Account


class StoreError(Exception):
    """Raised when the backing store fails."""


class DuplicateAccountError(StoreError):
    """Raised when an insert collides with an existing email."""


class AccountStore(Protocol):
    async def get_by_email(self, email: str) -> Optional[Account]: ...

    async def get_by_id(self, account_id: str) -> Optional[Account]: ...

    async def create(self, *, email: str, name: str, password_hash: str) -> Account: ...


class SqlAccountStore:
    """AccountStore backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[Account]:
        try:
            result = await self.db.execute(select(Account).where(Account.email == email))
        except SQLAlchemyError as e:
            raise StoreError("Account lookup by email failed") from e
        return result.scalars().first()

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        try:
            key = uuid.UUID(str(account_id))
        except ValueError:
            return None
        try:
            return await self.db.get(Account, key)
        except SQLAlchemyError as e:
            raise StoreError("Account lookup by id failed") from e

    async def create(self, *, email: str, name: str, password_hash: str) -> Account:
        """Insert and commit a new account. The store assigns id and created_at."""
        account = Account(email=email, name=name, password_hash=password_hash)
        self.db.add(account)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateAccountError("Email already registered") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Account insert failed") from e
        return account
