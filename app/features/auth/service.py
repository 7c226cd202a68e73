import secrets
from datetime import timedelta
from typing import Any, Dict, Optional, Tuple, Type

from pymongo.errors import DuplicateKeyError

from app.config import Settings
from app.core.logging import logger
from app.core.security import PasswordHasher, Role, TokenMaker, TokenPayload
from app.shared.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidCredentialsException,
    NotFoundException,
)
from app.shared.models import BaseDocument


class AccountService:
    """
    Shared account logic for one role's namespace.

    Subclasses bind ``document_class`` (the Beanie document holding the
    accounts) and ``role`` (the role stamped into issued tokens and required
    from callers of the self-service operations).
    """

    document_class: Type[BaseDocument]
    role: Role

    def __init__(self, settings: Settings, hasher: PasswordHasher, token_maker: TokenMaker):
        self.settings = settings
        self.hasher = hasher
        self.token_maker = token_maker
        # Checked when the username is unknown, so every failed login costs one bcrypt verify
        self._dummy_hash = hasher.hash(secrets.token_hex(16))

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.TOKEN_DURATION_MINUTES)

    async def find_by_username(self, username: str) -> Optional[BaseDocument]:
        return await self.document_class.find_one(self.document_class.username == username)

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is already taken."""
        return await self.find_by_username(username) is not None

    async def email_exists(self, email: str) -> bool:
        """Check whether an email is already registered."""
        account = await self.document_class.find_one(self.document_class.email == email)
        return account is not None

    async def register(self, fields: Dict[str, Any], password: str) -> BaseDocument:
        """
        Create a new account after uniqueness checks.

        Args:
            fields: Public account fields, including ``username`` and ``email``
            password: Plaintext password, stored only as a hash

        Returns:
            The created account document

        Raises:
            ConflictException: If the username or the email is taken
        """
        if await self.username_exists(fields["username"]):
            raise ConflictException("Username already exists")

        if await self.email_exists(fields["email"]):
            raise ConflictException("Email already exists")

        account = self.document_class(
            **fields,
            password_hash=self.hasher.hash(password),
        )

        # The unique indexes settle races between the checks above and the insert
        try:
            await account.insert()
        except DuplicateKeyError:
            raise ConflictException("Username or email already exists")

        logger.info(f"Registered {self.role.value} {account.username}")
        return account

    async def login(self, username: str, password: str) -> Tuple[BaseDocument, str]:
        """
        Authenticate an account and issue a session token.

        Returns:
            tuple: (account, access_token)

        Raises:
            InvalidCredentialsException: For an unknown username or a wrong password alike
        """
        account = await self.find_by_username(username)
        password_hash = account.password_hash if account is not None else self._dummy_hash
        if not self.hasher.verify(password, password_hash) or account is None:
            logger.warning(f"Failed {self.role.value} login for {username}")
            raise InvalidCredentialsException()

        access_token, _ = self.token_maker.issue_token(account.username, self.role, self.token_ttl)

        logger.info(f"{self.role.value.capitalize()} {account.username} logged in")
        return account, access_token

    def require_role(self, identity: TokenPayload):
        """Reject identities of the other role."""
        if identity.role != self.role:
            logger.warning(f"{identity.role.value} {identity.sub} denied access to {self.role.value} account endpoint")
            raise ForbiddenException(f"Only {self.role.value}s can access this endpoint")

    async def get_account(self, identity: TokenPayload) -> BaseDocument:
        """Load the caller's own account."""
        self.require_role(identity)

        account = await self.find_by_username(identity.sub)
        if account is None:
            raise NotFoundException(f"{self.role.value.capitalize()} not found")

        return account

    async def update_profile(self, identity: TokenPayload, update_data: Dict[str, Any]) -> BaseDocument:
        """
        Update the caller's profile.

        Only keys present with a non-None value are applied. A changed email
        is re-checked for uniqueness before anything is written.
        """
        account = await self.get_account(identity)

        changes = {key: value for key, value in update_data.items() if value is not None}

        new_email = changes.get("email")
        if new_email is not None and new_email != account.email:
            if await self.email_exists(new_email):
                raise ConflictException("Email already in use")

        for key, value in changes.items():
            setattr(account, key, value)
        account.update_timestamp()

        try:
            await account.save()
        except DuplicateKeyError:
            raise ConflictException("Email already in use")

        logger.info(f"Updated profile of {self.role.value} {account.username}: {sorted(changes)}")
        return account

    async def change_password(self, identity: TokenPayload, current_password: str, new_password: str) -> bool:
        """
        Replace the caller's password.

        Raises:
            InvalidCredentialsException: If the current password does not verify
        """
        account = await self.get_account(identity)

        if not self.hasher.verify(current_password, account.password_hash):
            raise InvalidCredentialsException("Incorrect current password")

        account.password_hash = self.hasher.hash(new_password)
        account.update_timestamp()
        await account.save()

        logger.info(f"Changed password of {self.role.value} {account.username}")
        return True

    async def delete_account(self, identity: TokenPayload) -> bool:
        """Remove the caller's account. Appointments and prescriptions are kept."""
        account = await self.get_account(identity)
        await account.delete()

        logger.info(f"Deleted {self.role.value} account {identity.sub}")
        return True
