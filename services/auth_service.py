"""
Local identity store: account directory and the current session
"""

import hmac
import logging
import secrets
from typing import List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from core.database import KeyValueStorage
from core.models import Account, SessionUser, ValidationError

logger = logging.getLogger('healthmate')

TOKEN_KEY = "token"
USER_KEY = "user"
USERS_KEY = "users"

HASH_METHODS = ("scrypt:", "pbkdf2:")

def hash_password(password: str) -> str:
    return generate_password_hash(password)

def verify_password(password: str, stored: str) -> bool:
    if not stored.startswith(HASH_METHODS):
        # Records written before hashing hold the password as-is
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
    return check_password_hash(stored, password)

class AuthService:
    """
    Client-side sign up / log in.

    Failures are reported as ``False``; nothing here raises for bad
    credentials. The session survives restarts through the ``token`` and
    ``user`` records, which are trusted as-is when restored.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.current_user: Optional[SessionUser] = None
        self._restore_session()

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def _restore_session(self) -> None:
        token = self.storage.get_item(TOKEN_KEY)
        user_data = self.storage.load_json(USER_KEY)
        if not token or user_data is None:
            return

        try:
            self.current_user = SessionUser.from_dict(user_data)
            logger.info(f"🔑 Session restored for {self.current_user.email}")
        except ValidationError as e:
            logger.warning(f"⚠️ Stored session ignored: {e}")

    def _load_accounts(self) -> List[Account]:
        records = self.storage.load_json(USERS_KEY, [])
        if not isinstance(records, list):
            logger.warning("⚠️ Stored accounts are not a list, starting with an empty directory")
            records = []

        accounts = []
        for record in records:
            try:
                accounts.append(Account.from_dict(record))
            except ValidationError as e:
                logger.warning(f"⚠️ Skipping invalid account record: {e}")
        return accounts

    def _save_accounts(self, accounts: List[Account]) -> None:
        self.storage.save_json(USERS_KEY, [a.to_dict() for a in accounts])

    def _establish_session(self, account: Account) -> None:
        user = account.session_user
        token = secrets.token_urlsafe(32)

        self.storage.set_item(TOKEN_KEY, token)
        self.storage.save_json(USER_KEY, user.to_dict())
        self.current_user = user

    def signup(self, name: str, email: str, password: str) -> bool:
        accounts = self._load_accounts()

        if any(a.email == email for a in accounts):
            logger.info(f"Signup rejected, {email} already registered")
            return False

        account = Account.create(name=name, email=email, password=hash_password(password))
        accounts.append(account)
        self._save_accounts(accounts)

        self._establish_session(account)
        logger.info(f"➕ Account created: {email}")
        return True

    def login(self, email: str, password: str) -> bool:
        for account in self._load_accounts():
            if account.email == email and verify_password(password, account.password):
                self._establish_session(account)
                logger.info(f"🔑 Logged in: {email}")
                return True

        logger.info(f"Login failed for {email}")
        return False

    def logout(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        if self.current_user is not None:
            logger.info(f"👋 Logged out: {self.current_user.email}")
        self.current_user = None

    def get_accounts_count(self) -> int:
        return len(self._load_accounts())
