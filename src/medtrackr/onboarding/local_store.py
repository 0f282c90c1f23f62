"""
Local Account/Profile Store

JSON-file backed account store used by the terminal front end.
"""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from passlib.context import CryptContext

from medtrackr.onboarding.aggregator import OnboardingResponse
from medtrackr.onboarding.credentials import Credentials
from medtrackr.onboarding.exceptions import (
    AccountExistsError,
    InvalidCredentialsError,
    PermissionDeniedError,
    PersistenceError,
)
from medtrackr.onboarding.logging_config import get_logger
from medtrackr.onboarding.store import AccountProfileStore
from medtrackr.onboarding.validators import MIN_PASSWORD_LENGTH, validate_email

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class LocalProfileStore(AccountProfileStore):
    """Accounts and profile documents kept in a single JSON file.

    File layout::

        {"accounts": {<id>: {...}}, "profiles": {<id>: {...}}}
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self, stage: str) -> Dict[str, Any]:
        if not self.path.exists():
            return {"accounts": {}, "profiles": {}}
        try:
            data = json.loads(self.path.read_text())
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Cannot read account store at {self.path}", stage=stage, details=str(e)
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Account store at {self.path} is unreadable", stage=stage, details=str(e)
            ) from e
        data.setdefault("accounts", {})
        data.setdefault("profiles", {})
        return data

    def _save(self, data: Dict[str, Any], stage: str):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2))
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Cannot write account store at {self.path}", stage=stage, details=str(e)
            ) from e
        except OSError as e:
            raise PersistenceError(
                f"Failed to write account store at {self.path}", stage=stage, details=str(e)
            ) from e

    def _find_account_id(self, data: Dict[str, Any], email: str) -> Optional[str]:
        for account_id, account in data["accounts"].items():
            if account["email"] == email:
                return account_id
        return None

    async def create_account(self, email: str, password: str) -> str:
        stage = "create_account"
        email = email.strip().lower()
        valid, message = validate_email(email)
        if not valid or not password or len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidCredentialsError(details=message if not valid else "Password too short")

        data = self._load(stage)
        if self._find_account_id(data, email):
            raise AccountExistsError(email=email)

        account_id = uuid.uuid4().hex
        data["accounts"][account_id] = {
            "email": email,
            "password_hash": hash_password(password),
            "display_name": None,
            "created_at": datetime.now().isoformat(),
        }
        self._save(data, stage)
        logger.info(f"Created account {account_id} for {email}")
        return account_id

    async def set_display_name(self, account_id: str, full_name: str) -> None:
        stage = "set_display_name"
        data = self._load(stage)
        account = data["accounts"].get(account_id)
        if account is None:
            raise PermissionDeniedError(f"Unknown account {account_id}", stage=stage)
        account["display_name"] = full_name
        self._save(data, stage)

    async def write_profile(
        self,
        account_id: str,
        credentials: Credentials,
        response: OnboardingResponse
    ) -> None:
        stage = "write_profile"
        data = self._load(stage)
        if account_id not in data["accounts"]:
            raise PermissionDeniedError(f"Unknown account {account_id}", stage=stage)

        now = datetime.now().isoformat()
        existing = data["profiles"].get(account_id, {})
        # Merge: a rewrite keeps the original creation time
        data["profiles"][account_id] = {
            **existing,
            "full_name": credentials.full_name,
            "email": credentials.email,
            "role": response.role.value,
            "onboarding_completed": True,
            "onboarding_responses": response.to_dict(),
            "created_at": existing.get("created_at", now),
            "updated_at": now,
        }
        self._save(data, stage)
        logger.info(f"Wrote onboarding profile for account {account_id}")

    def get_profile(self, email: str) -> Optional[Dict[str, Any]]:
        """Get the stored profile document for an email, if any."""
        data = self._load("read_profile")
        account_id = self._find_account_id(data, email.strip().lower())
        if account_id is None:
            return None
        return data["profiles"].get(account_id)

    def verify_login(self, email: str, password: str) -> bool:
        """Check an email/password pair against the stored hash."""
        data = self._load("read_profile")
        account_id = self._find_account_id(data, email.strip().lower())
        if account_id is None:
            return False
        return verify_password(password, data["accounts"][account_id]["password_hash"])
