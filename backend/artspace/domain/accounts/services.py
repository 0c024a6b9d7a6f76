"""Account domain services."""
import logging
from typing import Optional

from artspace.domain.accounts.models import PaymentAccount, PaymentMethod, User, UserRole
from artspace.domain.common.errors import ConflictError, NotFoundError, ValidationError
from artspace.domain.common.types import utcnow
from artspace.infra.storage.store import MarketStore

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Comparison key for emails: surrounding whitespace and case are ignored."""
    return (email or "").strip().casefold()


class AccountService:
    """Signup, email login, profile edits and admin suspension.

    Login is a plain email lookup; there are no credentials in this demo.
    """

    def __init__(self, store: MarketStore):
        self.store = store

    def find_by_email(self, email: str) -> Optional[User]:
        key = normalize_email(email)
        return next((u for u in self.store.read_users() if normalize_email(u.email) == key), None)

    def get_user(self, user_id: str) -> User:
        user = next((u for u in self.store.read_users() if u.id == user_id), None)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self) -> list[User]:
        return self.store.read_users()

    def sign_up(
        self,
        name: str,
        email: str,
        role: UserRole,
        payment_method: Optional[PaymentMethod] = None,
        payment_identifier: Optional[str] = None,
    ) -> User:
        """Register a user and make it the session user.

        Artists must connect a payment account during signup; other roles skip it.
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if not email:
            raise ValidationError("Email is required")

        users = self.store.read_users(strict=True)
        key = normalize_email(email)
        if any(normalize_email(u.email) == key for u in users):
            raise ConflictError("This email is already registered.")

        payment_account = None
        if role == UserRole.ARTIST:
            identifier = (payment_identifier or "").strip()
            if not identifier:
                raise ValidationError("Payment account is mandatory for Artists.")
            payment_account = PaymentAccount(
                type=payment_method or PaymentMethod.PAYPAL,
                identifier=identifier,
                connected_at=utcnow(),
            )

        user = User.create(name=name, email=email, role=role, payment_account=payment_account)
        with self.store.transact() as tx:
            tx.write_users([*users, user])
            tx.set_session(user)
        logger.info("User signed up: id=%s role=%s", user.id, user.role.value)
        return user

    def log_in(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise NotFoundError("User", email)
        self.store.set_session(user)
        logger.info("User logged in: id=%s", user.id)
        return user

    def log_out(self) -> None:
        self.store.set_session(None)

    def current_user(self) -> Optional[User]:
        """Session user, or None. A session pointing at a removed user is cleared."""
        session_user = self.store.read_session()
        if session_user is None:
            return None
        if not any(u.id == session_user.id for u in self.store.read_users()):
            logger.info("Clearing stale session for removed user %s", session_user.id)
            self.store.set_session(None)
            return None
        return session_user

    def update_profile(
        self,
        user_id: str,
        name: str,
        bio: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        payment_identifier: Optional[str] = None,
    ) -> User:
        """Replace name, bio and payment account. An empty identifier disconnects the account.

        Artwork and order snapshots of the old name are left untouched.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")

        users = self.store.read_users(strict=True)
        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            raise NotFoundError("User", user_id)

        identifier = (payment_identifier or "").strip()
        payment_account = None
        if identifier:
            existing = user.payment_account
            payment_account = PaymentAccount(
                type=payment_method or (existing.type if existing else PaymentMethod.PAYPAL),
                identifier=identifier,
                connected_at=existing.connected_at if existing else utcnow(),
            )

        updated = user.model_copy(update={"name": name, "bio": bio, "payment_account": payment_account})
        session_user = self.store.read_session()
        with self.store.transact() as tx:
            tx.write_users([updated if u.id == user_id else u for u in users])
            if session_user is not None and session_user.id == user_id:
                tx.set_session(updated)
        return updated

    def remove_user(self, user_id: str) -> None:
        """Admin suspension: drop the record and any session pointing at it."""
        users = self.store.read_users(strict=True)
        remaining = [u for u in users if u.id != user_id]
        if len(remaining) == len(users):
            raise NotFoundError("User", user_id)
        session_user = self.store.read_session()
        with self.store.transact() as tx:
            tx.write_users(remaining)
            if session_user is not None and session_user.id == user_id:
                tx.set_session(None)
        logger.info("User removed: id=%s", user_id)
