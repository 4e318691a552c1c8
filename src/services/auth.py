"""Authentication service: token codec, password hashing and session lifecycle."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.models.user import User, UserToken
from src.services.exceptions import InvalidCredentials, InvalidToken, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

AUTH_PURPOSE = "auth"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a session token."""

    user_id: uuid.UUID
    purpose: str


@dataclass(frozen=True)
class AuthSession:
    """The user behind a request and the token it was made with."""

    user: User
    token: str


class TokenCodec:
    """Issues and verifies signed session tokens.

    Verification only proves the token was signed with our secret for a given
    user; whether the session is still live is checked against the user's
    token list by ``Authenticator``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration_minutes: int | None = None):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration_minutes = expiration_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expiration_minutes)

    def issue(self, user_id: uuid.UUID, purpose: str = AUTH_PURPOSE) -> str:
        """Create a signed token for a user."""
        to_encode = {
            "sub": str(user_id),
            "access": purpose,
            # Nonce so that two logins never produce the same token
            "jti": uuid.uuid4().hex,
        }
        if self.expiration_minutes is not None:
            to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=self.expiration_minutes)
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token and check its signature.

        Raises:
            InvalidToken: bad signature, expired token or malformed payload.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken("Invalid token") from e

        subject = payload.get("sub")
        purpose = payload.get("access")
        if not isinstance(subject, str) or not isinstance(purpose, str):
            raise InvalidToken("Malformed token payload")
        try:
            user_id = uuid.UUID(subject)
        except ValueError as e:
            raise InvalidToken("Malformed token subject") from e
        return TokenClaims(user_id=user_id, purpose=purpose)


class Authenticator:
    """Resolves a request token to a live user."""

    def __init__(self, db: Session, codec: TokenCodec):
        self.db = db
        self.codec = codec

    def authenticate(self, token: str | None) -> AuthSession:
        if not token:
            raise Unauthorized("Missing token")

        claims = self.codec.verify(token)
        if claims.purpose != AUTH_PURPOSE:
            raise Unauthorized("Wrong token purpose")

        user = (
            self.db.query(User)
            .join(UserToken, UserToken.user_id == User.id)
            .filter(
                User.id == claims.user_id,
                UserToken.token == token,
                UserToken.access == AUTH_PURPOSE,
            )
            .first()
        )
        if user is None:
            logger.warning(f"Rejected revoked or unknown token for user {claims.user_id}")
            raise Unauthorized("Token is not live")

        return AuthSession(user=user, token=token)


class SessionService:
    """Signup, login and logout."""

    def __init__(self, db: Session, codec: TokenCodec):
        self.db = db
        self.codec = codec

    def _add_token(self, user: User) -> str:
        token = self.codec.issue(user.id)
        self.db.add(UserToken(user_id=user.id, access=AUTH_PURPOSE, token=token))
        return token

    def signup(self, email: str, password: str) -> AuthSession:
        """Create a user and open its first session.

        Raises:
            ValidationError: the email is already registered.
        """
        email = email.strip()
        if not email:
            raise ValidationError("Email is required")

        if get_user_by_email(self.db, email):
            raise ValidationError("Email already registered")

        user = User(email=email, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            # Flush first so a concurrent duplicate fails before the token is issued
            self.db.flush()
            token = self._add_token(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError("Email already registered") from e

        self.db.refresh(user)
        logger.info(f"Signed up user {user.id}")
        return AuthSession(user=user, token=token)

    def login(self, email: str, password: str) -> AuthSession:
        """Check credentials and open an additional session.

        Raises:
            InvalidCredentials: unknown email or wrong password.
        """
        user = get_user_by_email(self.db, email.strip())
        if user is None:
            # Keep the unknown-email path as slow as a wrong password
            pwd_context.dummy_verify()
            logger.warning("Login failed: unknown email")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentials()

        token = self._add_token(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Opened session for user {user.id}")
        return AuthSession(user=user, token=token)

    def logout(self, session: AuthSession) -> None:
        """Remove exactly the session's token; a no-op if it is already gone."""
        removed = (
            self.db.query(UserToken)
            .filter(UserToken.user_id == session.user.id, UserToken.token == session.token)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"Closed session for user {session.user.id} ({removed} token(s) removed)")
