import logging
import bcrypt
from config import BCRYPT_ROUNDS

logger = logging.getLogger("messageboard.security")


class PasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Hash a delete password with a fresh salt"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify password against hash"""
        if not password or not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
        except ValueError:
            # stored value is not a bcrypt hash
            logger.warning("Refusing to verify against a malformed password hash")
            return False
