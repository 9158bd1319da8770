from passlib.context import CryptContext

from .config import settings


pwd_context = CryptContext(
	schemes=["bcrypt"],
	deprecated="auto",
	bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)


def hash_password(password: str) -> str:
	return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
	try:
		return pwd_context.verify(plain_password, password_hash)
	except ValueError:
		# stored value is not a recognizable hash
		return False
