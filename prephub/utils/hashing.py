from passlib.context import CryptContext

from prephub.errors import ValidationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BCRYPT_MAX_BYTES = 72


def _check_bcrypt_len(password: str):
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password too long (bcrypt max 72 bytes)")


def hash_password(password: str):
    _check_bcrypt_len(password)
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str):
    # 過長的密碼不可能對得上，直接視為不符
    if not plain_password or not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return pwd_context.verify(plain_password, hashed_password)
