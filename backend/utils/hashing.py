# utils/hashing.py
import bcrypt

# bcrypt only looks at the first 72 bytes
def _to_bytes(password: str, max_len: int = 72) -> bytes:
    b = password.encode("utf-8")
    return b[:max_len]

def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt()).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash stored in the database
        return False
