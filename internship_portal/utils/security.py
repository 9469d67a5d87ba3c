from werkzeug.security import generate_password_hash, check_password_hash


def generate_hash(password: str) -> str:
    return generate_password_hash(password)


def check_hash(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return check_password_hash(hashed, password)
    except ValueError:
        # unknown hashing method in a stored value
        return False
