import secrets

# Digits 1-9 and uppercase letters without the look-alikes I and O
ID_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZ"
ID_LENGTH = 10


def generate_id(length: int = ID_LENGTH) -> str:
    """Generate a short random code used for registration IDs and upload names"""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def check_admin_password(supplied: str, expected: str) -> bool:
    """Plain equality against the configured admin secret; empty is never accepted"""
    if not supplied:
        return False
    return supplied == expected
