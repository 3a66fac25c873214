"""비밀번호 해싱, 검증 및 강도 정책 모듈.

Password hashing, verification and strength policy.
Hashing uses bcrypt directly; plaintext passwords are never stored.

Strength policy (checked on password change):
    - 최소 8자 (at least 8 characters)
    - 대문자 1개 이상 (one uppercase letter)
    - 소문자 1개 이상 (one lowercase letter)
    - 숫자 1개 이상 (one digit)
    - 특수문자 1개 이상 (one symbol from PASSWORD_SYMBOLS)
"""

import bcrypt

MIN_PASSWORD_LENGTH: int = 8
PASSWORD_SYMBOLS: str = '!@#$%^&*(),.?":{}|<>'


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다 (True if the password matches)."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def password_policy_errors(password: str) -> list[str]:
    """비밀번호 정책 위반 목록을 반환합니다.

    Return one message per unmet strength rule; an empty list means the
    password is acceptable.

    Args:
        password: 검사할 비밀번호 (Candidate password)

    Returns:
        list[str]: 위반 메시지 목록 (Violated rules, Portuguese)
    """
    errors: list[str] = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres")
    if not any(ch.isupper() for ch in password):
        errors.append("A senha deve conter pelo menos uma letra maiúscula")
    if not any(ch.islower() for ch in password):
        errors.append("A senha deve conter pelo menos uma letra minúscula")
    if not any(ch.isdigit() for ch in password):
        errors.append("A senha deve conter pelo menos um número")
    if not any(ch in PASSWORD_SYMBOLS for ch in password):
        errors.append("A senha deve conter pelo menos um caractere especial")
    return errors


def is_strong_password(password: str) -> bool:
    return not password_policy_errors(password)
