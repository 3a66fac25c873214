"""수령 토큰 생성 모듈.

Pickup token generation. Tokens are the bearer credential a store uses to
confirm or cancel a pickup, so they come from ``secrets`` rather than
``random``.

Formats:
    - alphanumeric: 대문자+숫자, 기본 10자 (uppercase letters and digits, default 10 chars)
    - numeric: 숫자 6자 (six digits)
"""

import secrets
import string

from app.config import settings

ALPHANUMERIC_ALPHABET: str = string.ascii_uppercase + string.digits
NUMERIC_LENGTH: int = 6


def generate_pickup_token(token_format: str | None = None, length: int | None = None) -> str:
    """새 수령 토큰을 생성합니다.

    Generate a new pickup token in the configured (or given) format.

    Args:
        token_format: "alphanumeric" 또는 "numeric", 기본값은 설정 값
                      (Defaults to settings.PICKUP_TOKEN_FORMAT)
        length: 영숫자 토큰 길이, 기본값은 설정 값
                (Alphanumeric length, defaults to settings.PICKUP_TOKEN_LENGTH)

    Returns:
        str: 토큰 문자열 (Token string)

    Raises:
        ValueError: 알 수 없는 형식 (Unknown format)
    """
    token_format = token_format or settings.PICKUP_TOKEN_FORMAT
    if token_format == "numeric":
        return "".join(secrets.choice(string.digits) for _ in range(NUMERIC_LENGTH))
    if token_format == "alphanumeric":
        size: int = length or settings.PICKUP_TOKEN_LENGTH
        return "".join(secrets.choice(ALPHANUMERIC_ALPHABET) for _ in range(size))
    raise ValueError(f"Unknown pickup token format: {token_format}")


def normalize_token(token: str) -> str:
    """사용자 입력 토큰 정규화 (Trim whitespace and uppercase user-typed tokens)."""
    return token.strip().upper()
