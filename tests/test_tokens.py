"""수령 토큰 생성 테스트."""

import string

import pytest

from app.utils.tokens import ALPHANUMERIC_ALPHABET, generate_pickup_token, normalize_token


class TestGenerateToken:
    """토큰 생성 테스트."""

    def test_alphanumeric_default_length(self):
        token = generate_pickup_token("alphanumeric", 10)
        assert len(token) == 10
        assert all(ch in ALPHANUMERIC_ALPHABET for ch in token)

    def test_alphanumeric_custom_length(self):
        assert len(generate_pickup_token("alphanumeric", 16)) == 16

    def test_numeric_is_six_digits(self):
        token = generate_pickup_token("numeric")
        assert len(token) == 6
        assert all(ch in string.digits for ch in token)

    def test_tokens_differ(self):
        tokens = {generate_pickup_token("alphanumeric", 10) for _ in range(50)}
        assert len(tokens) == 50

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            generate_pickup_token("emoji")


class TestNormalizeToken:
    """토큰 정규화 테스트."""

    def test_strip_and_upper(self):
        assert normalize_token("  ab12cd  ") == "AB12CD"

    def test_numeric_unchanged(self):
        assert normalize_token("123456") == "123456"
