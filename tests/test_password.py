"""비밀번호 해시 및 정책 테스트."""

from app.utils.password import (
    hash_password,
    is_strong_password,
    password_policy_errors,
    verify_password,
)


class TestPasswordHash:
    """bcrypt 해시 테스트."""

    def test_hash_and_verify(self):
        hashed = hash_password("Segura1!")
        assert hashed != "Segura1!"
        assert verify_password("Segura1!", hashed) is True
        assert verify_password("segura1!", hashed) is False


class TestPasswordPolicy:
    """비밀번호 정책 테스트."""

    def test_strong_password(self):
        assert password_policy_errors("Segura1!") == []
        assert is_strong_password("Segura1!") is True

    def test_default_password_is_weak(self):
        """기본 비밀번호 123456은 정책 위반."""
        errors = password_policy_errors("123456")
        assert len(errors) == 4  # 길이, 대문자, 소문자, 특수문자

    def test_missing_symbol(self):
        errors = password_policy_errors("Segura123")
        assert errors == ["A senha deve conter pelo menos um caractere especial"]

    def test_missing_uppercase(self):
        assert len(password_policy_errors("segura1!")) == 1

    def test_missing_lowercase(self):
        assert len(password_policy_errors("SEGURA1!")) == 1

    def test_missing_digit(self):
        assert len(password_policy_errors("Segura!!")) == 1

    def test_too_short(self):
        assert password_policy_errors("Se1!") == ["A senha deve ter pelo menos 8 caracteres"]

    def test_quote_is_a_symbol(self):
        assert is_strong_password('Segura1"') is True
