"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, token refresh, current user info and password change.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema shared by every role.

    Attributes:
        email: 로그인 이메일 (Login e-mail)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: str = Field(min_length=3)  # 로그인 이메일 (Login e-mail)
    password: str = Field(min_length=1)  # 비밀번호: 평문 (Plain text)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after successful login or token refresh. ``role`` and
    ``must_change_password`` let the client route the user without an extra
    round trip.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer")
        role: 역할 (admin / store / employee)
        must_change_password: 비밀번호 변경 필요 여부 (Still on the default password)
    """

    access_token: str  # JWT 액세스 토큰 (Access token)
    refresh_token: str  # JWT 리프레시 토큰 (Refresh token)
    token_type: str = "bearer"  # 토큰 유형: 항상 "bearer"
    role: str  # 역할 이름 (Role name)
    must_change_password: bool = False  # 첫 로그인 비밀번호 변경 필요 (Forced password change)


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마 (Exchange a refresh token for a new pair)."""

    refresh_token: str  # 기존 리프레시 토큰 (Current refresh token)


class UserMeResponse(BaseModel):
    """현재 사용자 정보 응답 스키마 (GET /auth/me).

    Attributes:
        id: 사용자 UUID (User identifier)
        email: 이메일 (Login e-mail)
        full_name: 표시 이름 (Display name)
        role: 역할 (Role name)
        is_active: 활성 상태 (Active flag)
        must_change_password: 비밀번호 변경 필요 여부
    """

    id: str  # 사용자 UUID 문자열 (User UUID as string)
    email: str  # 로그인 이메일 (Login e-mail)
    full_name: str  # 표시 이름 (Display name)
    role: str  # 역할 이름 (Role name)
    is_active: bool  # 활성 상태 (Active flag)
    must_change_password: bool  # 비밀번호 변경 필요 (Forced password change)


class PasswordChangeRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Password change request. Strength rules are checked by the auth service
    so every violation is reported in one response.

    Attributes:
        current_password: 현재 비밀번호 (Current password)
        new_password: 새 비밀번호 (New password)
        confirm_password: 새 비밀번호 확인 (Confirmation, must match)
    """

    current_password: str  # 현재 비밀번호 (Current password)
    new_password: str  # 새 비밀번호 (New password)
    confirm_password: str  # 새 비밀번호 확인 (Confirmation)
