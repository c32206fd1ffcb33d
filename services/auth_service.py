"""
Supabase Auth integration - v2.0
✅ Login / logout
✅ Access-token verification
✅ Role lookup from user_roles (owner / staff)
✅ Profile lookup
"""
from typing import Optional

from schemas.auth import CurrentUser, LoginResponse, Profile
from services.base_db import BaseDBService
from services.exceptions import AuthenticationError


class AuthService(BaseDBService):
    """Supabase authentication and role resolution"""

    DEFAULT_ROLE = "staff"

    # ==================== Login / logout ====================

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Sign in with email and password.

        Raises:
            AuthenticationError: bad credentials or auth service failure
        """
        if not email or not password:
            raise AuthenticationError("Please enter email and password")

        try:
            response = self.supabase.auth.sign_in_with_password({
                "email": email.strip().lower(),
                "password": password,
            })
        except Exception as e:
            self.logger.warning(f"❌ Login failed ({email}): {e}")
            raise AuthenticationError(self._parse_auth_error(e)) from e

        if not response.user or not response.session:
            raise AuthenticationError("Login failed: no user returned")

        user = CurrentUser(
            id=response.user.id,
            email=response.user.email,
            role=self.get_user_role(response.user.id),
        )
        self.logger.info(f"✅ Login: {user.email} ({user.role})")

        return LoginResponse(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user=user,
        )

    def logout(self) -> None:
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            self.logger.error(f"❌ Logout failed: {e}", exc_info=True)
            raise AuthenticationError(f"Logout failed: {e}") from e
        self.logger.info("✅ Signed out")

    # ==================== Token / role ====================

    def verify_token(self, access_token: str) -> Optional[CurrentUser]:
        """
        Resolve an access token to the signed-in user and role.

        Returns:
            CurrentUser, or None when the token is invalid or expired
        """
        if not access_token:
            return None

        try:
            response = self.supabase.auth.get_user(access_token)
        except Exception as e:
            self.logger.warning(f"Token verification failed: {e}")
            return None

        if not response or not response.user:
            return None

        return CurrentUser(
            id=response.user.id,
            email=response.user.email,
            role=self.get_user_role(response.user.id),
        )

    def get_user_role(self, user_id: str) -> str:
        """Role from user_roles; users without a row get the staff role"""
        row = self._select_first(
            self.supabase.table("user_roles").select("role").eq("user_id", user_id),
            "user_roles",
        )
        if not row or row.get("role") not in ("owner", "staff"):
            return self.DEFAULT_ROLE
        return row["role"]

    def get_profile(self, user_id: str) -> Optional[Profile]:
        row = self._select_first(
            self.supabase.table("profiles").select("*").eq("user_id", user_id),
            "profiles",
        )
        return Profile(**row) if row else None

    # ==================== Helpers ====================

    @staticmethod
    def _parse_auth_error(error: Exception) -> str:
        """Friendly message for an auth failure"""
        error_str = str(error).lower()

        if "invalid login credentials" in error_str:
            return "Incorrect email or password"
        elif "email not confirmed" in error_str:
            return "Please verify your email first"
        elif "rate limit" in error_str:
            return "Too many attempts, please try again later"
        elif "network" in error_str or "connection" in error_str:
            return "Network error, please check your connection"
        return f"Login failed: {error}"

