from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService


class TestAuthInterface:
    def test_service_implements_interface(self):
        """AuthService should satisfy IAuthService at runtime."""
        assert isinstance(AuthService(jwt_secret="secret"), IAuthService)

    def test_interface_methods_exist(self):
        """IAuthService should define validate_token."""
        assert hasattr(IAuthService, "validate_token")
        assert callable(getattr(AuthService, "validate_token"))
