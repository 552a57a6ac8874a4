"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables by alias
and that the grouped configuration models are derived from it.
"""

import pytest

from teestore.server.core.config import AuthConfig, CORSConfig, PricingConfig, RazorpayConfig, Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove storefront variables so defaults are observable."""
    for name in (
        "TEESTORE_SERVER_HOST",
        "TEESTORE_SERVER_PORT",
        "TEESTORE_LOG_LEVEL",
        "DATABASE_URL",
        "DATABASE_AUTO_CREATE",
        "JWT_SECRET",
        "RAZORPAY_KEY_ID",
        "RAZORPAY_KEY_SECRET",
        "RAZORPAY_WEBHOOK_SECRET",
        "CUSTOM_TSHIRT_BASE_PRICE",
        "DESIGN_FEE",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettingsDefaults:
    def test_server_defaults(self, clean_env):
        settings = _settings()

        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 8000
        assert settings.log_level == "INFO"
        assert settings.database_auto_create is False

    def test_pricing_defaults(self, clean_env):
        pricing = _settings().pricing

        assert pricing.custom_tshirt_base_price == 499
        assert pricing.design_fee == 150
        assert pricing.online_payment_discount_percent == 5
        assert pricing.reward_point_value == 0.5
        assert pricing.max_reward_points_per_order == 50


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, clean_env):
        clean_env.setenv("TEESTORE_SERVER_HOST", "127.0.0.1")
        clean_env.setenv("TEESTORE_SERVER_PORT", "9100")
        clean_env.setenv("TEESTORE_LOG_LEVEL", "DEBUG")

        settings = _settings()

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 9100
        assert settings.log_level == "DEBUG"

    def test_database_binding(self, clean_env):
        clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./store.db")
        clean_env.setenv("DATABASE_AUTO_CREATE", "true")

        settings = _settings()

        assert settings.database_url == "sqlite+aiosqlite:///./store.db"
        assert settings.database_auto_create is True

    def test_pricing_binding(self, clean_env):
        clean_env.setenv("CUSTOM_TSHIRT_BASE_PRICE", "549")
        clean_env.setenv("DESIGN_FEE", "99")

        pricing = _settings().pricing

        assert isinstance(pricing, PricingConfig)
        assert pricing.custom_tshirt_base_price == 549
        assert pricing.design_fee == 99

    def test_cors_binding(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", '["https://shop.example.com"]')

        cors = _settings().cors

        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["https://shop.example.com"]
        assert cors.allow_credentials is True

    def test_field_names_are_accepted(self, clean_env):
        settings = _settings(server_port=7000, jwt_secret="abc")

        assert settings.server_port == 7000
        assert settings.auth.jwt_secret == "abc"


class TestGroupedConfigs:
    def test_auth(self, clean_env):
        clean_env.setenv("JWT_SECRET", "s3cret")

        auth = _settings().auth

        assert isinstance(auth, AuthConfig)
        assert auth.jwt_secret == "s3cret"
        assert auth.jwt_algorithm == "HS256"
        assert auth.jwt_expires_days == 14

    def test_razorpay_unconfigured(self, clean_env):
        razorpay = _settings().razorpay

        assert isinstance(razorpay, RazorpayConfig)
        assert razorpay.configured is False
        assert razorpay.api_url == "https://api.razorpay.com/v1"

    def test_razorpay_configured(self, clean_env):
        clean_env.setenv("RAZORPAY_KEY_ID", "rzp_live_1")
        clean_env.setenv("RAZORPAY_KEY_SECRET", "secret")
        clean_env.setenv("RAZORPAY_WEBHOOK_SECRET", "whsec")

        razorpay = _settings().razorpay

        assert razorpay.configured is True
        assert razorpay.key_id == "rzp_live_1"
        assert razorpay.webhook_secret == "whsec"

    @pytest.mark.parametrize("key_id,key_secret", [("rzp", None), (None, "secret"), ("", "secret")])
    def test_partial_credentials_are_not_configured(self, key_id, key_secret):
        assert RazorpayConfig(key_id=key_id, key_secret=key_secret).configured is False
