"""Tests for mapping TOTP codes to identities."""

import time

import pyotp
import pytest

from duochat.core.modules.otp.service import OtpService
from duochat.errors import AuthenticationError, ConfigurationError


@pytest.fixture
def otp_service(fake_core):
    service = OtpService(database=None)
    service.set_core(fake_core)
    return service


def current_code(secret: str) -> str:
    return pyotp.TOTP(secret).now()


class TestIdentify:
    """Tests for OtpService.identify."""

    def test_first_secret_maps_to_first_identity(self, otp_service, config):
        assert otp_service.identify(current_code(config.totp_secret_1)) == "User1"

    def test_second_secret_maps_to_second_identity(self, otp_service, config):
        assert otp_service.identify(current_code(config.totp_secret_2)) == "User2"

    def test_spaced_code_accepted(self, otp_service, config):
        code = current_code(config.totp_secret_1)
        assert otp_service.identify(f"{code[:3]} {code[3:]}") == "User1"

    def test_custom_identity_names(self, otp_service, config):
        config.identity_2 = "Bob"
        assert otp_service.identify(current_code(config.totp_secret_2)) == "Bob"

    def test_wrong_code_rejected(self, otp_service, config):
        now = int(time.time())
        valid = {
            pyotp.TOTP(secret).at(now + offset * 30)
            for secret in (config.totp_secret_1, config.totp_secret_2)
            for offset in (-2, -1, 0, 1, 2)
        }
        wrong = next(f"{n:06d}" for n in range(1_000_000) if f"{n:06d}" not in valid)
        with pytest.raises(AuthenticationError, match="Invalid TOTP code"):
            otp_service.identify(wrong)

    @pytest.mark.parametrize("code", ["", "abcdef", "12345", "1234567"])
    def test_malformed_code_rejected(self, otp_service, code):
        with pytest.raises(AuthenticationError, match="Invalid TOTP code"):
            otp_service.identify(code)

    def test_ambiguous_code_rejected(self, otp_service, config):
        """Test that a code valid for both identities is refused."""
        config.totp_secret_2 = config.totp_secret_1
        with pytest.raises(AuthenticationError, match="try again"):
            otp_service.identify(current_code(config.totp_secret_1))

    def test_missing_secret_is_configuration_error(self, otp_service, config):
        config.totp_secret_2 = ""
        with pytest.raises(ConfigurationError, match="TOTP secret not configured"):
            otp_service.identify("123456")

    def test_undecodable_secret_looks_like_wrong_code(self, otp_service, config):
        """Test that a broken secret is indistinguishable from a wrong code for the caller."""
        config.totp_secret_1 = "not base32!"
        config.totp_secret_2 = "also not base32!"
        with pytest.raises(AuthenticationError, match="Invalid TOTP code"):
            otp_service.identify("123456")
