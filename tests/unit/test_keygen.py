"""Tests for the secret generator script."""

from urllib.parse import parse_qs, unquote, urlparse

import pyotp

from duochat.config import IdentityConfig
from duochat.core.modules.otp.codec import decode_secret
from duochat.keygen import generate_secrets, main, provisioning_uri


class TestProvisioningUri:
    """Tests for provisioning_uri function."""

    def test_uri_fields(self):
        uri = urlparse(provisioning_uri("JBSWY3DPEHPK3PXP", "Alice"))
        assert uri.scheme == "otpauth"
        assert uri.netloc == "totp"
        assert unquote(uri.path) == "/duochat:Alice"
        assert parse_qs(uri.query) == {
            "secret": ["JBSWY3DPEHPK3PXP"],
            "issuer": ["duochat"],
            "algorithm": ["SHA1"],
            "digits": ["6"],
            "period": ["30"],
        }

    def test_label_is_escaped(self):
        uri = provisioning_uri("JBSWY3DPEHPK3PXP", "Jane Doe", issuer="my chat")
        assert uri.startswith("otpauth://totp/my%20chat%3AJane%20Doe?")
        assert "&issuer=my%20chat&" in uri

    def test_readable_by_authenticator_libraries(self):
        """Test that an independent parser recovers the secret and parameters."""
        parsed = pyotp.parse_uri(provisioning_uri("JBSWY3DPEHPK3PXP", "Alice"))
        assert parsed.secret == "JBSWY3DPEHPK3PXP"
        assert parsed.digits == 6
        assert parsed.interval == 30
        assert parsed.name == "Alice"
        assert parsed.issuer == "duochat"


class TestGenerateSecrets:
    """Tests for generate_secrets function."""

    def test_one_secret_per_configured_identity(self):
        secrets = generate_secrets(IdentityConfig(identity_1="Alice", identity_2="Bob"))
        assert [env_var for env_var, _, _ in secrets] == ["DUOCHAT_TOTP_SECRET_1", "DUOCHAT_TOTP_SECRET_2"]
        assert [pyotp.parse_uri(uri).name for _, _, uri in secrets] == ["Alice", "Bob"]

    def test_secrets_are_fresh_and_decodable(self):
        (_, first, _), (_, second, _) = generate_secrets(IdentityConfig())
        assert first != second
        assert len(decode_secret(first)) == 20

    def test_identities_read_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("DUOCHAT_IDENTITY_1", "Alice")
        monkeypatch.setenv("DUOCHAT_IDENTITY_2", "Bob")
        main()
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("DUOCHAT_TOTP_SECRET_1=")
        assert "duochat%3AAlice" in lines[1]
        assert lines[2].startswith("DUOCHAT_TOTP_SECRET_2=")
        assert "duochat%3ABob" in lines[3]
