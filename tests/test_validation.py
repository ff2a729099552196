"""Tests for request input validators."""

import pytest

from pagecast.core.exceptions import ValidationError
from pagecast.core.validation import (
    is_valid_email,
    is_valid_uuid,
    validate_email,
    validate_language,
    validate_password,
    validate_record_id,
    validate_user_id,
    validate_voice_id,
    validate_webhook_url,
)


class TestEmail:

    def test_normalises(self):
        assert validate_email("  A@Example.COM ") == "a@example.com"

    @pytest.mark.parametrize("value", ["plain", "a@b", "a b@example.com", "@example.com", None, 42])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            validate_email(value)

    def test_length_limit(self):
        local = "a" * 64
        domain = "b" * 186 + ".com"
        assert is_valid_email(f"{local}@{domain}") is False
        assert is_valid_email("a@" + "b" * 248 + ".com") is True


class TestPassword:

    def test_bounds(self):
        assert validate_password("secret") == "secret"
        assert validate_password("x" * 128) == "x" * 128

    @pytest.mark.parametrize("value", ["short", "x" * 129])
    def test_out_of_range(self, value):
        with pytest.raises(ValidationError):
            validate_password(value)

    def test_weak_password(self):
        with pytest.raises(ValidationError, match="too weak"):
            validate_password("Password")


class TestIds:

    def test_uuid_shape(self):
        assert is_valid_uuid("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
        assert not is_valid_uuid("3f2504e0-4f89-11d3-9a0c")
        assert not is_valid_uuid("../../etc/passwd")

    def test_user_id_lowercased(self):
        assert validate_user_id("3F2504E0-4F89-11D3-9A0C-0305E82C3301") == "3f2504e0-4f89-11d3-9a0c-0305e82c3301"

    def test_record_id_names_the_entity(self):
        with pytest.raises(ValidationError, match="Invalid webhook ID format"):
            validate_record_id("abc", "webhook")

    def test_voice_id(self):
        assert validate_voice_id("EXAVITQu4vr4xnSDxMaL") == "EXAVITQu4vr4xnSDxMaL"
        with pytest.raises(ValidationError):
            validate_voice_id("voice; rm -rf")


class TestLanguage:

    @pytest.mark.parametrize("value", ["en", "tr"])
    def test_supported(self, value):
        assert validate_language(value) == value

    @pytest.mark.parametrize("value", ["de", "", None])
    def test_unsupported(self, value):
        with pytest.raises(ValidationError):
            validate_language(value)


class TestWebhookUrl:

    def test_accepts_https(self):
        assert validate_webhook_url(" https://n8n.example.com/webhook/abc ") == "https://n8n.example.com/webhook/abc"

    @pytest.mark.parametrize("value", ["ftp://example.com", "javascript:alert(1)", "", "not a url"])
    def test_rejects_bad_scheme(self, value):
        with pytest.raises(ValidationError):
            validate_webhook_url(value)

    def test_local_allowed_outside_production(self):
        assert validate_webhook_url("http://localhost:5678/webhook") == "http://localhost:5678/webhook"

    @pytest.mark.parametrize("value", [
        "http://localhost:5678/webhook",
        "http://127.0.0.1/hook",
        "http://192.168.1.10/hook",
        "http://10.0.0.5/hook",
        "http://172.16.0.1/hook",
    ])
    def test_private_rejected_in_production(self, value):
        with pytest.raises(ValidationError):
            validate_webhook_url(value, production=True)
