"""
Unit tests for TokenBuilder.
"""

import pytest

from service_passport.app.tokens import TokenBuilder


class TestTokenBuilder:
    """Test cases for TokenBuilder."""

    def test_defaults(self):
        builder = TokenBuilder()

        assert builder.expires_in == 3600
        assert builder.not_before == 0
        assert builder.leeway == 0
        assert dict(builder.headers) == {}
        assert dict(builder.claims) == {}

    def test_with_methods_return_new_builder(self):
        base = TokenBuilder()
        configured = base.with_iss("admin").with_aud("api").with_sub("42").with_jti("abc123")

        assert configured is not base
        assert base.issuer is None
        assert (configured.issuer, configured.audience, configured.subject, configured.jti) == (
            "admin", "api", "42", "abc123"
        )

    def test_shared_builder_is_not_mutated_by_branches(self):
        base = TokenBuilder().with_claim("role", "admin")
        first = base.with_claim("scope", "read")
        second = base.with_claim("scope", "write")

        assert dict(base.claims) == {"role": "admin"}
        assert first.claims["scope"] == "read"
        assert second.claims["scope"] == "write"

    def test_with_claim_mapping_applies_each_item(self):
        builder = TokenBuilder().with_claim({"a": 1, "b": "two"}).with_claim("c", 3.5)

        assert dict(builder.claims) == {"a": 1, "b": "two", "c": 3.5}

    def test_with_header_mapping_applies_each_item(self):
        builder = TokenBuilder().with_header({"kid": "key-1"}).with_header("x-tenant", "t1")

        assert dict(builder.headers) == {"kid": "key-1", "x-tenant": "t1"}

    @pytest.mark.parametrize("bad", [["a", "b"], ("a", 1), {"a", "b"}, None])
    def test_with_claim_rejects_invalid_shape(self, bad):
        with pytest.raises(TypeError):
            TokenBuilder().with_claim(bad, "value")

    def test_claims_are_read_only(self):
        builder = TokenBuilder().with_claim("a", 1)

        with pytest.raises(TypeError):
            builder.claims["b"] = 2

    @pytest.mark.parametrize("offset, expected", [(-30, 0), (0, 0), (120, 120)])
    def test_with_nbf_clamps_negative_offsets(self, offset, expected):
        assert TokenBuilder().with_nbf(offset).not_before == expected

    def test_with_exp_and_leeway(self):
        builder = TokenBuilder().with_exp(60).with_leeway(5)

        assert builder.expires_in == 60
        assert builder.leeway == 5

    def test_with_data_skips_empty_names_and_values(self):
        builder = (
            TokenBuilder()
            .with_data("adminid", 42)
            .with_data("", "ignored")
            .with_data("empty", "")
            .with_data("none", None)
            .with_data({"nickname": "root"})
        )

        assert dict(builder.data) == {"adminid": 42, "nickname": "root"}
        assert dict(builder.claims) == {}

    def test_passphrase_not_in_repr(self):
        builder = TokenBuilder().with_passphrase("c2VjcmV0")

        assert "c2VjcmV0" not in repr(builder)
