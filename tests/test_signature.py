"""
Razorpay callback signature: HMAC-SHA256 over "order_id|payment_id".
"""

import hashlib
import hmac

import pytest

from coursehub.services.payments import generate_signature, verify_signature, to_minor_units


def reference_signature(secret, body):
    return hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()


class TestGenerateSignature:

    def test_matches_reference_hmac(self):
        assert generate_signature("S", "order_abc", "pay_xyz") == reference_signature("S", "order_abc|pay_xyz")

    @pytest.mark.parametrize("order_id, payment_id, secret", [
        ("order_abd", "pay_xyz", "S"),
        ("order_abc", "pay_xyy", "S"),
        ("order_abc", "pay_xyz", "T"),
        ("Order_abc", "pay_xyz", "S"),
    ])
    def test_single_character_change_alters_signature(self, order_id, payment_id, secret):
        original = generate_signature("S", "order_abc", "pay_xyz")
        assert generate_signature(secret, order_id, payment_id) != original

    def test_separator_is_part_of_the_message(self):
        # "ab|c" and "a|bc" must not collide
        assert generate_signature("S", "ab", "c") != generate_signature("S", "a", "bc")


class TestVerifySignature:

    def test_accepts_valid_signature(self):
        signature = reference_signature("S", "order_abc|pay_xyz")
        assert verify_signature("S", "order_abc", "pay_xyz", signature) is True

    @pytest.mark.parametrize("signature", ["", "deadbeef", "x" * 64, None, 12345])
    def test_rejects_anything_else(self, signature):
        assert verify_signature("S", "order_abc", "pay_xyz", signature) is False

    def test_rejects_when_secret_is_not_configured(self):
        signature = reference_signature("S", "order_abc|pay_xyz")
        assert verify_signature(None, "order_abc", "pay_xyz", signature) is False

    def test_uses_constant_time_comparison(self, monkeypatch):
        signature = reference_signature("S", "order_abc|pay_xyz")
        calls = []
        real_compare = hmac.compare_digest

        def spy(a, b):
            calls.append((a, b))
            return real_compare(a, b)

        monkeypatch.setattr(hmac, "compare_digest", spy)

        assert verify_signature("S", "order_abc", "pay_xyz", signature)
        assert len(calls) == 1


def test_price_is_converted_to_minor_units():
    assert to_minor_units(500) == 50000
    assert to_minor_units(299.5) == 29950
    assert to_minor_units("19.99") == 1999
