"""
Razorpay Orders API client.

Orders are created when checkout starts and fetched again when the signed
callback comes back, so the courses it was paid for can be checked. Payment
capture itself happens in the checkout widget.
"""

import requests
from flask import current_app
from coursehub.exceptions import PaymentGatewayError


class RazorpayClient:
    """Thin wrapper around the Razorpay REST API"""

    def __init__(self, key_id, key_secret, base_url="https://api.razorpay.com/v1", timeout=10):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config=None):
        config = config or current_app.config
        return cls(
            key_id=config.get("RAZORPAY_KEY_ID"),
            key_secret=config.get("RAZORPAY_SECRET"),
            base_url=config.get("RAZORPAY_BASE_URL", "https://api.razorpay.com/v1"),
            timeout=config.get("RAZORPAY_TIMEOUT", 10),
        )

    def create_order(self, amount, currency, receipt, notes=None):
        """
        Create a payment order.

        Args:
            amount: Amount in the currency's minor unit (paise for INR)
            currency: ISO currency code
            receipt: Our own reference for the order (max 40 chars)
            notes: Opaque key/value metadata echoed back by the gateway

        Returns:
            dict: The gateway order, at least {'id', 'amount', 'currency'}
        """
        payload = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }

        try:
            response = requests.post(
                f"{self.base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise PaymentGatewayError(context={"error": str(e)}) from e

        return self._order_from(response)

    def fetch_order(self, order_id):
        """Look up an existing order, notes included."""
        try:
            response = requests.get(
                f"{self.base_url}/orders/{order_id}",
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise PaymentGatewayError("Could not fetch order", context={"error": str(e)}) from e

        return self._order_from(response, message="Could not fetch order")

    def _order_from(self, response, message=None):
        if not response.ok:
            raise PaymentGatewayError(message, context={
                "status": response.status_code,
                "details": response.text,
            })

        order = response.json()
        if not order.get("id"):
            raise PaymentGatewayError(message, context={"details": order})
        return order
