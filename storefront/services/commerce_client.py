"""
Commerce Client

HTTP client for the Shopify Storefront GraphQL API.
"""

import logging
from typing import Any, Optional, Sequence

import httpx

from ..models.cart import CartLineItem

logger = logging.getLogger(__name__)


CART_FRAGMENT = """
fragment CartFields on Cart {
  id
  checkoutUrl
  totalQuantity
  cost {
    subtotalAmount { amount currencyCode }
    totalAmount { amount currencyCode }
  }
  lines(first: 100) {
    edges {
      node {
        id
        quantity
        cost {
          amountPerQuantity { amount currencyCode }
          totalAmount { amount currencyCode }
        }
        merchandise {
          ... on ProductVariant {
            id
            title
            quantityAvailable
            currentlyNotInStock
            image { url altText }
            product { handle title tags }
          }
        }
      }
    }
  }
}
"""

CART_CREATE_MUTATION = CART_FRAGMENT + """
mutation CartCreate($lines: [CartLineInput!]!) {
  cartCreate(input: { lines: $lines }) {
    cart { ...CartFields }
    userErrors { field message }
  }
}
"""

SHOP_QUERY = """
query Shop {
  shop { name description }
}
"""


class CommerceClientError(Exception):
    """The API answered but reported errors"""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class CommerceClient:
    """
    Client for the commerce backend.

    Usage:
        client = CommerceClient(
            api_url="https://shop.myshopify.com/api/2025-01/graphql.json",
            access_token="...",
        )
        payload = await client.create_cart(cart.lines)
        await client.close()
    """

    def __init__(
        self,
        api_url: str,
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize commerce client.

        Args:
            api_url: Storefront GraphQL endpoint
            access_token: Public Storefront API access token
            timeout: Request timeout in seconds
            transport: Custom transport, used by tests
        """
        self.api_url = api_url
        self._access_token = access_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

        if not access_token:
            logger.warning("No Storefront access token provided - requests may be rejected")

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._access_token:
            headers["X-Shopify-Storefront-Access-Token"] = self._access_token
        return headers

    async def _request(self, query: str, variables: Optional[dict] = None) -> dict[str, Any]:
        """Run a GraphQL operation and return its ``data``"""
        response = await self._http_client.post(
            self.api_url,
            headers=self._generate_headers(),
            json={"query": query, "variables": variables or {}},
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        body = response.json()
        if not isinstance(body, dict):
            raise CommerceClientError("Unexpected response body")

        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise CommerceClientError(f"GraphQL errors: {messages}", errors)

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise CommerceClientError("Unexpected response data")
        return data

    # ==================== Cart APIs ====================

    async def create_cart(self, lines: Sequence[CartLineItem]) -> dict:
        """
        Resolve line items into a priced cart.

        Returns the ``cartCreate`` payload (``cart`` and ``userErrors``).
        """
        variables = {
            "lines": [
                {"merchandiseId": line.variant_id, "quantity": line.quantity}
                for line in lines
            ],
        }
        data = await self._request(CART_CREATE_MUTATION, variables)
        payload = data.get("cartCreate") or {}
        if not isinstance(payload, dict):
            raise CommerceClientError("Unexpected cartCreate payload")
        return payload

    # ==================== Shop APIs ====================

    async def get_shop(self) -> dict:
        """Get shop name and description"""
        data = await self._request(SHOP_QUERY)
        return data.get("shop") or {}
