import os

# Settings are read at import time and refuse to load without a key
os.environ["ENCRYPTION_KEY"] = "test-encryption-key"
os.environ["CONTACT_EMAIL_TO"] = "shop@example.com"

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from storefront.core.session import SessionCodec
from storefront.services.cart_validation import CartValidator
from storefront.services.commerce_client import CommerceClient
from storefront.services.mailer import NewsletterClient, ResendMailer
from storefront.services.turnstile import TurnstileVerifier


@pytest.fixture
def codec() -> SessionCodec:
    return SessionCodec(secrets=["test-secret"])


@pytest.fixture
def commerce_client() -> Mock:
    client = Mock(spec=CommerceClient)
    client.create_cart = AsyncMock(return_value={})
    client.get_shop = AsyncMock(return_value={"name": "GLF Online", "description": "Golf apparel"})
    return client


@pytest.fixture
def validator(commerce_client) -> CartValidator:
    return CartValidator(commerce_client)


@pytest.fixture
def turnstile() -> Mock:
    verifier = Mock(spec=TurnstileVerifier)
    verifier.verify = AsyncMock(return_value=True)
    return verifier


@pytest.fixture
def mailer() -> Mock:
    mock_mailer = Mock(spec=ResendMailer)
    mock_mailer.send = AsyncMock(return_value="email-123")
    return mock_mailer


@pytest.fixture
def newsletter_client() -> Mock:
    client = Mock(spec=NewsletterClient)
    client.subscribe = AsyncMock(return_value=None)
    return client


@pytest.fixture
def test_client(codec, validator, commerce_client, turnstile, mailer, newsletter_client):
    from storefront.main import app
    from storefront.routes import deps

    app.dependency_overrides[deps.get_session_codec] = lambda: codec
    app.dependency_overrides[deps.get_cart_validator] = lambda: validator
    app.dependency_overrides[deps.get_commerce_client] = lambda: commerce_client
    app.dependency_overrides[deps.get_turnstile_verifier] = lambda: turnstile
    app.dependency_overrides[deps.get_mailer] = lambda: mailer
    app.dependency_overrides[deps.get_newsletter_client] = lambda: newsletter_client

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
