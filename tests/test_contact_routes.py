"""Tests for the contact and newsletter form actions."""

import pytest
from starlette.datastructures import FormData

from storefront.core.forms import FormValidationError, validate_form
from storefront.routes.contact import render_contact_email
from storefront.models.forms import CheckoutForm, ContactForm
from storefront.services.mailer import DeliveryError

CONTACT = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane@example.com",
    "phone_number": "0400 000 000",
    "subject": "Sizing",
    "message": "Do the polos run small?",
    "agree_to_privacy_policy": "on",
    "token": "turnstile-token",
}

NEWSLETTER = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane@example.com",
    "gender": "ladies",
    "token": "turnstile-token",
}


class TestContact:
    def test_sends_email(self, test_client, turnstile, mailer):
        response = test_client.post(
            "/contact", data=CONTACT, headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
        )

        assert response.status_code == 200
        assert response.json() == {"type": "success"}
        turnstile.verify.assert_awaited_once_with("turnstile-token", "203.0.113.7")

        kwargs = mailer.send.call_args.kwargs
        assert kwargs["sender"] == "contact_form@glfonline.com.au"
        assert kwargs["to"] == "shop@example.com"
        assert kwargs["subject"] == "New GLF Online Contact Form Submission from Jane"
        assert "Do the polos run small?" in kwargs["html"]

    def test_requires_privacy_policy(self, test_client, mailer):
        data = {key: value for key, value in CONTACT.items() if key != "agree_to_privacy_policy"}

        response = test_client.post("/contact", data=data)

        assert response.status_code == 400
        form_state = response.json()["formState"]
        assert form_state["errors"] == [
            {"field": "agree_to_privacy_policy", "message": "You must agree to the Privacy Policy"}
        ]
        assert "token" not in form_state["values"]
        assert form_state["values"]["first_name"] == "Jane"
        mailer.send.assert_not_called()

    def test_invalid_email(self, test_client, mailer):
        response = test_client.post("/contact", data={**CONTACT, "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["formState"]["errors"][0]["field"] == "email"
        mailer.send.assert_not_called()

    def test_failed_token(self, test_client, turnstile, mailer):
        turnstile.verify.return_value = False

        response = test_client.post("/contact", data=CONTACT)

        assert response.status_code == 400
        assert response.json()["formState"]["errors"] == [
            {"field": None, "message": "Failed to verify token"}
        ]
        mailer.send.assert_not_called()

    def test_delivery_failure(self, test_client, mailer):
        mailer.send.side_effect = DeliveryError("Unable to send message")

        response = test_client.post("/contact", data=CONTACT)

        assert response.status_code == 400
        assert response.json()["formState"]["errors"][0]["message"] == "Unable to send message"

    def test_email_body_is_escaped(self):
        submission = ContactForm.model_validate({**CONTACT, "message": "<script>alert(1)</script>"})

        body = render_contact_email(submission)

        assert "<script>" not in body
        assert "&lt;script&gt;" in body
        assert "Name: Jane Doe" in body


class TestNewsletter:
    def test_subscribes(self, test_client, turnstile, newsletter_client):
        response = test_client.post("/newsletter", data=NEWSLETTER)

        assert response.status_code == 200
        assert response.json() == {"type": "success"}
        newsletter_client.subscribe.assert_awaited_once_with(
            email="jane@example.com",
            first_name="Jane",
            last_name="Doe",
            gender="ladies",
        )

    def test_missing_fields(self, test_client, newsletter_client):
        response = test_client.post("/newsletter", data={"email": "jane@example.com"})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["formState"]["errors"]}
        assert fields == {"first_name", "last_name", "gender"}
        newsletter_client.subscribe.assert_not_called()

    def test_failed_token(self, test_client, turnstile, newsletter_client):
        turnstile.verify.return_value = False

        response = test_client.post("/newsletter", data=NEWSLETTER)

        assert response.status_code == 400
        newsletter_client.subscribe.assert_not_called()

    def test_signup_failure(self, test_client, newsletter_client):
        newsletter_client.subscribe.side_effect = DeliveryError("Unable to subscribe to the newsletter")

        response = test_client.post("/newsletter", data=NEWSLETTER)

        assert response.status_code == 400
        assert response.json()["formState"]["errors"][0]["message"] == "Unable to subscribe to the newsletter"


def test_form_errors_use_submitted_field_names():
    with pytest.raises(FormValidationError) as exc_info:
        validate_form(CheckoutForm, FormData([("intent", "checkout")]))

    assert [error.field for error in exc_info.value.form_state.errors] == ["checkoutUrl"]
