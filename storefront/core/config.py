"""Storefront Configuration"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "GLF Online Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Session cookie
    encryption_key: str = Field(min_length=1)
    encryption_key_fallbacks: list[str] = []
    session_cookie_name: str = "session"
    session_cookie_secure: bool = False
    session_max_age: Optional[int] = None  # seconds; browser session when unset

    # Shopify Storefront API
    shopify_store_domain: str = "glfonline.myshopify.com"
    shopify_storefront_access_token: Optional[str] = None
    shopify_api_version: str = "2025-01"
    commerce_timeout: float = 30.0

    # Forms
    turnstile_secret_key: Optional[str] = None
    turnstile_verify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    contact_email_from: str = "contact_form@glfonline.com.au"
    contact_email_to: Optional[str] = None
    newsletter_subscribe_url: Optional[str] = None

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("encryption_key")
    @classmethod
    def reject_blank_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ENCRYPTION_KEY must not be blank")
        return value

    @property
    def session_secrets(self) -> list[str]:
        """Primary key first, then keys still accepted for decryption"""
        return [self.encryption_key, *self.encryption_key_fallbacks]

    @property
    def storefront_api_url(self) -> str:
        return f"https://{self.shopify_store_domain}/api/{self.shopify_api_version}/graphql.json"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Fails at import when ENCRYPTION_KEY is missing, so the service never
# starts with an unsigned session cookie.
settings = get_settings()
