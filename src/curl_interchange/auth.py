"""Completeness checks for auth settings."""

from curl_interchange.parser.base import (
    ApiKeyAuth,
    AuthConfig,
    AwsAuth,
    BasicAuth,
    BearerAuth,
    OAuth2Auth,
)


def validate_auth(auth: AuthConfig) -> list[str]:
    """List the fields an auth variant still needs before it can be applied."""
    errors = []

    if isinstance(auth, BasicAuth):
        if not auth.username:
            errors.append("Username is required for Basic Auth")
        if not auth.password:
            errors.append("Password is required for Basic Auth")

    elif isinstance(auth, BearerAuth):
        if not auth.token:
            errors.append("Token is required for Bearer Auth")

    elif isinstance(auth, ApiKeyAuth):
        if not auth.key:
            errors.append("Key name is required for API Key Auth")
        if not auth.value:
            errors.append("Key value is required for API Key Auth")

    elif isinstance(auth, OAuth2Auth):
        if not auth.token_url:
            errors.append("Token URL is required for OAuth 2.0")
        if not auth.client_id:
            errors.append("Client ID is required for OAuth 2.0")
        if not auth.client_secret:
            errors.append("Client Secret is required for OAuth 2.0")
        if auth.grant_type == "password":
            if not auth.username:
                errors.append("Username is required for Password Grant")
            if not auth.password:
                errors.append("Password is required for Password Grant")

    elif isinstance(auth, AwsAuth):
        for value, label in (
            (auth.access_key, "Access Key"),
            (auth.secret_key, "Secret Key"),
            (auth.region, "Region"),
            (auth.service, "Service"),
        ):
            if not value:
                errors.append(f"{label} is required for AWS Auth")

    return errors
