"""Endpoint and protocol constants."""

DEFAULT_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
DEFAULT_TOKEN_ENDPOINT = "https://www.googleapis.com/oauth2/v4/token"
DEFAULT_INTROSPECT_ENDPOINT = "https://www.googleapis.com/oauth2/v3/tokeninfo"

JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Seconds between ``iat`` and ``exp`` of every assertion.
ASSERTION_LIFETIME = 60
