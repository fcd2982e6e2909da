"""Authentication primitives.

Learn: Three pieces make up the auth contract:
1. PasswordHasher → bcrypt hash/verify for stored credentials
2. TokenIssuer → HS256 JWT bearer tokens carrying only the account id
3. require_auth → FastAPI dependency gating protected routes

Email normalization lives here too, since it decides which account a
credential belongs to.
"""
