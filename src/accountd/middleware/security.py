"""Security headers middleware.

Learn: Every response from this service is either credentials going out
(login), personal data (/me) or an auth error, so none of it should be
cached or framed:
- Cache-Control/Pragma: keep tokens and profiles out of shared caches
- X-Content-Type-Options: no MIME sniffing of JSON bodies
- X-Frame-Options: no framing
- Referrer-Policy: no referrer leakage
- Strict-Transport-Security: HTTPS connections only
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

STATIC_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


def apply_security_headers(request: Request, response: Response) -> Response:
    for name, value in STATIC_HEADERS.items():
        response.headers.setdefault(name, value)
    if request.url.scheme == "https":
        response.headers["Strict-Transport-Security"] = HSTS_VALUE
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach no-store and hardening headers to all responses.

    Unhandled errors are answered outside this middleware, so the
    catch-all error handler calls apply_security_headers() itself.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        return apply_security_headers(request, response)
