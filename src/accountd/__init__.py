"""accountd — user account service.

Account creation, credential verification that yields a bearer token,
and authenticated profile retrieval.
"""

__version__ = "0.1.0"
