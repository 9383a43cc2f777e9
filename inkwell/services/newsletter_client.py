"""
Client side of the newsletter signup: checks the address format, then posts
it to the subscription endpoint.

Accepted addresses follow ``local-part@domain``:

* the local part is one or more dot-separated atoms, none containing
  whitespace or any of ``<>()[].,;:@"``, or else a double-quoted string;
* the domain is one or more such atoms each followed by a dot, then a final
  label of at least two characters whose last character is not ``-``;
* the domain may not start with ``-``.

Matching is case-insensitive.
"""

import logging
import re

import httpx

from inkwell.settings import settings

logger = logging.getLogger(__name__)

_ATOM = r'[^<>()\[\].,;:\s@"]'
EMAIL_RE = re.compile(
    rf'^(({_ATOM}+(\.{_ATOM}+)*)|(".+"))'
    rf'@((?!-)({_ATOM}+\.)+{_ATOM}{{1,}})[^-<>()\[\].,;:\s@"]$',
    re.IGNORECASE,
)
SUBSCRIBE_PATH = "/subscribe"


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


class NewsletterClient:
    def __init__(
        self, base_url: str | None = None, client: httpx.Client | None = None
    ):
        self.base_url = (base_url or settings.BLOG_API_URL).rstrip("/")
        self.client = client or httpx.Client(timeout=10.0)

    def subscribe(self, email: str) -> bool:
        if not is_valid_email(email):
            logger.warning("Refusing to submit a malformed e-mail address")
            return False
        try:
            response = self.client.post(
                f"{self.base_url}{SUBSCRIBE_PATH}", json={"email": email}
            )
        except httpx.RequestError as e:
            logger.error(f"Subscription request failed: {e}")
            return False
        return response.status_code == 200
