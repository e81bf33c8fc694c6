"""
Zogakzip Backend — Password Gate
==================================

What:  The two checks every protected operation goes through.
How:   Services load the resource first (raising NotFoundError when it is
       absent) and only then call into this module.

Gate Model:
    - Mutations (update/delete of groups, posts, comments; post creation
      inside a group) require the resource's password in the request body.
    - Public groups and posts are readable by anyone. Private ones are only
      readable through the `/private` endpoints, which take the password in
      the body.

Passwords are stored in plaintext and compared with plain equality.
"""

import logging
from typing import Optional

from zogakzip.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


def verify_secret(
    resource: str,
    resource_id: int,
    supplied: Optional[str],
    stored: str,
) -> None:
    """
    Raise UnauthorizedError unless `supplied` equals `stored` exactly.

    A missing secret counts as a mismatch.
    """
    if supplied is None or supplied != stored:
        logger.info("Password mismatch for %s %s", resource, resource_id)
        raise UnauthorizedError(resource=resource, resource_id=str(resource_id))


def ensure_public(resource: str, resource_id: int, is_public: bool) -> None:
    """Raise ForbiddenError for private resources read without a password."""
    if not is_public:
        raise ForbiddenError(resource=resource, resource_id=str(resource_id))
