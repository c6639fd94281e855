# backend/vcat/services/access_policy.py
import logging
from typing import Optional, Set, Union
from uuid import UUID

from vcat.services.guardian import Guardian

logger = logging.getLogger(__name__)


class _Unrestricted:
    """Stands in for "every category"; admins skip membership checks entirely."""

    def __repr__(self):
        return "UNRESTRICTED"


UNRESTRICTED = _Unrestricted()

AccessibleCategories = Union[Set[UUID], _Unrestricted]


class AccessPolicy:
    """Computes which categories a viewer may read.

    One instance serves one filter invocation; the result is memoized on the
    instance and never shared across requests, since group membership and
    category permissions may change between them.
    """

    def __init__(self, guardian: Guardian):
        self.guardian = guardian
        self._accessible: Optional[AccessibleCategories] = None

    def accessible_category_ids(self) -> AccessibleCategories:
        if self._accessible is None:
            self._accessible = self._compute()
        return self._accessible

    def _compute(self) -> AccessibleCategories:
        guardian = self.guardian
        if guardian.is_admin:
            return UNRESTRICTED

        if guardian.is_staff:
            # Staff read every public category even where the secured set omits one
            allowed = guardian.public_category_ids() | guardian.secured_category_ids()
        elif not guardian.is_anonymous:
            allowed = guardian.secured_category_ids()
        else:
            allowed = guardian.public_category_ids()

        logger.debug("Viewer %s may read %d categories", guardian.user and guardian.user.id, len(allowed))
        return allowed
