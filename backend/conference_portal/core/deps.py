import logging
from typing import Optional

from fastapi import Depends, Header, Query

from conference_portal.api.deps import get_settings
from conference_portal.core.config import Settings
from conference_portal.core.errors import Unauthorized
from conference_portal.core.security import check_admin_password

logger = logging.getLogger(__name__)


def require_admin(
    password: Optional[str] = Query(default=None),
    x_admin_password: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
):
    """
    Admin gate: the shared secret comes from ?password= or the
    X-Admin-Password header. Raises 401 on anything but an exact match.
    """
    supplied = password or x_admin_password or ""
    if not check_admin_password(supplied, settings.ADMIN_PASSWORD):
        logger.warning("🔒 Rejected admin request with invalid password")
        raise Unauthorized()
