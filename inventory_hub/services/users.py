"""User record bookkeeping."""
from typing import Optional, Tuple

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_hub.models.user import User

logger = structlog.get_logger(__name__)


def ensure_user_record(db: Session, uid: str, email: Optional[str]) -> Tuple[User, bool]:
    """
    Return the user record for ``uid``, creating it if needed.

    The first user record ever created is granted admin rights.
    Returns ``(user, created)``.
    """
    user = db.query(User).filter(User.uid == uid).first()
    if user:
        if email and user.email != email:
            user.email = email
            db.commit()
            db.refresh(user)
        return user, False

    # Two simultaneous first sign-ins may both become admin; accepted.
    is_first_user = db.query(User).count() == 0
    user = User(uid=uid, email=email, is_admin=is_first_user)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same record first
        db.rollback()
        user = db.query(User).filter(User.uid == uid).one()
        return user, False

    db.refresh(user)
    logger.info("user_created", uid=uid, is_admin=user.is_admin)
    return user, True
