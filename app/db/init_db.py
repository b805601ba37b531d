import logging
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.db.session import engine, Base
from app.models.category import Category  # noqa: F401
from app.models.user import User

logger = logging.getLogger(__name__)

def init_db(db: Session) -> None:
    Base.metadata.create_all(bind=engine)

    if not settings.FIRST_ADMIN_PASSWORD:
        logger.warning("FIRST_ADMIN_PASSWORD is not set, skipping admin seed")
        return

    # Make sure there is at least one administrator
    user = db.query(User).filter(User.email == settings.FIRST_ADMIN_EMAIL).first()
    if not user:
        user = User(
            email=settings.FIRST_ADMIN_EMAIL,
            name="Administrator",
            hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
            role=Role.ADMIN,
            is_active=True,
        )
        db.add(user)
        db.commit()
        logger.info(f"Seeded admin user {settings.FIRST_ADMIN_EMAIL}")
