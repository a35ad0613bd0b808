from sqlalchemy import select

from prephub.config import Settings
from prephub.database import Store
from prephub.models import Role, User
from prephub.utils.hashing import hash_password

import logging
logger = logging.getLogger("prephub.init_db")


def ensure_admin(store: Store, cfg: Settings) -> User:
    """Create the bootstrap admin account unless one with ``ADMIN_EMAIL`` exists."""
    with store.session() as db:
        admin = db.scalar(select(User).where(User.email == cfg.ADMIN_EMAIL))
        if admin:
            return admin

        admin = User(
            name=cfg.ADMIN_NAME,
            email=cfg.ADMIN_EMAIL,
            password_hash=hash_password(cfg.ADMIN_PASSWORD),
            role=Role.admin,
            avatar=cfg.ADMIN_AVATAR,
        )
        db.add(admin)
        db.flush()
        logger.info("Admin user created: %s", cfg.ADMIN_EMAIL)
        return admin


def initialize(store: Store, cfg: Settings) -> None:
    store.open()
    ensure_admin(store, cfg)


if __name__ == "__main__":
    from prephub.config import settings
    from prephub.logging_config import setup_logging

    setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
    s = Store(settings.database_url)
    try:
        initialize(s, settings)
    finally:
        s.close()
