"""
Seed a development database with an admin, a regular user and sample tasks.
Idempotent: existing accounts are left untouched. Run after `alembic upgrade head`:

  python -m tasktracker.scripts.seed
"""

import logging
import sys

from sqlalchemy.orm import Session

from tasktracker.core.database import SessionLocal
from tasktracker.models import Task
from tasktracker.services.users import create_user, get_user_by_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

ADMIN = {
    "email": "admin@example.com",
    "password": "admin123",
    "first_name": "Admin",
    "last_name": "User",
    "role": "admin",
}
DEMO_USER = {
    "email": "user@example.com",
    "password": "user123",
    "first_name": "Test",
    "last_name": "User",
    "role": "user",
}
SAMPLE_TASKS = (
    ("Complete project assignment", "Build a scalable REST API with authentication", "pending", "high"),
    ("Review code documentation", "Update API documentation and README", "in_progress", "medium"),
    ("Setup deployment pipeline", "Configure Docker and CI/CD", "pending", "low"),
)


def seed(db: Session) -> tuple[int, int]:
    """Create missing seed accounts; sample tasks only for a newly created demo user.

    Returns (users_created, tasks_created).
    """
    users_created = 0
    tasks_created = 0
    if get_user_by_email(db, ADMIN["email"]) is None:
        create_user(db, **ADMIN)
        users_created += 1
        logger.info("Admin user created: %s", ADMIN["email"])
    if get_user_by_email(db, DEMO_USER["email"]) is None:
        user = create_user(db, **DEMO_USER)
        users_created += 1
        for title, description, status, priority in SAMPLE_TASKS:
            db.add(
                Task(
                    title=title,
                    description=description,
                    status=status,
                    priority=priority,
                    user_id=user.id,
                )
            )
            tasks_created += 1
        db.commit()
        logger.info("Demo user and %s sample tasks created", tasks_created)
    return users_created, tasks_created


def main() -> int:
    db = SessionLocal()
    try:
        users_created, tasks_created = seed(db)
        logger.info(
            "Seed completed: users_created=%s tasks_created=%s", users_created, tasks_created
        )
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
