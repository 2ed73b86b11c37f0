"""
Seed the database with the initial administrator and the first farm.

Safe to run more than once: existing records are left untouched.

Usage:
    python scripts/seed_data.py [--admin-password SECRET]
"""

import sys
import os

# Add the backend directory to the PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from avotrace.core.database import SessionLocal, init_db
from avotrace.models import UserRole
from avotrace.repositories import SqlTraceabilityRepository
from avotrace.schemas.user import UserCreate
from avotrace.services import user_service

ADMIN_USERNAME = "admin"
SEED_FARM = {
    "name": "Ferme Atlas",
    "location": "",
    "code": "FA-001",
    "active": True,
}


def seed(db, admin_password: str):
    if user_service.get_user_by_username(db, ADMIN_USERNAME):
        print(f"  User '{ADMIN_USERNAME}' already exists")
    else:
        user_service.create_user(
            db,
            UserCreate(
                username=ADMIN_USERNAME,
                password=admin_password,
                full_name="Administrator",
                role=UserRole.ADMIN,
            ),
        )
        print(f"  Created user '{ADMIN_USERNAME}'")

    repository = SqlTraceabilityRepository(db)
    if repository.get_farm_by_code(SEED_FARM["code"]):
        print(f"  Farm {SEED_FARM['code']} already exists")
    else:
        repository.create_farm(SEED_FARM)
        repository.commit()
        print(f"  Created farm {SEED_FARM['code']} ({SEED_FARM['name']})")


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Seed the AvoTrace database')
    parser.add_argument('--admin-password', default='admin123', help='Password of the admin account (min 6 chars)')
    parser.add_argument('--skip-create-tables', action='store_true', help='Do not run create_all (schema managed by alembic)')
    args = parser.parse_args()

    if not args.skip_create_tables:
        init_db()

    db = SessionLocal()
    try:
        seed(db, args.admin_password)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == '__main__':
    main()
