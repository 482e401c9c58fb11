"""
Create (or promote) a super admin profile for local development.

    python -m app.scripts.create_local_admin --email admin@example.com

Prints a bearer token the profile can use against the API.
"""

import argparse
import asyncio
import uuid
from datetime import datetime, timezone
from typing import Optional

from app.core.auth import create_jwt
from app.core.database import create_tables, session_scope
from app.services import users as user_service
from app.services.store import SqlStore
from timeline_shared.schemas.common import GlobalRole


async def create_admin(
    email: str, user_id: Optional[uuid.UUID] = None, create_tables: bool = False
) -> None:
    if create_tables:
        await create_tables()

    async with session_scope() as session:
        store = SqlStore(session)
        profile = await store.get_profile_by_email(email)
        if profile is None:
            profile = await user_service.ensure_profile(
                store, user_id or uuid.uuid4(), email=email, full_name=email.split("@")[0]
            )
            print(f"Created profile: {email}")
        else:
            print(f"Profile {email} already exists.")

        # Bootstrap bypasses the super-admin-only role change
        if profile.role != GlobalRole.SUPER_ADMIN.value:
            profile.role = GlobalRole.SUPER_ADMIN.value
            profile.updated_at = datetime.now(timezone.utc)
            profile = await store.save_profile(profile)
            print(f"Promoted {email} to super_admin.")

    token, _ = create_jwt(profile.id, email=email)
    print(f"user_id: {profile.id}")
    print(f"token:   {token}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a local super admin profile.")
    parser.add_argument("--email", required=True, help="Email address for the profile")
    parser.add_argument("--user-id", type=uuid.UUID, help="Use this id when creating the profile")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (development databases without migrations)",
    )

    args = parser.parse_args()

    asyncio.run(create_admin(args.email, args.user_id, args.create_tables))
