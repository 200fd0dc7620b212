#!/usr/bin/env python3
import asyncio
import sys
from pathlib import Path

# Add the project root to Python path so we can import from src
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from prisma import Prisma
from prisma.enums import UserRole
from src.core.settings import settings
from src.domains.auth.security import hash_password
from src.domains.deals.service import seed_default_stages
from src.domains.settings.service import DEFAULT_SETTINGS


async def seed_settings(prisma: Prisma) -> None:
    for key, (value, description) in DEFAULT_SETTINGS.items():
        existing = await prisma.systemsetting.find_unique(where={"key": key})
        if existing:
            print(f"ℹ️ Setting already exists: {key}={existing.value}")
            continue
        await prisma.systemsetting.create(
            data={"key": key, "value": value, "description": description}
        )
        print(f"✅ Created setting: {key}={value}")


async def seed_admin(prisma: Prisma) -> int:
    """Create the default admin unless an admin already exists."""
    admin = await prisma.user.find_first(where={"role": UserRole.admin})
    if admin:
        print(f"ℹ️ Admin already exists: {admin.email}")
        return admin.id

    admin = await prisma.user.create(
        data={
            "email": settings.DEFAULT_ADMIN_EMAIL,
            "passwordHash": hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            "firstName": "Admin",
            "lastName": "User",
            "role": UserRole.admin,
        }
    )
    print(f"✅ Created admin user: {admin.email}")
    print("⚠️ Change the default admin password after first login")
    return admin.id


async def main():
    print("🌱 Starting database seed...")

    prisma = Prisma()
    await prisma.connect()

    try:
        await seed_settings(prisma)
        admin_id = await seed_admin(prisma)
        await seed_default_stages(prisma, admin_id)
        print("🎉 Database seed completed successfully!")
    finally:
        await prisma.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
