"""Process-wide plumbing: settings, the shared Prisma client, logging setup."""
