"""
Use Cases

Organized into domain folders:
- guilds/: Guild lifecycle (create, update, delete, get, search, audit)
- memberships/: Membership transitions
"""
