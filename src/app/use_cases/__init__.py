"""
Use Cases

Organized into domain folders:
- auth/: Identity lifecycle (register, activate, login, logout, refresh,
  change password)

Import from subdirectories.
"""
