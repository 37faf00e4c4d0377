"""
Configuration for Horizon.

- **app_configuration.py**: static settings from ``config/app_config.yml``
  (roles, emojis, swear denylist, message templates).
- **guild_config.py**: per-guild channel settings stored in the database.
"""
