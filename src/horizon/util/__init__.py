"""
Utility helpers for Horizon.

- **logger.py**: logging configuration with colored console output through
  prompt_toolkit and one log file per session.
- **discord_utils.py**: stateless Discord helpers (emoji identity, role
  checks, message links, best-effort DMs).
- **templating.py**: rendering of configured message templates.
- **pdf_utils.py**: PDF name sanitising and merging for /mergepdf.
"""
