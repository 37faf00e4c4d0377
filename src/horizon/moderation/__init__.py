"""
Moderation workflows.

- **flagged_message.py**: lifecycle of automatically and manually flagged messages.
- **pending_flags.py**: registry of flags waiting for moderator approval.
- **eclass_manager.py**: e-class notification subscriptions.
"""
