"""
Horizon - community Discord bot

Core components:

- **Flagged messages**: messages containing a denylisted swear are reported
  to moderators, who confirm them with a reaction; staff members can also
  flag a message directly with a dedicated reaction. Authors are always
  notified, privately or in the channel.
- **Reaction workflows**: reaction roles and e-class subscriptions.
- **Commands**: /mergepdf to merge PDF files, /setup for per-guild channels.

Usage:
    from horizon.main import main
    main()
"""
