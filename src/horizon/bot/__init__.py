"""
Discord integration of Horizon.

- **session.py**: state shared by the cogs for one bot run (pending flags,
  tracked reaction-role and e-class messages, repositories).
- **cogs/events_listener.py**: on_ready restoration and command error reporting.
- **cogs/message_listener.py**: swear filter on incoming messages.
- **cogs/reaction_listener.py**: reaction dispatcher (manual flags, reaction
  roles, e-classes, flag approvals).
- **cogs/setup_cmds.py**: /setup commands for per-guild channels.
- **cogs/general_cmds.py**: /mergepdf.
"""
