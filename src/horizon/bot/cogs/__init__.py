"""
Cogs of the Horizon bot.

Each module defines a cog class and a setup function registering it with the
bot. Cogs are loaded explicitly in main.py.
"""
