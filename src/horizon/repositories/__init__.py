from horizon.repositories.eclass_repo import EclassRepository
from horizon.repositories.flagged_message_repo import FlaggedMessageRepository
from horizon.repositories.guild_config_repo import GuildConfigRepository
from horizon.repositories.reaction_role_repo import ReactionRoleRepository

__all__ = [
    "EclassRepository",
    "FlaggedMessageRepository",
    "GuildConfigRepository",
    "ReactionRoleRepository",
]
