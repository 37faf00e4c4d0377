from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
import fcntl
from typing import Any, Dict, List, Optional
import yaml

from horizon.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()


@dataclass(frozen=True, slots=True)
class MessageTemplates:
    """User- and moderator-facing texts, rendered with :func:`horizon.util.templating.render`."""

    swear_mod_alert: str = (
        "{message.author.mention} said `{swear}` in {message.channel.mention}: "
        "{message.jump_url}\nReact to confirm the message breaks the rules."
    )
    swear_mod_alert_update: str = (
        "{message.author.mention} said `{swear}` in {message.channel.mention}. "
        "Confirmed by {moderator.mention}."
    )
    manual_swear_alert: str = (
        "{manual_moderator.mention} flagged a message from {message.author.mention} "
        "in {message.channel.mention}: {message.jump_url}"
    )
    swear_user_alert: str = (
        "Your message in {message.channel.mention} contains `{swear}`, which is not "
        "allowed on this server. Please watch your language."
    )
    swear_user_alert_public: str = (
        "{message.author.mention}, your message contains `{swear}`, which is not "
        "allowed on this server. Please watch your language."
    )
    swear_manual_user_alert: str = (
        "Your message in {message.channel.mention} was flagged by a moderator as "
        "breaking the rules: {message.jump_url}"
    )
    swear_manual_user_alert_public: str = (
        "{message.author.mention}, your message was flagged by a moderator as "
        "breaking the rules."
    )
    eclass_subscribed: str = (
        "You will be notified for the class **{subject}** ({date})."
    )
    oops: str = "Oops, something went wrong. Please try again later."

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "MessageTemplates":
        """Build templates from a mapping, keeping defaults for absent keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("[APP CONFIGURATION] Ignoring unknown message templates: %s", ", ".join(sorted(unknown)))
        return cls(**{key: str(value) for key, value in data.items() if key in known})


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches contents of ``./config/app_config.yml`` and exposes typed
    properties for the bot settings: staff role, emojis, swear denylist and
    message templates. A missing or unreadable file yields the defaults.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            logger.error("[APP CONFIGURATION] Config file %s is not a mapping.", self.config_path)
            return {}
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        value = self._data.get(name, {})
        return value if isinstance(value, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping."""
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def staff_role_id(self) -> Optional[int]:
        """Id of the role allowed to flag messages by reaction."""
        value = self._section("roles").get("staff")
        return int(value) if value else None

    @property
    def yes_emoji(self) -> str:
        """Emoji used to approve flags and subscribe to e-classes."""
        emojis = self._section("emojis")
        # A bare `yes:` key is loaded by YAML as the boolean True
        value = emojis.get("yes", emojis.get(True, "✅"))
        return str(value)

    @property
    def flag_reaction(self) -> str:
        """Emoji (unicode character or custom emoji id) staff members use to flag a message."""
        return str(self._section("moderation").get("flag_message_reaction", "🚩"))

    @property
    def swears(self) -> List[str]:
        """Denylist checked against every guild message, in configured order."""
        value = self._section("moderation").get("swears", [])
        if not isinstance(value, list):
            return []
        return [str(swear) for swear in value if swear]

    @property
    def messages(self) -> MessageTemplates:
        return MessageTemplates.from_mapping(self._section("messages"))


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
