"""
String templates rendered against named values.

Templates use :meth:`str.format` syntax, attribute access included, so a
configured message can read ``{message.author.mention}`` or
``{moderator.display_name}``. Unknown and None names render as empty
strings, and so does any attribute or item looked up on them.
"""

from typing import Any


class _Blank:
    """Placeholder for an absent value; every lookup on it is absent too."""

    def __getattr__(self, name: str) -> "_Blank":
        return self

    def __getitem__(self, key: Any) -> "_Blank":
        return self

    def __format__(self, format_spec: str) -> str:
        return ""

    def __str__(self) -> str:
        return ""


_BLANK = _Blank()


class _TemplatePayload(dict):
    def __missing__(self, key: str) -> _Blank:
        return _BLANK


def render(template: str, **values: Any) -> str:
    """Render ``template`` with ``values``."""
    payload = _TemplatePayload({key: _BLANK if value is None else value for key, value in values.items()})
    return template.format_map(payload)
