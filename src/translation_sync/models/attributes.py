"""Typed view over the attribute block attached to a heading."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

# Key under which the heading attribute plugin stores the parsed block on the
# heading_open token's meta.
ATTRIBUTES_META_KEY = "heading_attributes"

SINCE_CLASS_PREFIXES = ("since-", "introduced-")


@dataclass(frozen=True)
class HeadingAttributes:
    """
    Strongly typed heading attributes.

    Built once from the loosely typed key/value bag produced by the markdown
    parser. No other component reads the raw bag.
    """
    id: str = ""
    translated: str = ""
    version: str = ""
    introduced: str = ""
    classes: Tuple[str, ...] = ()
    extra: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "HeadingAttributes":
        """
        Convert a raw attribute bag into HeadingAttributes.

        Non-string values are ignored, as are unknown keys (they are kept in
        ``extra``).
        """
        values = {
            str(key): value
            for key, value in (raw or {}).items()
            if isinstance(value, str)
        }
        classes = tuple(values.pop("class", "").split())
        introduced = values.pop("introduced", "") or values.pop("since", "")
        values.pop("since", None)
        if not introduced:
            for name in classes:
                for prefix in SINCE_CLASS_PREFIXES:
                    if name.startswith(prefix) and len(name) > len(prefix):
                        introduced = name[len(prefix):]
                        break
                if introduced:
                    break
        return cls(
            id=values.pop("id", ""),
            translated=values.pop("translated", ""),
            version=values.pop("version", ""),
            introduced=introduced,
            classes=classes,
            extra=values,
        )

    @classmethod
    def from_token(cls, token) -> "HeadingAttributes":
        """Read the attributes of a ``heading_open`` token."""
        raw = dict(token.meta.get(ATTRIBUTES_META_KEY) or {})
        # the automatic id lives on the token itself
        if "id" not in raw and token.attrGet("id"):
            raw["id"] = token.attrGet("id")
        return cls.from_mapping(raw)
