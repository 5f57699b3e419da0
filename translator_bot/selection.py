import enum
import re
from dataclasses import dataclass
from typing import Optional

from .languages import get_language

SEPARATOR = "_"

# Keys issued by ReferenceStore: "<epoch millis>-<9 lowercase alphanumerics>"
_KEY_PATTERN = re.compile(r"^\d+-[a-z0-9]{9}$")


class SelectionAction(enum.Enum):
    TRANSLATE = "translate"


@dataclass(frozen=True)
class LanguageSelection:
    """A picker button's identity: what to do, to which language, for which message"""

    action: SelectionAction
    language: str
    key: Optional[str]

    def encode(self) -> str:
        return SEPARATOR.join((self.action.value, self.language, self.key or ""))

    @classmethod
    def decode(cls, custom_id: Optional[str]) -> Optional["LanguageSelection"]:
        """Parse a component custom_id.

        Returns None for ids that do not belong to the picker (unknown action,
        unsupported language, wrong shape). A malformed key is kept as None so
        the caller reports an expired session.
        """
        if not custom_id:
            return None
        parts = custom_id.split(SEPARATOR)
        if len(parts) != 3:
            return None
        action_raw, language_raw, key = parts
        try:
            action = SelectionAction(action_raw)
        except ValueError:
            return None
        language = get_language(language_raw)
        if language is None:
            return None
        if not _KEY_PATTERN.match(key):
            key = None
        return cls(action, language.code, key)
