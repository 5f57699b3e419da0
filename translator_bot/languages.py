from typing import NamedTuple, Optional


class Language(NamedTuple):
    name: str
    code: str
    flag: str

    @property
    def label(self):
        return f"{self.flag} {self.name}"


# Languages offered by the slash command and the message picker
LANGUAGES = (
    Language("French", "FR", "🇫🇷"),
    Language("English", "EN", "🇬🇧"),
    Language("German", "DE", "🇩🇪"),
    Language("Spanish", "ES", "🇪🇸"),
    Language("Italian", "IT", "🇮🇹"),
    Language("Japanese", "JA", "🇯🇵"),
    Language("Chinese", "ZH", "🇨🇳"),
    Language("Turkish", "TR", "🇹🇷"),
)

_BY_CODE = {lang.code: lang for lang in LANGUAGES}


def get_language(code: Optional[str]) -> Optional[Language]:
    """Look up a supported language by code, case-insensitively"""
    if not code:
        return None
    return _BY_CODE.get(code.strip().upper())


def normalize_code(code: str) -> str:
    return code.strip().upper()
