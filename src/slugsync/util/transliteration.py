"""
Fixed character table for turning non-ASCII letters into ASCII approximations.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_RUSSIAN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch", "ъ": "",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "Yo",
    "Ж": "Zh", "З": "Z", "И": "I", "Й": "Y", "К": "K", "Л": "L", "М": "M",
    "Н": "N", "О": "O", "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "U",
    "Ф": "F", "Х": "H", "Ц": "Ts", "Ч": "Ch", "Ш": "Sh", "Щ": "Sch", "Ъ": "",
    "Ы": "Y", "Ь": "", "Э": "E", "Ю": "Yu", "Я": "Ya",
}

_UKRAINIAN = {
    "є": "ye", "ї": "yi", "і": "i", "ґ": "g",
    "Є": "Ye", "Ї": "Yi", "І": "I", "Ґ": "G",
}

_GERMANIC = {
    "ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss", "å": "a", "æ": "ae", "ø": "o",
    "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "Å": "A", "Æ": "Ae", "Ø": "O",
}

_LATIN = {
    "á": "a", "à": "a", "â": "a", "ą": "a", "ć": "c", "ç": "c", "č": "c",
    "ĉ": "c", "ď": "d", "đ": "d", "é": "e", "è": "e", "ê": "e", "ë": "e",
    "ę": "e", "ě": "e", "í": "i", "ì": "i", "î": "i", "ï": "i", "ł": "l",
    "ń": "n", "ň": "n", "ñ": "ny", "ó": "o", "ò": "o", "ô": "o", "ő": "o",
    "ř": "r", "ś": "s", "š": "s", "ş": "s", "ť": "t", "ú": "u", "ù": "u",
    "û": "u", "ů": "u", "ű": "u", "ý": "y", "ÿ": "y", "ź": "z", "ż": "z",
    "ž": "z",
    "Á": "A", "À": "A", "Â": "A", "Ą": "A", "Ć": "C", "Ç": "C", "Č": "C",
    "Ĉ": "C", "Ď": "D", "Đ": "D", "É": "E", "È": "E", "Ê": "E", "Ë": "E",
    "Ę": "E", "Ě": "E", "Í": "I", "Ì": "I", "Î": "I", "Ï": "I", "Ł": "L",
    "Ń": "N", "Ň": "N", "Ñ": "Ny", "Ó": "O", "Ò": "O", "Ô": "O", "Ő": "O",
    "Ř": "R", "Ś": "S", "Š": "S", "Ş": "S", "Ť": "T", "Ú": "U", "Ù": "U",
    "Û": "U", "Ů": "U", "Ű": "U", "Ý": "Y", "Ÿ": "Y", "Ź": "Z", "Ż": "Z",
    "Ž": "Z",
}

TRANSLITERATION_TABLE: Mapping[str, str] = MappingProxyType(
    {**_RUSSIAN, **_UKRAINIAN, **_GERMANIC, **_LATIN}
)

_TRANSLATE = str.maketrans(dict(TRANSLITERATION_TABLE))


def transliterate(text: str) -> str:
    """
    Replace every character found in the table with its ASCII spelling.

    Characters without an entry are passed through untouched.
    """
    if not text or not isinstance(text, str):
        return ""
    return text.translate(_TRANSLATE)
