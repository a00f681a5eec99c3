import re

import pandas as pd

_JOINERS = re.compile(r"\s*([+&])\s*")
_WHITESPACE = re.compile(r"\s+")
# Lowercase letter that starts a word; letters after an apostrophe stay lowercase
_WORD_START = re.compile(r"(?<![A-Za-z0-9'])([a-z])")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def title_case(text: str) -> str:
    # "t-shirt" -> "T-Shirt", "levi's" -> "Levi's"
    return _WORD_START.sub(lambda m: m.group(1).upper(), text.lower())


def apply_aliases(text: str, aliases) -> str:
    for variant, canonical in aliases.items():
        pattern = r"(?<![\w'])" + re.escape(variant) + r"(?![\w'])"
        text = re.sub(pattern, canonical, text)
    return text


def normalize_description(text, aliases=None) -> str:
    """
    Bring a hand-typed description into the form the tag vocabularies are written in.

    "shirt+jeans  set" -> "Shirt + Jeans Set". Missing values become an empty string.
    """
    if text is None or (not isinstance(text, str) and pd.isna(text)):
        return ""

    text = str(text)
    # "H&M" is a brand, keep the ampersand glued there
    text = _JOINERS.sub(lambda m: m.group(1) if _is_glued(m) else f" {m.group(1)} ", text)
    text = title_case(collapse_whitespace(text))
    if aliases:
        text = apply_aliases(text, aliases)
    return collapse_whitespace(text)


def _is_glued(match) -> bool:
    # Short brand initials around a bare "&", as in "H&M"
    if match.group(0) != "&":
        return False
    before = re.search(r"[A-Za-z]+$", match.string[:match.start()])
    after = re.match(r"[A-Za-z]+", match.string[match.end():])
    return bool(before and after and len(before.group(0)) <= 2 and len(after.group(0)) <= 2)
