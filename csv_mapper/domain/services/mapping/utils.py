import re

_SEPARATORS_RE = re.compile(r"[\s_\-]")


def normalize_name(name: str) -> str:
    return _SEPARATORS_RE.sub("", name).lower()


def normalize_text(text: str) -> str:
    return re.sub("[^A-Z0-9]", "", text.upper())


def contains_any(text: str, needles: tuple[str, ...], *, ignore_case: bool = False) -> bool:
    if ignore_case:
        lowered = text.lower()
        return any(needle.lower() in lowered for needle in needles)
    return any(needle in text for needle in needles)
