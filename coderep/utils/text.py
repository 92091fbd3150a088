from typing import Optional


def blank_to_none(text: Optional[str]) -> Optional[str]:
    """Collapse empty or whitespace-only optional text to None."""
    if text is None or not text.strip():
        return None
    return text


def name_key(name: str) -> str:
    """Case-insensitive lookup key for problem and to-do names."""
    return name.casefold()
