def capitalize(s: str) -> str:
    """
    Title-case the first character of ``s`` and leave the rest untouched.

    Unlike ``str.capitalize()`` this does not lowercase the remainder, and it
    uses the Unicode title-case mapping (so "ǆemal" -> "ǅemal", not "Ǆemal").
    """
    if not s:
        return s
    return s[0].title() + s[1:]


__all__ = ["capitalize"]
