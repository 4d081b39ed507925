"""Inline ``style="..."`` attribute parsing."""


def parse_style(value: str | None) -> dict[str, str]:
    """Parse a CSS-like inline style string into a property mapping.

    ``"color: red; font-weight:700"`` -> ``{"color": "red", "font-weight": "700"}``.
    Segments without a ``:`` or with an empty property name are dropped.
    Later duplicates override earlier ones.
    """
    styles: dict[str, str] = {}
    if not value:
        return styles

    for segment in value.split(";"):
        key, sep, val = segment.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        styles[key] = val.strip()
    return styles
