"""Route parameter converters.

Built-in converters for template segments like ``{id:int}``. A value
must render to a string matching the converter's pattern to be
substituted into a URL.
"""

import re

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

_COMPILED: dict[str, re.Pattern[str]] = {
    name: re.compile(f"^{pattern}$") for name, (pattern, _) in CONVERTERS.items()
}


def format_param(value: object) -> str:
    """Render a route value as its URL text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def accepts_param(text: str, param_type: str) -> bool:
    """Whether *text* is a valid value for a ``param_type`` segment.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return _COMPILED[param_type].match(text) is not None
