"""Media types and ``Accept`` header parsing.

``MediaType`` is a frozen value: ``type/subtype`` plus parameters and
an optional quality. Matching understands ``*`` wildcards in either
position; ranges carrying parameters only match types that carry the
same parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class MediaType:
    """A parsed media type or media range.

    Usage::

        MediaType.parse("application/json; charset=utf-8")
        MediaType.parse("text/*;q=0.5").quality  # 0.5
    """

    type: str
    subtype: str
    params: tuple[tuple[str, str], ...] = ()
    quality: float = 1.0

    @classmethod
    def parse(cls, text: str) -> MediaType:
        """Parse a single media type.

        Raises ``ValueError`` on a malformed type or a non-numeric ``q``.
        """
        head, *raw_params = text.split(";")
        full = head.strip().lower()
        type_, sep, subtype = full.partition("/")
        if not sep or not type_ or not subtype or " " in full:
            msg = f"Invalid media type: {text!r}"
            raise ValueError(msg)

        params: list[tuple[str, str]] = []
        quality = 1.0
        for raw in raw_params:
            name, _, value = raw.strip().partition("=")
            name = name.strip().lower()
            value = value.strip().strip('"')
            if not name:
                continue
            if name == "q":
                quality = min(max(float(value), 0.0), 1.0)
                continue
            params.append((name, value))
        return cls(type=type_, subtype=subtype, params=tuple(params), quality=quality)

    @property
    def media_type(self) -> str:
        """``type/subtype`` without parameters."""
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> str | None:
        """The ``charset`` parameter, if present."""
        return self.get_param("charset")

    @property
    def is_wildcard(self) -> bool:
        """True for ``*/*`` and ``type/*`` ranges."""
        return self.type == "*" or self.subtype == "*"

    @property
    def is_textual(self) -> bool:
        """Whether a ``charset`` parameter belongs on this type."""
        return self.type == "text" or self.subtype in {"json", "xml", "javascript"} or (
            self.subtype.endswith(("+json", "+xml"))
        )

    def get_param(self, name: str) -> str | None:
        """Return a parameter value by (case-insensitive) name."""
        name = name.lower()
        for key, value in self.params:
            if key == name:
                return value
        return None

    def with_param(self, name: str, value: str) -> MediaType:
        """Return a copy with *name* set to *value*."""
        name = name.lower()
        kept = tuple((k, v) for k, v in self.params if k != name)
        return replace(self, params=(*kept, (name, value)))

    def without_param(self, name: str) -> MediaType:
        """Return a copy with *name* removed."""
        name = name.lower()
        return replace(self, params=tuple((k, v) for k, v in self.params if k != name))

    def is_subset_of(self, other: MediaType) -> bool:
        """True when every type this describes is also described by *other*.

        ``application/json`` is a subset of ``application/*`` and of
        ``*/*``; ``application/*`` is not a subset of ``application/json``.
        Parameters on *other* must be present with equal values here.
        """
        if other.type != "*" and other.type != self.type:
            return False
        if other.subtype != "*" and other.subtype != self.subtype:
            return False
        for name, value in other.params:
            mine = self.get_param(name)
            if mine is None or mine.lower() != value.lower():
                return False
        return True

    def matches(self, other: MediaType) -> bool:
        """Symmetric wildcard match."""
        return self.is_subset_of(other) or other.is_subset_of(self)

    def __str__(self) -> str:
        parts = [self.media_type]
        parts.extend(f"{name}={value}" for name, value in self.params)
        return "; ".join(parts)


def parse_accept(header: str | None, *, keep_refused: bool = False) -> list[MediaType]:
    """Parse an ``Accept`` header into media ranges, best first.

    Sorted by quality descending; ties keep header order. Entries with
    ``q=0`` are dropped unless *keep_refused* is set; malformed entries
    are skipped.
    """
    if not header:
        return []
    ranges: list[MediaType] = []
    for part in header.split(","):
        if not part.strip():
            continue
        try:
            media = MediaType.parse(part)
        except ValueError:
            continue
        if media.quality > 0 or keep_refused:
            ranges.append(media)
    return sorted(ranges, key=lambda m: m.quality, reverse=True)


def parse_accept_charset(header: str | None) -> list[str]:
    """Parse an ``Accept-Charset`` header into charset names, best first."""
    if not header:
        return []
    weighted: list[tuple[str, float]] = []
    for part in header.split(","):
        name, *raw_params = part.split(";")
        name = name.strip().lower()
        if not name:
            continue
        quality = 1.0
        for raw in raw_params:
            key, _, value = raw.strip().partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((name, quality))
    weighted.sort(key=lambda item: item[1], reverse=True)
    return [name for name, _ in weighted]
