"""Immutable field paths for locating violations inside a schema tree."""

from dataclasses import dataclass
from enum import Enum


class SegmentKind(Enum):
    """Kinds of path segments."""

    CHILD = "child"
    KEY = "key"
    INDEX = "index"


@dataclass(frozen=True)
class PathSegment:
    """One step of a field path."""

    kind: SegmentKind
    value: str | int

    def render(self) -> str:
        if self.kind == SegmentKind.CHILD:
            return str(self.value)
        return f"[{self.value}]"


@dataclass(frozen=True)
class FieldPath:
    """Append-only locator into a schema document.

    Every append returns a new path, so recursive callers can branch from the
    same parent without copying or undoing anything.

    Example:
        >>> str(FieldPath.new("schema", "openAPISchema").child("properties").key("spec"))
        'schema.openAPISchema.properties[spec]'
    """

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def new(cls, name: str, *more_names: str) -> "FieldPath":
        """Create a root path from one or more child names."""
        return cls().child(name, *more_names)

    @classmethod
    def parse(cls, dotted: str) -> "FieldPath":
        """Create a path from a dotted string such as ``schema.openAPISchema``.

        Raises:
            ValueError: If the string is empty or has empty segments
        """
        names = dotted.split(".")
        if not dotted or any(not name for name in names):
            raise ValueError(f"Invalid field path: {dotted!r}")
        return cls.new(*names)

    def child(self, name: str, *more_names: str) -> "FieldPath":
        """Return a new path with named child segments appended."""
        appended = tuple(PathSegment(SegmentKind.CHILD, n) for n in (name, *more_names))
        return FieldPath(self.segments + appended)

    def key(self, name: str) -> "FieldPath":
        """Return a new path with a map-key segment appended."""
        return FieldPath(self.segments + (PathSegment(SegmentKind.KEY, name),))

    def index(self, position: int) -> "FieldPath":
        """Return a new path with a list-index segment appended."""
        return FieldPath(self.segments + (PathSegment(SegmentKind.INDEX, position),))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __str__(self) -> str:
        rendered = ""
        for segment in self.segments:
            if segment.kind == SegmentKind.CHILD and rendered:
                rendered += "."
            rendered += segment.render()
        return rendered

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"
