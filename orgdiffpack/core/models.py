"""Core data models for named items and snapshot collections."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from orgdiffpack.core.types import ITEM_FORMATS, ORIGINS


def _empty_bytes() -> bytes:
    return b""


@dataclass(frozen=True, slots=True)
class ItemHandle:
    """One named item of a snapshot with lazy access to its content."""

    name: str
    origin: str
    format: str = "text"
    loader: Callable[[], bytes] = field(default=_empty_bytes, repr=False, compare=False)
    path: str | None = None
    placeholder: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Item name must be non-empty")
        if self.origin not in ORIGINS:
            raise ValueError(f"Unsupported item origin: {self.origin}")
        if self.format not in ITEM_FORMATS:
            raise ValueError(f"Unsupported item format: {self.format}")

    def read_bytes(self) -> bytes:
        return self.loader()

    def read_text(self) -> str:
        return self.decode(self.read_bytes())

    def decode(self, data: bytes) -> str:
        """Decode raw item content.

        Binary content is decoded losslessly so distinct bytes never compare equal.
        """
        if self.format == "binary":
            return data.decode("utf-8", errors="surrogateescape")
        return data.decode("utf-8-sig", errors="replace")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "origin": self.origin,
            "format": self.format,
            "path": self.path,
            "placeholder": self.placeholder,
        }

    @classmethod
    def from_bytes(cls, name: str, data: bytes, *, origin: str, format: str = "text") -> "ItemHandle":
        return cls(name=name, origin=origin, format=format, loader=lambda: data)

    @classmethod
    def from_path(
        cls,
        name: str,
        path: str | Path,
        *,
        origin: str,
        format: str = "text",
    ) -> "ItemHandle":
        file_path = Path(path)
        return cls(
            name=name,
            origin=origin,
            format=format,
            loader=file_path.read_bytes,
            path=str(file_path),
        )


def empty_placeholder(counterpart: ItemHandle) -> ItemHandle:
    """Return a zero-length stand-in for the side where ``counterpart`` is missing."""
    return ItemHandle(
        name=counterpart.name,
        origin="B" if counterpart.origin == "A" else "A",
        format=counterpart.format,
        loader=_empty_bytes,
        placeholder=True,
    )


@dataclass(frozen=True, slots=True)
class ItemCollection:
    """Immutable ``name -> ItemHandle`` mapping for one snapshot."""

    label: str
    origin: str
    items: Mapping[str, ItemHandle] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.origin not in ORIGINS:
            raise ValueError(f"Unsupported collection origin: {self.origin}")
        for name, handle in self.items.items():
            if handle.name != name:
                raise ValueError(f"Item key {name!r} does not match handle name {handle.name!r}")
            if handle.origin != self.origin:
                raise ValueError(
                    f"Item {name!r} has origin {handle.origin}, expected {self.origin}"
                )
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def names(self) -> frozenset[str]:
        return frozenset(self.items)

    def get(self, name: str) -> ItemHandle | None:
        return self.items.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.items))

    @classmethod
    def from_handles(
        cls,
        handles: Iterable[ItemHandle],
        *,
        label: str,
        origin: str,
    ) -> "ItemCollection":
        items: dict[str, ItemHandle] = {}
        for handle in handles:
            if handle.name in items:
                raise ValueError(f"Duplicate item name in {label}: {handle.name}")
            items[handle.name] = handle
        return cls(label=label, origin=origin, items=items)
