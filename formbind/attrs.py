"""Ordered HTML attribute set used by widgets."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from markupsafe import Markup, escape


def html_attr_name(name: str) -> str:
    """Convert Python keyword naming to HTML: class_ -> class, data_id -> data-id."""
    return name.rstrip("_").replace("_", "-")


class WidgetAttrs:
    """Ordered mapping of HTML attribute name to value.

    Setting an existing attribute replaces its value in place, so the
    original ordering is kept. Values are stored raw and escaped on output.
    """

    def __init__(self, attrs: Mapping[str, object] | None = None):
        self._attrs: dict[str, str] = {}
        if attrs:
            self.update(attrs)

    def set(self, name: str, value: object) -> None:
        self._attrs[name] = str(value)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._attrs.get(name, default)

    def pop(self, name: str, default: str | None = None) -> str | None:
        return self._attrs.pop(name, default)

    def update(self, attrs: Mapping[str, object]) -> None:
        """Set several attributes, converting Python-style names."""
        for name, value in attrs.items():
            self.set(html_attr_name(name), value)

    def names(self) -> list[str]:
        return list(self._attrs)

    def clone(self) -> WidgetAttrs:
        copy = WidgetAttrs()
        copy._attrs = dict(self._attrs)
        return copy

    def render(self) -> Markup:
        """Render as ``' a="1" b="2"'``, or an empty string when there are none."""
        if not self._attrs:
            return Markup("")
        parts = [f'{name}="{escape(value)}"' for name, value in self._attrs.items()]
        return Markup(" " + " ".join(parts))

    def __contains__(self, name: object) -> bool:
        return name in self._attrs

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __str__(self) -> str:
        return str(self.render())

    def __repr__(self) -> str:
        return f"WidgetAttrs({self._attrs!r})"
