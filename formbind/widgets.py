"""Widgets render a field's current value(s) as HTML markup."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from markupsafe import Markup, escape

from formbind.attrs import WidgetAttrs
from formbind.config import get_settings

Choice = tuple[str, str]


class Widget:
    """Base widget holding an ordered attribute set.

    Attributes passed to ``render()`` apply to that call only; the widget's
    own attributes are left untouched.
    """

    default_attrs: dict[str, str] = {}

    def __init__(self, attrs: Mapping[str, object] | None = None):
        self.attrs = WidgetAttrs(self.default_attrs)
        if attrs:
            self.attrs.update(attrs)

    def merged_attrs(self, attrs: Mapping[str, object] | None = None) -> WidgetAttrs:
        merged = self.attrs.clone()
        if attrs:
            merged.update(attrs)
        return merged

    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attrs!r})"


class InputWidget(Widget):
    input_type = "text"

    def __init__(self, attrs: Mapping[str, object] | None = None):
        self.default_attrs = {"type": self.input_type}
        super().__init__(attrs)

    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        value = values[0] if values else ""
        return Markup(f'<input{self.merged_attrs(attrs).render()} value="{escape(value)}" />')


class TextWidget(InputWidget):
    input_type = "text"


class NumberWidget(InputWidget):
    input_type = "number"


class HiddenWidget(InputWidget):
    input_type = "hidden"


class CheckboxWidget(InputWidget):
    input_type = "checkbox"


class TextareaWidget(Widget):
    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        value = values[0] if values else ""
        return Markup(f"<textarea{self.merged_attrs(attrs).render()}>{escape(value)}</textarea>")


class ChoiceWidget(Widget):
    """Widget rendering a fixed list of (value, label) choices."""

    def __init__(self, attrs: Mapping[str, object] | None = None):
        super().__init__(attrs)
        self.choices: list[Choice] = []

    def set_choices(self, choices: Sequence[tuple[object, object]]) -> None:
        self.choices = [(str(value), str(label)) for value, label in choices]


class SelectWidget(ChoiceWidget):
    multiple = False

    def options(self, *selected: str) -> list[Markup]:
        options = []
        for value, label in self.choices:
            attrs = ' selected="selected"' if value in selected else ""
            options.append(
                Markup(f'<option value="{escape(value)}"{attrs}>{escape(label)}</option>')
            )
        return options

    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        opening = "<select multiple=\"multiple\"" if self.multiple else "<select"
        options = "\n".join(self.options(*values))
        return Markup(f"{opening}{self.merged_attrs(attrs).render()}>{options}</select>")


class MultiSelectWidget(SelectWidget):
    multiple = True


class RadioWidget(ChoiceWidget):
    default_attrs = {"type": "radio"}

    def radios(
        self, attrs: Mapping[str, object] | None = None, checked_value: str = ""
    ) -> list[Markup]:
        """One ``<input type="radio">`` per choice, each with an ``<id>_<index>`` id."""
        base_id = self.attrs.get("id", "")
        radios = []
        for i, (value, label) in enumerate(self.choices):
            radio_attrs = self.attrs.clone()
            radio_attrs.set("id", f"{base_id}_{i}")
            if attrs:
                radio_attrs.update(attrs)
            checked = ' checked="checked"' if value == checked_value else ""
            radios.append(
                Markup(
                    f'<input{radio_attrs.render()} value="{escape(value)}"{checked} /> '
                    f"{escape(label)}"
                )
            )
        return radios

    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        checked_value = values[0] if values else ""
        separator = get_settings().render.radio_separator
        return Markup(separator.join(self.radios(attrs, checked_value)))


class FileWidget(Widget):
    """File input. Never reflects a value back to the client."""

    default_attrs = {"type": "file"}

    def render(self, attrs: Mapping[str, object] | None = None, *values: str) -> Markup:
        return Markup(f"<input{self.merged_attrs(attrs).render()} />")
