"""Rendering helpers for labels, errors and whole field groups.

Usable directly from templates:
    {{ render_field(form.email, class_="wide") }}
    {{ render_hidden_fields(form) }}
"""

from __future__ import annotations

from collections.abc import Iterable

from markupsafe import Markup, escape

from formbind.config import get_settings
from formbind.fields import Field
from formbind.widgets import CheckboxWidget, HiddenWidget, RadioWidget


def render_error(field: Field) -> Markup:
    """The field's current error, or an empty fragment."""
    if field.error is None:
        return Markup("")
    css_class = get_settings().render.error_class
    return Markup(f'<span class="{escape(css_class)}">{escape(field.error.message)}</span>')


def render_label(field: Field, required_marker: bool = False) -> Markup:
    render_config = get_settings().render
    marker = Markup(render_config.required_marker) if required_marker and field.required else ""
    return Markup(
        f'<label class="{escape(render_config.label_class)}" for="{escape(field.name or "")}">'
        f"{escape(field.label or '')}{marker}</label>"
    )


def render_field(field: Field, **attrs: object) -> Markup:
    """Render a field group: label, widget and error.

    Checkboxes render the widget inside the label; radio groups render one
    labelled input per choice.
    """
    widget = field.widget
    error = render_error(field)

    if isinstance(widget, CheckboxWidget):
        html = (
            f'<label class="checkbox">{field.render(**attrs)} {escape(field.label or "")}</label>'
        )
    elif isinstance(widget, RadioWidget):
        radios = widget.radios(attrs, str(field.string_value()))
        html = str(render_label(field, required_marker=True)) + "\n" + "\n".join(
            f'<label class="radio">{radio}</label>' for radio in radios
        )
    else:
        html = str(render_label(field, required_marker=True)) + "\n" + str(field.render(**attrs))

    if error:
        html += "\n" + str(error)
    return Markup(html)


def render_hidden_fields(fields: Iterable[Field]) -> Markup:
    """Concatenate the markup of every field rendered with a hidden widget."""
    return Markup("").join(
        field.render() for field in fields if isinstance(field.widget, HiddenWidget)
    )
