"""Tests for field variants and is_field_valid from formbind/fields.py."""

from __future__ import annotations

import pytest
from litestar.datastructures import UploadFile

from formbind.blobs import BlobField, StoredBlob
from formbind.exceptions import ErrorKind, ValidationError
from formbind.fields import (
    INT64_MAX,
    INT64_MIN,
    BoolField,
    FileField,
    Int64ChoiceField,
    Int64Field,
    MultiInt64ChoiceField,
    MultiStringChoiceField,
    StringChoiceField,
    StringField,
    TextareaStringField,
    is_empty,
    is_field_valid,
    parse_int64,
    to_string,
)
from formbind.widgets import RadioWidget, TextWidget


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, "", [], (), {}, 0, 0.0, False])
    def test_empty_values(self, value):
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", ["x", [0], 1, -1, True, object()])
    def test_non_empty_values(self, value):
        assert is_empty(value) is False


class TestCoercion:
    def test_to_string_formats_booleans_like_form_data(self):
        assert to_string(True) == "true"
        assert to_string(False) == "false"
        assert to_string(12) == "12"

    def test_parse_int64_accepts_signs(self):
        assert parse_int64("+5") == 5
        assert parse_int64("-5") == -5
        assert parse_int64(7) == 7

    def test_parse_int64_bounds(self):
        assert parse_int64(str(INT64_MAX)) == INT64_MAX
        assert parse_int64(str(INT64_MIN)) == INT64_MIN
        with pytest.raises(ValidationError) as exc_info:
            parse_int64(str(INT64_MAX + 1))
        assert exc_info.value.kind is ErrorKind.RANGE

    @pytest.mark.parametrize("raw", ["abc", "1.5", " 1", "1_000", "", "0x10"])
    def test_parse_int64_rejects_non_decimal(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_int64(raw)
        assert exc_info.value.kind is ErrorKind.FORMAT


# ---------------------------------------------------------------------------
# String fields
# ---------------------------------------------------------------------------


class TestStringField:
    def test_required_field_rejects_missing_value(self):
        f = StringField()

        assert is_field_valid(f, None) is False
        assert f.error.kind is ErrorKind.REQUIRED
        assert str(f.error) == "This field is required"
        assert f.value == ""
        assert f.render() == '<input type="text" value="" />'

    def test_required_field_accepts_value(self):
        f = StringField()

        assert is_field_valid(f, "foo") is True
        assert f.error is None
        assert f.value == "foo"
        assert f.render() == '<input type="text" value="foo" />'

    def test_optional_field_accepts_missing_value(self):
        f = StringField(required=False)

        assert is_field_valid(f, None) is True
        assert f.error is None
        assert f.has_value is False
        assert f.render() == '<input type="text" value="" />'

    def test_empty_string_is_missing(self):
        f = StringField()
        assert is_field_valid(f, "") is False
        assert f.error.kind is ErrorKind.REQUIRED

    def test_min_len(self):
        f = StringField(min_len=3)
        assert is_field_valid(f, "ab") is False
        assert f.error.kind is ErrorKind.LENGTH
        assert str(f.error) == "This field should have at least 3 symbols"
        assert is_field_valid(f, "abc") is True

    def test_max_len(self):
        f = StringField(max_len=3)
        assert is_field_valid(f, "abcd") is False
        assert str(f.error) == "This field should have less than 3 symbols"
        assert is_field_valid(f, "abc") is True

    def test_name_and_label(self):
        f = StringField(name="foo", label="fooLabel")
        assert f.name == "foo"
        assert f.label == "fooLabel"
        assert f.render() == '<input type="text" value="" />'

    def test_pass_clears_previous_error(self):
        f = StringField()
        is_field_valid(f, None)
        assert f.error is not None

        assert is_field_valid(f, "ok") is True
        assert f.error is None

    def test_failed_pass_clears_previous_value(self):
        f = StringField(max_len=2)
        is_field_valid(f, "ok")
        assert is_field_valid(f, "too long") is False
        assert f.has_value is False

    def test_textarea_variant(self):
        f = TextareaStringField()
        f.set_initial("hello")
        assert f.render() == "<textarea>hello</textarea>"

    def test_render_extra_attrs(self):
        f = StringField()
        f.set_initial("x")
        assert f.render(class_="wide") == '<input type="text" class="wide" value="x" />'


class TestValidators:
    def test_callable_validator(self):
        def no_spaces(value):
            if " " in value:
                raise ValidationError("No spaces allowed")

        f = StringField(validators=[no_spaces])
        assert is_field_valid(f, "a b") is False
        assert str(f.error) == "No spaces allowed"
        assert f.error.kind is ErrorKind.CUSTOM
        assert is_field_valid(f, "ab") is True

    def test_first_failing_validator_wins(self):
        def first(value):
            raise ValidationError("first")

        def second(value):
            raise ValidationError("second")

        f = StringField(validators=[first, second])
        is_field_valid(f, "x")
        assert str(f.error) == "first"

    def test_unexpected_exceptions_propagate(self):
        def broken(value):
            raise ZeroDivisionError

        f = StringField()
        f.add_validator(broken)
        with pytest.raises(ZeroDivisionError):
            is_field_valid(f, "x")


# ---------------------------------------------------------------------------
# Integer and boolean fields
# ---------------------------------------------------------------------------


class TestInt64Field:
    def test_parses_value(self):
        f = Int64Field()
        assert is_field_valid(f, "23") is True
        assert f.value == 23
        assert f.render() == '<input type="text" value="23" />'

    def test_rejects_text(self):
        f = Int64Field()
        assert is_field_valid(f, "abc") is False
        assert f.error.kind is ErrorKind.FORMAT
        assert f.value == 0

    def test_zero_counts_as_missing(self):
        f = Int64Field()
        assert is_field_valid(f, 0) is False
        assert f.error.kind is ErrorKind.REQUIRED

    def test_string_zero_is_a_value(self):
        f = Int64Field()
        assert is_field_valid(f, "0") is True
        assert f.value == 0
        assert f.has_value is True

    def test_64_bit_round_trip(self):
        f = Int64Field()
        assert is_field_valid(f, str(INT64_MAX)) is True
        assert f.value == INT64_MAX
        assert f.render() == f'<input type="text" value="{INT64_MAX}" />'

    def test_oversized_number_is_out_of_range(self):
        f = Int64Field()
        assert is_field_valid(f, "9" * 5000) is False
        assert f.error.kind is ErrorKind.RANGE
        assert f.has_value is False

    def test_leading_zeros_do_not_count_towards_size(self):
        f = Int64Field()
        assert is_field_valid(f, "-" + "0" * 40 + "7") is True
        assert f.value == -7

    def test_set_initial_renders(self):
        f = Int64Field()
        f.set_initial(-42)
        assert f.string_value() == "-42"


class TestBoolField:
    def test_true(self):
        f = BoolField()
        assert is_field_valid(f, "true") is True
        assert f.value is True
        assert f.render() == '<input type="checkbox" checked="checked" value="true" />'

    def test_other_text_is_false(self):
        f = BoolField()
        assert is_field_valid(f, "on") is True
        assert f.value is False
        assert f.render() == '<input type="checkbox" value="true" />'

    def test_python_bool_raw_value(self):
        f = BoolField()
        assert is_field_valid(f, True) is True
        assert f.value is True

    def test_unchecked_required_box(self):
        f = BoolField()
        assert is_field_valid(f, None) is False
        assert f.error.kind is ErrorKind.REQUIRED

    def test_unchecked_optional_box(self):
        f = BoolField(required=False)
        assert is_field_valid(f, None) is True
        assert f.value is False


# ---------------------------------------------------------------------------
# Choice fields
# ---------------------------------------------------------------------------


class TestStringChoiceField:
    def test_validation(self):
        f = StringChoiceField()
        f.set_choices([("foo", "bar")])

        assert is_field_valid(f, "x") is False
        assert f.error.kind is ErrorKind.CHOICE
        assert str(f.error) == "x is invalid choice"
        assert f.has_value is False

        assert is_field_valid(f, "foo") is True
        assert f.value == "foo"

    def test_renders_select(self):
        f = StringChoiceField(choices=[("foo", "bar"), ("go", "Golang")])
        f.set_initial("go")
        assert f.render() == (
            '<select><option value="foo">bar</option>\n'
            '<option value="go" selected="selected">Golang</option></select>'
        )

    def test_set_choices_replaces_previous_set(self):
        f = StringChoiceField(choices=[("a", "A")])
        f.set_choices([("b", "B")])

        assert len(f.validators) == 1
        assert is_field_valid(f, "a") is False
        assert is_field_valid(f, "b") is True

    def test_radio_variant(self):
        f = StringChoiceField(choices=[("a", "A")], radio=True)
        assert isinstance(f.widget, RadioWidget)

    def test_choices_need_choice_widget(self):
        f = StringChoiceField(widget=TextWidget())
        with pytest.raises(TypeError):
            f.set_choices([("a", "A")])


class TestInt64ChoiceField:
    def test_validation(self):
        f = Int64ChoiceField(choices=[(1, "foo")])

        assert is_field_valid(f, "2") is False
        assert str(f.error) == "2 is invalid choice"

        assert is_field_valid(f, "1") is True
        assert f.value == 1

    def test_widget_choices_are_strings(self):
        f = Int64ChoiceField(choices=[(1, "foo")])
        assert f.widget.choices == [("1", "foo")]


class TestMultiChoiceFields:
    def test_multi_int_validation(self):
        f = MultiInt64ChoiceField()
        f.set_choices([(1, "bar"), (2, "Golang")])

        assert is_field_valid(f, [0]) is False
        assert str(f.error) == "0 is invalid choice"
        assert f.has_value is False
        assert f.value == []

        assert is_field_valid(f, [1, 2]) is True
        assert f.value == [1, 2]

    def test_multi_int_keeps_order_and_duplicates(self):
        f = MultiInt64ChoiceField(choices=[(1, "a"), (2, "b")])
        assert is_field_valid(f, ["2", "1", "2"]) is True
        assert f.value == [2, 1, 2]
        assert f.string_value() == ["2", "1", "2"]

    def test_multi_int_parse_failure_aborts(self):
        f = MultiInt64ChoiceField(choices=[(1, "a")])
        assert is_field_valid(f, ["1", "x"]) is False
        assert f.error.kind is ErrorKind.FORMAT

    def test_multi_int_oversized_entry_is_out_of_range(self):
        f = MultiInt64ChoiceField(choices=[(1, "a")])
        assert is_field_valid(f, ["1", "1" * 4400]) is False
        assert f.error.kind is ErrorKind.RANGE
        assert f.value == []

    def test_multi_fields_refuse_radio_buttons(self):
        with pytest.raises(TypeError):
            MultiInt64ChoiceField(choices=[(2, "b")], radio=True)
        with pytest.raises(TypeError):
            MultiStringChoiceField(widget=RadioWidget())

    def test_multi_string_validation(self):
        f = MultiStringChoiceField(choices=[("foo", "bar"), ("go", "Golang")])

        assert is_field_valid(f, ["x"]) is False
        assert str(f.error) == "x is invalid choice"

        assert is_field_valid(f, ["foo", "go"]) is True
        assert f.value == ["foo", "go"]

    def test_multi_rejects_scalar(self):
        f = MultiStringChoiceField(choices=[("foo", "bar")])
        assert is_field_valid(f, "foo") is False
        assert f.error.kind is ErrorKind.TYPE
        assert str(f.error) == "Type str is not supported"

    def test_multi_is_optional_by_default(self):
        f = MultiStringChoiceField()
        assert f.is_multi is True
        assert is_field_valid(f, None) is True
        assert is_field_valid(f, []) is True

    def test_multi_render_selects_all_values(self):
        f = MultiStringChoiceField(choices=[("foo", "bar"), ("go", "Golang")])
        f.set_initial(["foo", "go"])
        assert f.render() == (
            '<select multiple="multiple">'
            '<option value="foo" selected="selected">bar</option>\n'
            '<option value="go" selected="selected">Golang</option></select>'
        )


# ---------------------------------------------------------------------------
# File transport
# ---------------------------------------------------------------------------


class TestFileField:
    def test_accepts_upload(self):
        upload = UploadFile(content_type="text/plain", filename="notes.txt")
        f = FileField()

        assert f.is_multipart is True
        assert is_field_valid(f, upload) is True
        assert f.value is upload
        assert f.string_value() == "notes.txt"

    def test_rejects_other_types(self):
        f = FileField()
        assert is_field_valid(f, "notes.txt") is False
        assert f.error.kind is ErrorKind.TYPE

    def test_render_has_no_value(self):
        f = FileField()
        f.set_initial(UploadFile(content_type="text/plain", filename="notes.txt"))
        assert f.render() == '<input type="file" />'


class TestBlobField:
    def test_accepts_stored_blob(self):
        blob = StoredBlob(key="abc", filename="a.png", content_type="image/png", size=10)
        f = BlobField()

        assert is_field_valid(f, blob) is True
        assert f.value == blob
        assert f.string_value() == "abc"

    def test_rejects_upload(self):
        f = BlobField()
        upload = UploadFile(content_type="image/png", filename="a.png")
        assert is_field_valid(f, upload) is False
        assert str(f.error) == "Type UploadFile is not supported"
