from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class MessagesConfig(BaseModel):
    """User-visible validation messages. Templates use str.format fields."""

    required: str = "This field is required"
    min_length: str = "This field should have at least {min_len} symbols"
    max_length: str = "This field should have less than {max_len} symbols"
    invalid_integer: str = "{value!r} is not a valid integer"
    integer_out_of_range: str = "{value} is out of range"
    invalid_choice: str = "{value} is invalid choice"
    unsupported_type: str = "Type {type_name} is not supported"
    pattern_mismatch: str = "{value} has invalid format"
    below_minimum: str = "Ensure this value is greater than or equal to {min_value}"
    above_maximum: str = "Ensure this value is less than or equal to {max_value}"


class RenderConfig(BaseModel):
    """Markup used by the rendering helpers."""

    error_class: str = "help-inline"
    label_class: str = "control-label"
    required_marker: str = ' <span class="required">*</span>'
    radio_separator: str = "\n"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FORMBIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    messages: MessagesConfig = MessagesConfig()
    render: RenderConfig = RenderConfig()


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment and .env."""
    return Settings()
