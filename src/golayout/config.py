import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Messages(BaseModel):
    """Diagnostic message catalogue. Templates use ``str.format`` fields."""

    model_config = ConfigDict(frozen=True)

    blank_line_before_close: str = "Line break before closing } is not allowed."
    missing_line_break_after_close: str = "Line break after closing } is required."
    multiple_closing_braces: str = "Multiple closing } brackets on the same line are not allowed."
    blank_line_before_defer: str = "Line break before '{keyword}' statement is not allowed."
    signature_gap_required: str = "Line break after multiline function signature is required"
    signature_gap_too_large: str = "Too many line breaks after the multiline function signature: {excess}"
    separator_at_end: str = "Separators at the end of the file are not allowed"
    separator_before_package: str = "Separator is not allowed before package declaration"
    separator_before_imports: str = "Separator is not allowed before imports"
    separator_multiline: str = "Separator is not allowed a part of multiline comment"
    separator_over_code: str = "Separator is not allowed over code"
    separator_spacing: str = "Each Separator should be surrounded by exactly one empty line"
    empty_section: str = "Empty section detected: no declarations found between consecutive separators"
    missing_separator_after_package: str = "Missing Separator after package declaration when no imports present"
    unknown_declaration: str = "Unknown declaration type found in bucket, might be a bug"
    type_declaration_specs: str = "Type declaration should have exactly one spec"
    single_interface_or_struct: str = "Only one interface or struct declaration is allowed between separators"
    forbidden_mix: str = "Forbidden declarations within the same group: {kinds}"
    mixing_public_and_private: str = "Mixing public and private methods in the same group is not allowed"
    mixing_testing_and_code: str = "Mixing testing and code methods in the same group is not allowed"
    mixing_receivers: str = "Mixing methods with different receivers in the same group is not allowed {receivers}"
    not_a_constructor: str = (
        "Function '{name}' which is not a constructor for struct '{struct}' "
        "is not allowed in the same group as struct '{struct}'"
    )
    foreign_method: str = "Method with receiver '{receiver}' is not allowed in the same group as struct '{struct}'"


class LintConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    separator_width: int = Field(default=80, gt=0)
    separator_char: str = Field(default="/", min_length=1, max_length=1)
    test_prefix: str = "Test"
    cleanup_keyword: str = "defer"
    empty_receiver_label: str = "none"
    messages: Messages = Messages()

    @property
    def separator(self) -> str:
        return self.separator_char * self.separator_width


def load_config(**overrides: Any) -> LintConfig:
    """Build a config from ``GOLAYOUT_*`` environment variables plus explicit overrides.

    ``None`` overrides are ignored so CLI options can be passed through unconditionally.
    """
    values: dict[str, Any] = {}
    width = os.getenv("GOLAYOUT_SEPARATOR_WIDTH")
    if width:
        values["separator_width"] = width
    test_prefix = os.getenv("GOLAYOUT_TEST_PREFIX")
    if test_prefix:
        values["test_prefix"] = test_prefix
    values.update({k: v for k, v in overrides.items() if v is not None})
    return LintConfig.model_validate(values)
