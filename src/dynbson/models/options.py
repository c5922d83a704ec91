"""Codec options.

Options are pydantic models so that plain mappings coming from host
configuration are validated the same way as explicitly constructed objects.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

ArrayType = Literal["list", "dict"]
DocumentType = Literal["dict", "namespace"]


class _Options(BaseModel):
    model_config = ConfigDict(
        # Options are shared between calls, never mutated
        frozen=True,
        extra="forbid",
        strict=False,
    )


class EncoderOptions(_Options):
    """Options consulted by the value-to-document converter.

    Attributes:
        max_depth: Maximum container nesting depth below the root document.
            None (the default) imposes no limit. Callers encoding untrusted
            input should set one.

    Example:
        >>> options = EncoderOptions(max_depth=32)
        >>> data = encode(value, options)
    """

    max_depth: Optional[int] = Field(default=None, ge=0)


class DecoderOptions(_Options):
    """Options consulted by the document-to-value converter.

    These play the role of a host type map: they pick the Python shape that
    BSON arrays, embedded documents and the root document are returned as.

    Attributes:
        array_type: "list" (default), or "dict" keyed by int 0..n-1
        document_type: "dict" (default), or "namespace" for SimpleNamespace
        root_type: Same choices as document_type, for the top-level document
        numeric_keys: Return decimal-string document keys as int keys
    """

    array_type: ArrayType = "list"
    document_type: DocumentType = "dict"
    root_type: DocumentType = "dict"
    numeric_keys: bool = False


OptionsT = TypeVar("OptionsT", bound=_Options)


def coerce_options(
    options_class: Type[OptionsT], options: Union[OptionsT, Mapping[str, Any], None]
) -> OptionsT:
    """Return options as an instance of options_class.

    Accepts an instance, a mapping of field values, or None for defaults.

    Raises:
        pydantic.ValidationError: If a mapping holds invalid values
    """
    if options is None:
        return options_class()
    if isinstance(options, options_class):
        return options
    return options_class.model_validate(dict(options))
