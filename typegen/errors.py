"""Exception hierarchy for the type generator."""

from __future__ import annotations


class TypeGenError(Exception):
    """Base class for all generator errors."""


class ReferenceResolutionError(TypeGenError):
    """A $ref could not be resolved inside the document."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Failed to resolve reference: {ref}")
        self.ref = ref


class UnsupportedDocumentError(TypeGenError):
    """The document carries neither an 'openapi' nor a 'swagger' marker."""


class SpecLoadError(TypeGenError):
    """The document could not be read, fetched or parsed."""


class ConfigError(TypeGenError):
    """Invalid or missing configuration."""


class MissingPathParameterError(TypeGenError):
    """A URL template still has placeholders after substitution."""

    def __init__(self, missing: list[str], provided: list[str]) -> None:
        super().__init__(
            "Missing required path parameters: "
            + ", ".join(missing)
            + ". Provided params: "
            + ", ".join(provided)
        )
        self.missing = missing
        self.provided = provided
