# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resource Transformer error codes and exception classes.

Every error raised by the engine itself carries a machine-readable code,
a human-readable message, structured details and a remediation hint.

Error Dict Schema:
```json
{
  "error": {
    "code": "RESOLVER_NOT_FOUND",
    "message": "A method called 'include_author' could not be found in 'BookTransformer'",
    "details": {"transformer": "BookTransformer", "resolver": "include_author", "include": "author"},
    "suggestion": "Add the include_<name> method or map the include in include_resolvers"
  }
}
```

Errors raised by resolvers, transform methods or eager loaders are NOT
wrapped: they propagate to the caller unmodified.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TransformerErrorCode(str, Enum):
    """Standard transformer error codes."""

    # Transformer authoring defects
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    TRANSFORM_NOT_IMPLEMENTED = "TRANSFORM_NOT_IMPLEMENTED"
    RESOLVER_NOT_FOUND = "RESOLVER_NOT_FOUND"
    VARIANT_NOT_FOUND = "VARIANT_NOT_FOUND"
    TRANSFORMER_NOT_FOUND = "TRANSFORMER_NOT_FOUND"
    INVALID_TRANSFORMER = "INVALID_TRANSFORMER"
    INVALID_TRANSFORM_OUTPUT = "INVALID_TRANSFORM_OUTPUT"

    # Request shape
    INVALID_INCLUDE = "INVALID_INCLUDE"
    INCLUDE_DEPTH_EXCEEDED = "INCLUDE_DEPTH_EXCEEDED"


ERROR_CODE_SUGGESTIONS: dict[TransformerErrorCode, str] = {
    TransformerErrorCode.CONFIGURATION_ERROR: "Review the transformer definition",
    TransformerErrorCode.TRANSFORM_NOT_IMPLEMENTED: "Implement transform() or pass a variant when transforming",
    TransformerErrorCode.RESOLVER_NOT_FOUND: "Add the include_<name> method or map the include in include_resolvers",
    TransformerErrorCode.VARIANT_NOT_FOUND: "Add a transform_<variant> method or drop the variant",
    TransformerErrorCode.TRANSFORMER_NOT_FOUND: "Register the transformer with register_transformer() before referencing it by name",
    TransformerErrorCode.INVALID_TRANSFORMER: "Pass a TransformerAbstract subclass, instance, registered name or callable",
    TransformerErrorCode.INVALID_TRANSFORM_OUTPUT: "Return a mapping from transform() when the transformer declares includes",
    TransformerErrorCode.INVALID_INCLUDE: "Use dot-separated include paths without empty segments, e.g. 'books.author'",
    TransformerErrorCode.INCLUDE_DEPTH_EXCEEDED: "Check for self-referencing default includes or raise max_include_depth",
}


class TransformerErrorDetail(BaseModel):
    """Serializable error body."""

    code: str = Field(
        ...,
        description="Machine-readable error code (e.g., 'RESOLVER_NOT_FOUND')",
        examples=["RESOLVER_NOT_FOUND", "INCLUDE_DEPTH_EXCEEDED"],
    )
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional context for debugging")
    suggestion: str | None = Field(None, description="Remediation hint")


class TransformerError(Exception):
    """Base exception for errors raised by the transformer engine.

    Usage:
        raise TransformerError(
            code=TransformerErrorCode.INVALID_INCLUDE,
            message="Include path 'a..b' has an empty segment",
            details={"include": "a..b"},
        )
    """

    default_code = TransformerErrorCode.CONFIGURATION_ERROR

    def __init__(
        self,
        message: str,
        code: TransformerErrorCode | str | None = None,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        if code is None:
            code = self.default_code
        self.code = code if isinstance(code, TransformerErrorCode) else TransformerErrorCode(code)
        self.message = message
        self.details = details
        self.suggestion = suggestion or ERROR_CODE_SUGGESTIONS.get(self.code)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict with a single 'error' key."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "suggestion": self.suggestion,
            }
        }

    def to_detail(self) -> TransformerErrorDetail:
        """Convert to the Pydantic error model."""
        return TransformerErrorDetail(
            code=self.code.value,
            message=self.message,
            details=self.details,
            suggestion=self.suggestion,
        )


# =============================================================================
# Configuration errors (transformer authoring defects, always fatal)
# =============================================================================


class ConfigurationError(TransformerError):
    """Raised when a transformer is defined or referenced incorrectly."""

    default_code = TransformerErrorCode.CONFIGURATION_ERROR


class TransformNotImplementedError(ConfigurationError):
    """Raised when a transformer does not override transform()."""

    default_code = TransformerErrorCode.TRANSFORM_NOT_IMPLEMENTED

    def __init__(self, transformer_name: str):
        super().__init__(
            f"You have to implement the method transform in '{transformer_name}' "
            "or specify a variant when calling the transformer",
            details={"transformer": transformer_name},
        )
        self.transformer_name = transformer_name


class ResolverNotFoundError(ConfigurationError):
    """Raised when an include has no matching resolver method."""

    default_code = TransformerErrorCode.RESOLVER_NOT_FOUND

    def __init__(self, transformer_name: str, resolver_name: str, include: str):
        super().__init__(
            f"A method called '{resolver_name}' could not be found in '{transformer_name}'",
            details={
                "transformer": transformer_name,
                "resolver": resolver_name,
                "include": include,
            },
        )
        self.transformer_name = transformer_name
        self.resolver_name = resolver_name
        self.include = include


class VariantNotFoundError(ConfigurationError):
    """Raised when a requested transform variant does not exist."""

    default_code = TransformerErrorCode.VARIANT_NOT_FOUND

    def __init__(self, transformer_name: str, variant: str, method_name: str):
        super().__init__(
            f"A variant method called '{method_name}' could not be found in '{transformer_name}'",
            details={
                "transformer": transformer_name,
                "variant": variant,
                "method": method_name,
            },
        )
        self.transformer_name = transformer_name
        self.variant = variant


class TransformerNotFoundError(ConfigurationError):
    """Raised when a transformer is referenced by an unregistered name."""

    default_code = TransformerErrorCode.TRANSFORMER_NOT_FOUND

    def __init__(self, name: str, registered: list[str] | None = None):
        details: dict[str, Any] = {"name": name}
        if registered:
            details["registered"] = registered
        super().__init__(f"Transformer '{name}' is not registered", details=details)
        self.name = name


class InvalidTransformerError(ConfigurationError):
    """Raised when a transformer reference cannot be used."""

    default_code = TransformerErrorCode.INVALID_TRANSFORMER

    def __init__(self, reference: Any):
        super().__init__(
            f"'{reference!r}' is not a usable transformer",
            details={"reference": repr(reference)},
        )


class InvalidTransformOutputError(ConfigurationError):
    """Raised when transform() output cannot be extended with includes."""

    default_code = TransformerErrorCode.INVALID_TRANSFORM_OUTPUT

    def __init__(self, transformer_name: str, output_type: str):
        super().__init__(
            f"'{transformer_name}.transform' returned '{output_type}', expected a mapping",
            details={"transformer": transformer_name, "output_type": output_type},
        )


# =============================================================================
# Request errors
# =============================================================================


class InvalidIncludeError(TransformerError):
    """Raised when a requested include path is malformed."""

    default_code = TransformerErrorCode.INVALID_INCLUDE

    def __init__(self, include: str):
        super().__init__(
            f"Include path '{include}' has an empty segment",
            details={"include": include},
        )
        self.include = include


class IncludeDepthExceededError(TransformerError):
    """Raised when include expansion nests deeper than max_include_depth."""

    default_code = TransformerErrorCode.INCLUDE_DEPTH_EXCEEDED

    def __init__(self, path: str, max_depth: int):
        super().__init__(
            f"Include path '{path}' exceeds the maximum depth of {max_depth}",
            details={"path": path, "max_depth": max_depth},
        )
        self.path = path
        self.max_depth = max_depth
