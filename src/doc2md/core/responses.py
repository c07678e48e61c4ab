"""
Standard response contracts for doc2md operations.
Every command reports its outcome with the same envelope.

Response Schema Contract
========================

    {
        "success": bool,       # Required: operation success/failure
        "data": {...},         # Required: primary payload (empty dict on error)
        "error": str | null,   # Required: error message or null on success
        "meta": {              # Required: response metadata
            "version": "response-v2",
            "request_id": "run_abc123"?,
            "warnings": ["..."]?,
            "telemetry": { ... }?
        }
    }

Key Principle:
    - `success=True` means the operation executed correctly (even if a file
      had no doc comments).
    - `success=False` means the operation failed; `data` carries
      `error_code`, `error_type` and a `remediation` hint.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from doc2md.core.context import get_correlation_id

RESPONSE_VERSION = "response-v2"


class ErrorCode(str, Enum):
    """Machine-readable error codes for command responses."""

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Resource
    NOT_FOUND = "NOT_FOUND"
    NO_MATCHES_FOUND = "NO_MATCHES_FOUND"

    # System
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories for routing and client-side handling."""

    VALIDATION = "validation"  # No retry, fix input
    NOT_FOUND = "not_found"  # No retry
    INTERNAL = "internal"  # Retry may help


@dataclass
class ToolResponse:
    """
    Standard response structure for doc2md operations.

    Attributes:
        success: Whether the operation completed successfully
        data: The primary payload (operation-specific structured data)
        error: Error message if success is False, None otherwise
        meta: Response metadata including version identifier
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": RESPONSE_VERSION})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _build_meta(
    *,
    request_id: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Construct a metadata payload that always includes the response version.

    The request id defaults to the current correlation id.
    """
    meta: Dict[str, Any] = {"version": RESPONSE_VERSION}

    effective_request_id = request_id
    if effective_request_id is None:
        effective_request_id = get_correlation_id() or None

    if effective_request_id:
        meta["request_id"] = effective_request_id
    if warnings:
        meta["warnings"] = list(warnings)
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(dict(extra))

    return meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> ToolResponse:
    """Create a standardized success response.

    Args:
        data: Optional mapping used as the base payload.
        warnings: Non-fatal issues to surface in ``meta.warnings``.
        telemetry: Timing/performance metadata.
        request_id: Correlation identifier propagated through logs.
        meta: Arbitrary extra metadata to merge into ``meta``.
        **fields: Additional payload fields (shorthand for ``data.update``).
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))
    if fields:
        payload.update(fields)

    meta_payload = _build_meta(
        request_id=request_id,
        warnings=warnings,
        telemetry=telemetry,
        extra=meta,
    )
    return ToolResponse(success=True, data=payload, error=None, meta=meta_payload)


def error_response(
    message: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    error_code: Optional[Union[ErrorCode, str]] = None,
    error_type: Optional[Union[ErrorType, str]] = None,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized error response.

    Args:
        message: Human-readable description of the failure.
        data: Optional mapping with additional machine-readable context.
        error_code: Canonical error code (``ErrorCode`` or string).
        error_type: Error category (``ErrorType`` or string).
        remediation: User-facing guidance on how to fix the issue.
        details: Nested structure describing the failure.
        request_id: Correlation identifier propagated through logs.
        telemetry: Timing metadata captured before failure.

    Example:
        >>> error_response(
        ...     "Unknown flavor 'rdoc'",
        ...     error_code=ErrorCode.VALIDATION_ERROR,
        ...     error_type=ErrorType.VALIDATION,
        ...     remediation="Use one of: javadoc, jsdoc, phpdoc",
        ... )
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))

    effective_error_code = error_code if error_code is not None else ErrorCode.INTERNAL_ERROR
    effective_error_type = error_type if error_type is not None else ErrorType.INTERNAL

    payload.setdefault(
        "error_code",
        effective_error_code.value
        if isinstance(effective_error_code, Enum)
        else effective_error_code,
    )
    payload.setdefault(
        "error_type",
        effective_error_type.value
        if isinstance(effective_error_type, Enum)
        else effective_error_type,
    )
    if remediation is not None:
        payload.setdefault("remediation", remediation)
    if details:
        payload.setdefault("details", dict(details))

    meta_payload = _build_meta(request_id=request_id, telemetry=telemetry)
    return ToolResponse(success=False, data=payload, error=message, meta=meta_payload)


# ---------------------------------------------------------------------------
# Specialized Error Helpers
# ---------------------------------------------------------------------------


def validation_error(
    message: str,
    *,
    field: Optional[str] = None,
    remediation: Optional[str] = None,
) -> ToolResponse:
    """Create a validation error response (bad option or argument)."""
    return error_response(
        message,
        error_code=ErrorCode.VALIDATION_ERROR,
        error_type=ErrorType.VALIDATION,
        details={"field": field} if field else None,
        remediation=remediation,
    )


def not_found_error(
    resource_type: str,
    resource_id: str,
    *,
    remediation: Optional[str] = None,
) -> ToolResponse:
    """Create a not found error response.

    Example:
        >>> not_found_error("File", "src/Main.java")
    """
    return error_response(
        f"{resource_type} '{resource_id}' not found",
        error_code=ErrorCode.NOT_FOUND,
        error_type=ErrorType.NOT_FOUND,
        data={"resource_type": resource_type, "resource_id": resource_id},
        remediation=remediation or f"Verify the {resource_type.lower()} path exists.",
    )


def no_matches_error(
    pattern: str,
    scope: str,
    *,
    remediation: Optional[str] = None,
) -> ToolResponse:
    """Create an error response for a file pattern with no matches."""
    return error_response(
        f"No matches found for pattern '{pattern}' in {scope}",
        error_code=ErrorCode.NO_MATCHES_FOUND,
        error_type=ErrorType.NOT_FOUND,
        data={"pattern": pattern, "scope": scope},
        remediation=remediation or "Check the source directory and the file extension.",
    )


def internal_error(
    message: str = "An internal error occurred",
    *,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create an internal error response."""
    remediation = "Re-run with --log-level DEBUG for details."
    effective_request_id = request_id or get_correlation_id()
    if effective_request_id:
        remediation += f" Reference: {effective_request_id}"

    return error_response(
        message,
        error_code=ErrorCode.INTERNAL_ERROR,
        error_type=ErrorType.INTERNAL,
        remediation=remediation,
        request_id=request_id,
    )
