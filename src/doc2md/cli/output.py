"""JSON output helpers for the doc2md CLI.

Every command prints exactly one response-v2 envelope: success envelopes
go to stdout, error envelopes go to stderr followed by exit status 1.
"""

import json
import sys
from typing import Any, Mapping, NoReturn, Sequence

from doc2md.cli.logging import generate_request_id, get_request_id
from doc2md.core.responses import ToolResponse, success_response


def _request_id() -> str:
    return get_request_id() or generate_request_id()


def emit(data: Any, *, err: bool = False) -> None:
    """Emit minified JSON to stdout (or stderr with ``err=True``)."""
    print(
        json.dumps(data, separators=(",", ":"), default=str),
        file=sys.stderr if err else sys.stdout,
    )


def emit_failure(response: ToolResponse) -> NoReturn:
    """Emit an error envelope to stderr and exit with code 1.

    Build ``response`` with the helpers of ``doc2md.core.responses``
    (``not_found_error``, ``validation_error``, ...).

    Raises:
        SystemExit: Always exits with code 1.
    """
    response.meta.setdefault("request_id", _request_id())
    emit(response.to_dict(), err=True)
    sys.exit(1)


def emit_success(
    data: Any,
    *,
    warnings: Sequence[str] | None = None,
    telemetry: Mapping[str, Any] | None = None,
    meta: Mapping[str, Any] | None = None,
) -> None:
    """Emit success response envelope to stdout.

    Non-dict data is wrapped under a ``result`` key.
    """
    payload = data if isinstance(data, dict) else {"result": data}
    response = success_response(
        data=payload,
        warnings=warnings,
        telemetry=telemetry,
        meta=meta,
        request_id=_request_id(),
    )
    emit(response.to_dict())
