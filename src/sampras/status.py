"""
sampras.status
~~~~~~~~~~~~~~
Decision table for the ``meta.code`` of a result response.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

RESULT_READY_CODE   = 200
RESULT_PENDING_CODE = 5031


class ResultStatus(str, Enum):
    READY   = "ready"
    PENDING = "pending"
    FAILED  = "failed"


def meta_code(response: Any) -> Optional[int]:
    """Return ``response["meta"]["code"]`` or None when the shape is wrong."""
    if not isinstance(response, dict):
        return None
    meta = response.get("meta")
    if not isinstance(meta, dict):
        return None
    code = meta.get("code")
    # bool is an int subclass; True must not read as code 1
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code


def classify_result(response: Any) -> ResultStatus:
    """Map a result response onto READY, PENDING or FAILED."""
    code = meta_code(response)
    if code == RESULT_READY_CODE:
        return ResultStatus.READY
    if code == RESULT_PENDING_CODE:
        return ResultStatus.PENDING
    return ResultStatus.FAILED
