# app_builder/core/recovery.py
"""
Turn unreliable model output into a validated AppSpec.

Order, first success wins:
  1. a pre-parsed object from the model
  2. json.loads of the whole raw text
  3. json.loads of the first '{' .. last '}' span of the raw text
Then validate against AppSpec, reporting every failing field.
"""
import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from app_builder.core.errors import RecoveryFailure, SchemaViolation
from app_builder.core.llm_client import ModelOutput, ParsedOutput, RawOutput
from app_builder.models import AppSpec

# greedy: can swallow prose between two separate objects
_BRACES_RE = re.compile(r"(\{[\s\S]*\})")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON and cannot be echoed back in a response
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_json_output(text: Optional[str]) -> Optional[Any]:
    """Strict parse, then brace-span fallback. None when nothing parses."""
    if not text or not isinstance(text, str):
        return None
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        pass
    match = _BRACES_RE.search(text)
    if not match:
        return None
    try:
        return json.loads(match.group(1), parse_constant=_reject_constant)
    except ValueError:
        return None


def recover_candidate(output: ModelOutput) -> Any:
    if isinstance(output, ParsedOutput):
        value = output.value
        if isinstance(value, BaseModel):
            value = value.model_dump()
        return value
    if isinstance(output, RawOutput):
        candidate = parse_json_output(output.text)
        # falsy scalars (null, 0, false, "") carry no app
        if not candidate and not isinstance(candidate, (dict, list)):
            raise RecoveryFailure(output.text)
        return candidate
    raise TypeError(f"unsupported model output: {type(output).__name__}")


def _format_violations(err: ValidationError) -> List[Dict[str, Any]]:
    out = []
    for item in err.errors(include_url=False):
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        out.append({"loc": loc, "msg": item.get("msg", ""), "type": item.get("type", "")})
    return out


def validate_app_spec(candidate: Any) -> AppSpec:
    """Validate a recovered candidate; SchemaViolation lists every failing field."""
    try:
        return AppSpec.model_validate(candidate)
    except ValidationError as e:
        raise SchemaViolation(_format_violations(e), candidate) from e


def recover_app_spec(output: ModelOutput) -> AppSpec:
    return validate_app_spec(recover_candidate(output))
