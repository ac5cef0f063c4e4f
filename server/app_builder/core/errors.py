# app_builder/core/errors.py
from typing import Any, Dict, List, Optional


class ExtractionError(RuntimeError):
    """Base for every failure of the extract pipeline."""
    status_code = 500
    error = "Server error"

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error}


class InvalidInput(ExtractionError):
    status_code = 400
    error = "Missing or invalid description"

    def __init__(self, message: str = "Missing or invalid description"):
        super().__init__(message)


class UpstreamError(ExtractionError):
    """The completion call itself failed (network, auth, quota...)."""

    def __init__(self, message: str, raw_response: Any = None):
        super().__init__(message)
        self.raw_response = raw_response

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error, "details": str(self), "raw_response": self.raw_response}


class RecoveryFailure(ExtractionError):
    """No JSON object could be recovered from the model output."""
    error = "Invalid AI response"

    def __init__(self, raw_text: Optional[str]):
        super().__init__("Failed to parse JSON from AI response")
        self.raw_text = raw_text

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error, "raw_response": self.raw_text}


class SchemaViolation(ExtractionError):
    """A JSON candidate was recovered but does not match the AppSpec schema."""
    error = "Invalid AI response"

    def __init__(self, violations: List[Dict[str, Any]], candidate: Any):
        super().__init__(f"{len(violations)} schema violation(s)")
        self.violations = violations
        self.candidate = candidate

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error, "violations": self.violations, "parsed": self.candidate}
