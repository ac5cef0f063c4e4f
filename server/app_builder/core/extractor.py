# app_builder/core/extractor.py
"""
Extraction service
- Exposes:
    Extractor(client, settings).extract(description) -> AppSpec
- One description in, one completion call out, no retries.
- Failures are logged (and written as JSON debug records) before being
  re-raised for the API layer to turn into responses.
"""
import logging
from typing import Any

from app_builder.core.config import Settings
from app_builder.core.errors import InvalidInput, RecoveryFailure, SchemaViolation, UpstreamError
from app_builder.core.llm_client import CompletionClient, ParsedOutput, save_debug_log
from app_builder.core.prompts import build_system_prompt, truncate_description
from app_builder.core.recovery import recover_candidate, validate_app_spec
from app_builder.models import AppSpec

logger = logging.getLogger(__name__)


class Extractor:
    def __init__(self, client: CompletionClient, settings: Settings):
        self.client = client
        self.settings = settings

    def extract(self, description: Any) -> AppSpec:
        if not description or not isinstance(description, str):
            raise InvalidInput()
        short_desc = truncate_description(description, self.settings.max_description_chars)

        try:
            output = self.client.complete(build_system_prompt(), short_desc, self.settings.max_output_tokens)
        except Exception as e:
            err = e if isinstance(e, UpstreamError) else UpstreamError(str(e) or e.__class__.__name__)
            logger.exception("Completion call failed: %s", err)
            save_debug_log(self.settings.log_dir, "upstream_error", {
                "input": short_desc, "error": str(err), "raw_response": err.raw_response,
            })
            if err is e:
                raise
            raise err from e
        logger.info("LLM returned %s output", "parsed" if isinstance(output, ParsedOutput) else "raw")

        try:
            candidate = recover_candidate(output)
        except RecoveryFailure as e:
            logger.error("Failed to parse JSON from AI response: %r", (e.raw_text or "")[:2000])
            save_debug_log(self.settings.log_dir, "recovery_failure", {"input": short_desc, "raw_text": e.raw_text})
            raise

        try:
            return validate_app_spec(candidate)
        except SchemaViolation as e:
            logger.error("Schema validation error: %s", e.violations)
            save_debug_log(self.settings.log_dir, "schema_violation", {
                "input": short_desc, "violations": e.violations, "parsed": e.candidate,
            })
            raise
