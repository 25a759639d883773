"""bedrock_providers.config.defaults
=================================

Central place for small, stable default values used across the package.
These can be overridden via environment variables or an external config
file but provide sensible fallbacks for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package to avoid circular imports.
"""

from __future__ import annotations

# ---- Provider selection ----
# Provider used when a caller does not name one explicitly.
DEFAULT_PROVIDER = "bedrock"

# Display names surfaced to model/provider pickers.
PROVIDER_DISPLAY_NAMES = {
    "bedrock": "Claude (AWS Bedrock)",
    "mock": "Mock (offline)",
}

# ---- AWS Bedrock ----
BEDROCK_DEFAULT_REGION = "us-east-1"
BEDROCK_DEFAULT_MODEL = "us.anthropic.claude-sonnet-4-20250514-v1:0"
BEDROCK_DEFAULT_TITLE_MODEL = "us.anthropic.claude-3-5-haiku-20241022-v1:0"
# SigV4 service name used when signing runtime requests.
BEDROCK_SIGNING_SERVICE = "bedrock"
BEDROCK_ENDPOINT_TEMPLATE = "https://bedrock-runtime.{region}.amazonaws.com"
BEDROCK_STREAM_ACTION = "invoke-with-response-stream"
BEDROCK_INVOKE_ACTION = "invoke"

# Anthropic messages-on-Bedrock request schema version.
ANTHROPIC_BEDROCK_VERSION = "bedrock-2023-05-31"

# ---- Sampling ----
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

# ---- Titles ----
TITLE_MAX_TOKENS = 50
TITLE_MAX_CHARS = 50
TITLE_TRUNCATE_AT = 47
TITLE_SYSTEM_PROMPT = (
    "Generate a concise, descriptive title (max 50 characters) for a chat that "
    "starts with the following message. Respond with only the title, no quotes "
    "or extra formatting."
)
UNTITLED = "Untitled"

# ---- Relay ----
# Text substituted into the output when a stream fails.
ERROR_FALLBACK_TEXT = "Error: Unable to generate response."


__all__ = [
    "DEFAULT_PROVIDER",
    "PROVIDER_DISPLAY_NAMES",
    "BEDROCK_DEFAULT_REGION",
    "BEDROCK_DEFAULT_MODEL",
    "BEDROCK_DEFAULT_TITLE_MODEL",
    "BEDROCK_SIGNING_SERVICE",
    "BEDROCK_ENDPOINT_TEMPLATE",
    "BEDROCK_STREAM_ACTION",
    "BEDROCK_INVOKE_ACTION",
    "ANTHROPIC_BEDROCK_VERSION",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "TITLE_MAX_TOKENS",
    "TITLE_MAX_CHARS",
    "TITLE_TRUNCATE_AT",
    "TITLE_SYSTEM_PROMPT",
    "UNTITLED",
    "ERROR_FALLBACK_TEXT",
]
