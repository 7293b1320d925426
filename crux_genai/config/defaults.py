"""crux_genai.config.defaults
=========================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or an external
configuration file, but provide sensible fallbacks for local development and
tests.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Service endpoint ----

# Model used when neither the caller nor the environment names one.
GENAI_DEFAULT_MODEL = "gemini-2.0-flash"
GENAI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
GENAI_DEFAULT_API_VERSION = "v1beta"

# Header carrying the API key on every request.
GENAI_API_KEY_HEADER = "x-goog-api-key"

# Client identification header value.
GENAI_CLIENT_HEADER = "crux-genai/0.1.0"

# Pool purposes for pooled HTTP clients.
HTTP_PURPOSE_GENERATE = "generate"
HTTP_PURPOSE_STREAM = "stream"
