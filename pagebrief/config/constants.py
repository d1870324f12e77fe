"""
Shared constants for PageBrief.
"""

# Model used when neither the caller nor the stored preference picks one
DEFAULT_MODEL_ID = "chrome-builtin"

DEFAULT_LANGUAGE = "en"
DEFAULT_SUMMARY_LENGTH = "medium"

# Remote providers never receive more than this many characters of page content
MAX_CONTENT_CHARS = 12000

# Seed for progress estimates before a provider has any recorded runs
DEFAULT_ESTIMATE_SECONDS = 5.0

# Lowest runtime version that ships the on-device summarizer
MIN_LOCAL_RUNTIME_VERSION = 138

HISTORY_LIMIT = 50

# Reported as the used provider when every attempt failed
NO_PROVIDER = "none"

UNABLE_TO_SUMMARIZE = (
    "Sorry, we were unable to summarize this page. "
    "Check your model settings and API keys, then try again."
)

OPENAI_ORIGIN = "https://api.openai.com/*"
GEMINI_ORIGIN = "https://generativelanguage.googleapis.com/*"
ANTHROPIC_ORIGIN = "https://api.anthropic.com/*"

DEFAULT_HTTP_TIMEOUT = 60.0

# Storage keys (kept compatible with the browser extension's storage layout)
METRICS_KEY = "modelMetrics"
HISTORY_KEY = "summaryHistory"
SELECTED_MODEL_KEY = "selectedModel"
ENABLE_FALLBACK_KEY = "enableFallback"
LANGUAGE_KEY = "language"
SUMMARY_LENGTH_KEY = "summaryLength"
