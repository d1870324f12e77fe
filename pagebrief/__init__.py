"""
PageBrief - multi-provider page summarization.

Extracted page content is summarized by an on-device model or one of
several remote LLM APIs, with fallback between providers and per-provider
timing metrics that drive progress estimates.
"""

__version__ = "1.0.0"
