"""ContextPack - token-bounded document context for AI requests."""

__version__ = "0.1.0"
