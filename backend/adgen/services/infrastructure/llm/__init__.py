"""LLM infrastructure - Gemini chat and media clients."""
