"""Request builders and helpers layered on top of :class:`~gemini_client.client.GeminiClient`."""
