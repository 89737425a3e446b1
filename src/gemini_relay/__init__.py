"""
Gemini Relay package.

Provides:
- Pure request handlers for text generation and model listing
- Error normalization for upstream Gemini failures
- A persistent uvicorn server and a per-invocation ASGI function entry point
"""
