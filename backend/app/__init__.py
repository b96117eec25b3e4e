"""Caption generator backend, laid out in Clean Architecture layers.

Layers:
- domain: caption prompt, use case, text-generation port and errors
- data: provider clients (Gemini REST, OpenAI REST, OpenAI SDK) and the port implementation
- presentation: FastAPI app and the caption router
- core: configuration, DI, and logging
"""
