"""
Sentient prototype proxy package.

Provides:
- Thin async adapters for hosted LLM and speech providers (Groq, OpenAI, Anthropic, ElevenLabs)
- A FastAPI app exposing the route handlers used by the prototype front-ends
"""

__version__ = "0.1.0"
