"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

@dataclass
class Completion:
    """Text completion returned by a provider adapter."""
    text: str
    model: str
    latency_ms: int
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


class _Payload(BaseModel):
    # Front-ends post camelCase keys; accept snake_case too.
    model_config = ConfigDict(populate_by_name=True)


# Voice chatbot

class TranscriptIn(_Payload):
    transcript: str = Field(min_length=1)

class InputIn(_Payload):
    input: str = Field(min_length=1)

class ResponseOut(_Payload):
    response: str

class SpeechIn(_Payload):
    text: str = Field(min_length=1)
    voice_type: Literal["male", "female"] = Field(default="male", alias="voiceType")

class SpeechOut(_Payload):
    audio_base64: str = Field(alias="audioBase64")
    voice_type: str = Field(alias="voiceType")
    voice_id: str = Field(alias="voiceId")

class VoicesOut(_Payload):
    success: bool = True
    voices: list[dict[str, Any]]


# Creative writer

class GenerateTextIn(_Payload):
    prompt: str = Field(min_length=1)
    text: str = Field(min_length=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, alias="maxTokens", gt=0)

class GroqCompletionIn(_Payload):
    text: str = Field(min_length=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    model: str | None = None
    max_tokens: int | None = Field(default=None, alias="maxTokens", gt=0)
    custom_instructions: str | None = Field(default=None, alias="customInstructions")

class ResultOut(_Payload):
    result: str

class CompletionIn(_Payload):
    text: str = Field(max_length=10000)
    prompt: str = Field(min_length=1, max_length=1000)
    model: Literal["gpt-3.5-turbo", "gpt-4"] = "gpt-3.5-turbo"


# Code editor

class ChatMessage(_Payload):
    role: Literal["system", "user", "assistant"]
    content: str

class ChatIn(_Payload):
    messages: list[ChatMessage] = Field(min_length=1)

class CodeGenerateIn(_Payload):
    prompt: str = Field(min_length=1)
    language: str = "plaintext"
    current_code: str = Field(default="", alias="currentCode")


# Flowchart generator / image collector

class EnhancedPromptOut(_Payload):
    enhanced_prompt: str = Field(alias="enhancedPrompt")

class FlowchartOut(_Payload):
    mermaid_code: str = Field(alias="mermaidCode")

class MermaidIn(_Payload):
    code: str = Field(min_length=1)

class MermaidFixOut(_Payload):
    fixed_code: str = Field(alias="fixedCode")
    was_fixed: bool = Field(alias="wasFixed")
    message: str

class ImageIn(_Payload):
    prompt: str = Field(min_length=1, description="Image as a base64 data URL")


# Environment checks

class EnvStatusOut(_Payload):
    is_ready: bool = Field(alias="isReady")

class VoiceEnvOut(_Payload):
    success: bool = True
    has_eleven_labs_key: bool = Field(alias="hasElevenLabsKey")
    key_length: int = Field(alias="keyLength")
