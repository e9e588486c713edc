"""Wire models for the streaming ``/generate`` endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class GenerateRequest(BaseModel):
    """Request body sent to the text-generation backend.

    Attributes:
        model: Model name understood by the backend (e.g. ``"llama2"``).
        prompt: Full prompt text.
        stream: Ask the backend for newline-delimited streaming output.
    """

    model: str
    prompt: str
    stream: bool = True


class ResponseFragment(BaseModel):
    """One decoded line of the streamed response.

    Only ``response`` and ``done`` are read from the envelope; telemetry
    fields such as ``created_at`` or ``eval_count`` are ignored.

    Attributes:
        model_text: Text emitted by the model on this line (may be empty).
        is_final: ``True`` on the line that completes the response.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    model_text: StrictStr = Field(alias="response")
    is_final: StrictBool = Field(alias="done")
