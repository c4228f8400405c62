"""Validation of raw API envelopes into typed payloads.

A response the client cannot use (``status: false``, missing data, wrong
shape) is a remote failure just like a transport error, so it raises
``RemoteFailureError`` and the resolver falls back to the snapshot.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from cms_client.application.schemas import ApiEnvelope, PageData
from cms_client.domain.exceptions import RemoteFailureError

ModelT = TypeVar("ModelT", bound=BaseModel)


def unwrap(raw: Any, model: type[ModelT] | None, *, required: bool = True) -> ModelT | None:
    """Return the ``data`` member of an envelope, validated as ``model``.

    ``model=None`` accepts any payload (used for deletions). An empty body
    is only acceptable when ``required`` is False.
    """
    if raw is None and not required:
        return None
    envelope_type = ApiEnvelope[model] if model is not None else ApiEnvelope[Any]
    try:
        envelope = envelope_type.model_validate(raw)
    except ValidationError as exc:
        raise RemoteFailureError(None, f"Malformed response: {exc.error_count()} error(s)") from exc

    if not envelope.status:
        raise RemoteFailureError(None, envelope.message or "Request was not successful")
    if envelope.data is None and required:
        raise RemoteFailureError(None, "Response carried no data")
    return envelope.data


def unwrap_page(raw: Any, model: type[ModelT]) -> PageData[ModelT]:
    return unwrap(raw, PageData[model])
