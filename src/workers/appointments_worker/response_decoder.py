"""
Mutation response decoder

Delete and update responses are either a JSON object
({"status": ..., "message": ...}) or plain text. Plain text is
treated as a successful reply carrying the text as its message.
"""

import json
from typing import Any, Literal, Optional, Union
from pydantic import BaseModel


class StructuredReply(BaseModel):
    """JSON object reply; succeeds only when status == "success" """

    kind: Literal["structured"] = "structured"
    status: Optional[str] = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


class TextReply(BaseModel):
    """Opaque text reply, always a success"""

    kind: Literal["text"] = "text"
    text: str

    @property
    def succeeded(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return self.text


MutationReply = Union[StructuredReply, TextReply]


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def decode_mutation_response(body: str) -> MutationReply:
    """
    Decode a delete/update response body

    Args:
        body: Raw response text

    Returns:
        StructuredReply when the body is a JSON object, TextReply otherwise
        (including JSON scalars and arrays)
    """
    try:
        parsed = json.loads(body)
    except ValueError:
        return TextReply(text=body)

    if not isinstance(parsed, dict):
        return TextReply(text=body)

    return StructuredReply(
        status=_as_text(parsed.get("status")),
        message=_as_text(parsed.get("message")),
    )
