"""AWS Bedrock provider: SigV4 request building, event-stream decoding and
the streaming provider façade."""

from .client import BedrockProvider
from .event_stream import Frame, FrameDecoder, FrameHeaders, encode_frame, parse_headers
from .events import Ignorable, TerminalMarker, TextDelta, interpret
from .request_builder import InvocationPayload, SignedRequest, build_payload, build_signed_request
from .transport import ByteCursor, open_cursor

__all__ = [
    "BedrockProvider",
    "Frame",
    "FrameDecoder",
    "FrameHeaders",
    "encode_frame",
    "parse_headers",
    "TextDelta",
    "Ignorable",
    "TerminalMarker",
    "interpret",
    "InvocationPayload",
    "SignedRequest",
    "build_payload",
    "build_signed_request",
    "ByteCursor",
    "open_cursor",
]
