"""Live stream upload over Socket.IO.

- StreamUploadClient: start/chunk/end request-acknowledgement exchanges
- resolve_stream_url: upload endpoint from the client's own origin
"""

from lifeline.services.stream.protocol import StreamEvent, StreamSession
from lifeline.services.stream.socket_client import StreamUploadClient, resolve_stream_url

__all__ = [
    "StreamUploadClient",
    "resolve_stream_url",
    "StreamEvent",
    "StreamSession",
]
