#!/usr/bin/env python3
"""Upload a local recording to the stream backend in chunks.

Replays a file the way the live recorder does: one start handshake,
fixed-size chunks, then an end (or cancel) message.

Usage:
    python scripts/stream_upload.py recording.webm --user-id 42

    # Against a specific server
    python scripts/stream_upload.py recording.webm --user-id 42 --url http://localhost:3001

    # Empty cancelled session (no chunks)
    python scripts/stream_upload.py --user-id 42 --cancel
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import uuid
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lifeline.config import get_settings
from lifeline.exceptions import LifelineError
from lifeline.logging_config import setup_logging
from lifeline.services.stream import StreamUploadClient

DEFAULT_CHUNK_SIZE = 256 * 1024


def iter_chunks(path: Path, chunk_size: int):
    """Yield consecutive chunk_size slices of a file."""
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


async def upload(args: argparse.Namespace) -> int:
    location = None
    if args.lat is not None and args.lng is not None:
        location = {"lat": args.lat, "lng": args.lng}

    session_id = args.session_id or str(uuid.uuid4())
    client = StreamUploadClient(url=args.url)

    async with client:
        await client.start_session(args.user_id, session_id, location)
        print(f"Session {session_id} started on {client.url}")

        if args.cancel:
            result = await client.end_session(cancelled=True)
            print(f"Session cancelled: {result}")
            return 0

        count = 0
        for chunk in iter_chunks(args.file, args.chunk_size):
            await client.upload_chunk(chunk)
            count += 1
            print(f"  chunk {count} ({len(chunk)} bytes)")

        result = await client.end_session()
        print(f"Session ended after {count} chunks: {result}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Upload a recording in stream chunks")
    parser.add_argument("file", type=Path, nargs="?", help="Recording to upload")
    parser.add_argument("--user-id", type=int, required=True, help="Owner user ID")
    parser.add_argument("--session-id", help="Session ID (random UUID if omitted)")
    parser.add_argument("--url", help="Upload server URL (derived from settings if omitted)")
    parser.add_argument("--lat", type=float, help="Latitude of the recording")
    parser.add_argument("--lng", type=float, help="Longitude of the recording")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes per chunk (default {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--cancel",
        action="store_true",
        help="Start and immediately cancel the session without uploading",
    )

    args = parser.parse_args()

    if not args.cancel and (args.file is None or not args.file.is_file()):
        print(f"Recording not found: {args.file}")
        sys.exit(1)

    setup_logging(level=get_settings().log_level, enable_file=False)

    try:
        sys.exit(asyncio.run(upload(args)))
    except LifelineError as e:
        print(f"Upload failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
