"""Lifeline realtime clients: voice conversation relay and live stream upload."""

__version__ = "0.1.0"
