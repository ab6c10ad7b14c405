"""HTTP API for zwcodec conversions."""
