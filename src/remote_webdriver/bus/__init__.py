"""Transports that carry commands to the remote server."""
