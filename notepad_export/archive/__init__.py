"""Stored ZIP archive writing and CRC-32."""
