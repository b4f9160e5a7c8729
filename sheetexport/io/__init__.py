"""Byte-level output (serializers) and configuration loading."""
