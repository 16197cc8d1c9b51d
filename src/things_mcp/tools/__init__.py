"""Tool framework for Things.

Provides the tool protocol, the schema-driven handler, the registry,
and the concrete handlers that drive Things through AppleScript and
the things:/// URL scheme.
"""
