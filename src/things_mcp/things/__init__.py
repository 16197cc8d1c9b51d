"""Things-side data: parsed records, output parsers, JSON payloads."""
