"""Calendar model, time helpers, diagnostics and the calendar registry."""
