"""Terminal multiplexer adapters."""
