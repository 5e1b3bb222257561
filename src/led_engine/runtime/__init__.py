"""Runtime services shared by every layer (logging, events, spans)."""
