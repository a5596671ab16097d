"""Match event timeline and score reconstruction engine."""
