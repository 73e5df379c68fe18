"""Skip-trace identity resolution and phone validation pipeline."""
