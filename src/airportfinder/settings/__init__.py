"""Settings: packaged defaults, user settings model and persistence."""
