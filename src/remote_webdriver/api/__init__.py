"""Session and entity handles."""
