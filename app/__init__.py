"""Blog backend application package."""
