"""Infrastructure layer: SQLite storage and security primitives."""
