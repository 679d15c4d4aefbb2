"""Student records admin: MongoDB-backed student and program enrollments."""

__version__ = "1.0.0"
