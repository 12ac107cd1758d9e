"""canopy: build a project's website from its metadata and release history."""

__version__ = "0.3.0"
