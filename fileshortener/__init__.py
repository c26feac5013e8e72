"""File-backed URL shortener: durable shortcode -> URL mappings in a single JSON document."""

__version__ = '1.0.0'
