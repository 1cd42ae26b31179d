"""
Local file storage for uploaded images.

Responsibilities:
- Validate uploads (size, extension, content type).
- Persist them under a configured root directory.
- Resolve stored file names back to readable paths.
"""
