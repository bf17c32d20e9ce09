"""Infrastructure layer: note parsing, body rendering, and file I/O.

Depends on the domain layer. Never imports from services or commands.
"""
