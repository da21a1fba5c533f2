"""lahlah-os server — database bootstrap, pooled access and the HTTP front door.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
