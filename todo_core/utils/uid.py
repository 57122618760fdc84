"""UUID generation utilities.

All user and todo ids are UUID v4 strings. This is the ONLY module that
should import uuid4; other code calls uid.generate_uuid().
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
