"""ID generators."""

import uuid


def generate_task_id() -> str:
    """Generate a collision-resistant random task identifier (UUID4).

    Returns:
        Canonical 36-character UUID string.
    """
    return str(uuid.uuid4())
