"""Prefixed unique id generation"""
import uuid


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique id such as "sess-0f8c...".

    Args:
        prefix: String prepended to the UUID

    Returns:
        str: prefix + random UUID4
    """
    return f"{prefix}{uuid.uuid4()}"
