"""
ID Generator Utility

Generates prefixed alphanumeric IDs for session entities.
Uses cryptographically secure random generation.
"""

import secrets
import string


def generate_id(prefix: str, length: int = 10) -> str:
    """
    Generate a prefixed alphanumeric ID.
    
    Args:
        prefix: The prefix for the ID (e.g., "CLM_")
        length: Length of the random part (default 10)
    
    Returns:
        A string like "CLM_7xK9mN2pQ4"
    
    Examples:
        >>> generate_id("CLM_")
        'CLM_7xK9mN2pQ4'
        >>> generate_id("CLM_", 12)
        'CLM_3fR8tY5wL1Km'
    """
    chars = string.ascii_letters + string.digits  # a-z, A-Z, 0-9 (62 chars)
    random_part = ''.join(secrets.choice(chars) for _ in range(length))
    return f"{prefix}{random_part}"


# Convenience function for claim ids
def generate_claim_id() -> str:
    return generate_id("CLM_")

