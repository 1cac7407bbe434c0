"""
Output profile descriptors.

Static targets a draft can be shaped for, each with its own character budget.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from inkwise.state.schemas import DEFAULT_OUTPUT_PROFILE


@dataclass(frozen=True)
class OutputProfile:
    key: str
    label: str
    max_chars: int
    hint: str
    chunk_size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        if self.chunk_size is None:
            result.pop("chunk_size")
        return result


OUTPUT_PROFILES: Dict[str, OutputProfile] = {
    "linkedin": OutputProfile(
        key="linkedin",
        label="LinkedIn Post",
        max_chars=3000,
        hint="Short hook, whitespace, skimmable.",
    ),
    "xthread": OutputProfile(
        key="xthread",
        label="X / Twitter Thread",
        max_chars=25000,
        chunk_size=280,
        hint="Split into numbered posts (1/n).",
    ),
    "email": OutputProfile(
        key="email",
        label="Email",
        max_chars=20000,
        hint="Subject + body.",
    ),
    "memo": OutputProfile(
        key="memo",
        label="Memo",
        max_chars=20000,
        hint="Title, TL;DR, bullets, next steps.",
    ),
    "blog": OutputProfile(
        key="blog",
        label="Blog / Article",
        max_chars=100000,
        hint="Headings + longer paragraphs.",
    ),
    "custom": OutputProfile(
        key="custom",
        label="Custom",
        max_chars=20000,
        hint="Your rules.",
    ),
}


def get_profile(key: Any) -> OutputProfile:
    """Look up a profile, falling back to LinkedIn for unknown keys."""
    return OUTPUT_PROFILES.get(validate_output_profile(key))


def validate_output_profile(key: Any) -> str:
    return key if isinstance(key, str) and key in OUTPUT_PROFILES else DEFAULT_OUTPUT_PROFILE


def character_count(text: Optional[str]) -> int:
    return len(text or "")


def is_over_character_limit(text: Optional[str], profile_key: Any) -> bool:
    return character_count(text) > get_profile(profile_key).max_chars
