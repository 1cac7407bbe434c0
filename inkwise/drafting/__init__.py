"""
Drafting - turns a canonical session into publishable text.

Pipeline:
1. compose_base (composer) → platform-agnostic base draft
2. format_for_profile (formatter) → profile-shaped output
   (xthread uses split_into_thread)
"""

from inkwise.drafting.composer import compose_base
from inkwise.drafting.formatter import build_draft, format_for_profile
from inkwise.drafting.profiles import OUTPUT_PROFILES, OutputProfile
from inkwise.drafting.thread_splitter import split_into_thread

__all__ = [
    "compose_base",
    "build_draft",
    "format_for_profile",
    "OUTPUT_PROFILES",
    "OutputProfile",
    "split_into_thread",
]
