"""Inkwise - turns an intent, claims and expressions into platform-ready drafts."""
