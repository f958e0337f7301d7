"""
Shared utilities for Tandau.

Common functionality used across contexts:
- Logger setup and session event log
- LLM provider abstraction
- Timestamps
"""

from tandau.utils.timestamp import now, now_exact, session_stamp

__all__ = ["now", "now_exact", "session_stamp"]
