"""
Tandau - career guidance assistant

A questionnaire feeds a conversational assistant whose free-form answers are
turned into structured career recommendations.

Architecture:
- Extraction Context: Parses assistant responses into recommendation records
- Session Context: Owns the current/previous records and persists them
- Guidance Context: Questionnaire, prompts, chat orchestration, results summary
"""

__version__ = "0.1.0"
