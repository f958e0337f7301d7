"""
Career plan session state.

CareerPlanSession is the single owner of a user's in-progress career plan:
questionnaire answers, chat history, and the current and previous
recommendation records. Parsing stays in the extraction context; this class
only decides what is kept and what is written to the store.

Write policy:
- Every change is saved as a merge of the changed field only
- A response that yields no recommendations never replaces a stored record
"""

from typing import Optional

from tandau.contexts.extraction.heading_patterns import (
    HeadingLabels,
    HeadingMatchMode,
    default_match_mode,
    load_heading_labels,
)
from tandau.contexts.extraction.recommendation_builder import build_recommendations
from tandau.contexts.extraction.recommendation_data_structure import (
    RecommendationRecord,
    first_non_empty_category,
)
from tandau.contexts.session.logger import _log_debug, _log_info, _log_success, _log_warning
from tandau.contexts.session.store import DocumentStore, document_key
from tandau.utils.event_logging import log_session_event
from tandau.utils.llm import ChatMessage

# Field names inside the stored document
TEST_RESULTS_FIELD = "testResults"
CHAT_HISTORY_FIELD = "chatHistory"
RECOMMENDATIONS_FIELD = "recommendations"


class CareerPlanSession:
    """
    Explicitly owned state of one user's career plan.

    Attributes:
        user_id: Identity the document is keyed by
        test_results: Questionnaire answers (question id -> option value)
        chat_history: Conversation so far, oldest first
        current: Latest non-empty recommendations, or None
        previous: Record that current superseded, or None
        selected_category: Category shown by default in the results view
    """

    def __init__(
        self,
        user_id: str,
        store: DocumentStore,
        app_id: Optional[str] = None,
        labels: Optional[HeadingLabels] = None,
        mode: Optional[HeadingMatchMode] = None,
        record_events: bool = True,
    ):
        self.user_id = user_id
        self.store = store
        self.key = document_key(user_id, app_id)
        self.labels = labels if labels is not None else load_heading_labels()
        self.mode = mode if mode is not None else default_match_mode()
        self.record_events = record_events

        self.test_results: dict[str, str] = {}
        self.chat_history: list[ChatMessage] = []
        self.current: Optional[RecommendationRecord] = None
        self.previous: Optional[RecommendationRecord] = None
        self.selected_category: Optional[str] = None

    # =========================================================================
    # LOADING AND SAVING
    # =========================================================================

    def load(self) -> "CareerPlanSession":
        """
        Restore state from the store.

        A missing document resets the session to empty state.
        """
        document = self.store.load(self.key)
        self.previous = None

        if document is None:
            _log_debug(f"No stored plan for {self.user_id}, starting empty")
            self.test_results = {}
            self.chat_history = []
            self.current = None
            self.selected_category = None
            return self

        self.test_results = dict(document.get(TEST_RESULTS_FIELD) or {})
        self.chat_history = [
            ChatMessage.from_dict(message) for message in document.get(CHAT_HISTORY_FIELD) or []
        ]
        stored = document.get(RECOMMENDATIONS_FIELD)
        self.current = RecommendationRecord.from_dict(stored) if stored else None
        self.selected_category = first_non_empty_category(self.current)

        _log_info(
            f"Loaded plan for {self.user_id}: {len(self.test_results)} answers, "
            f"{len(self.chat_history)} messages, "
            f"recommendations {'present' if self.current else 'absent'}"
        )
        return self

    def _save(self, fields: dict) -> None:
        self.store.save(self.key, fields, merge=True)
        _log_debug(f"Saved {', '.join(fields)} for {self.user_id}")

    def _event(self, event_type: str, **extra_fields) -> None:
        if self.record_events:
            log_session_event(event_type, user_id=self.user_id, source="session", **extra_fields)

    # =========================================================================
    # STATE UPDATES
    # =========================================================================

    def record_test_results(self, results: dict[str, str]) -> None:
        """Replace questionnaire answers and save them."""
        results = dict(results)
        self._save({TEST_RESULTS_FIELD: results})
        self.test_results = results
        self._event("test_submitted", answers=len(self.test_results))

    def append_message(self, message: ChatMessage) -> None:
        """
        Append a chat turn and save the whole history.

        In-memory history only changes once the store accepted the write.
        """
        history = [*self.chat_history, message]
        self._save({CHAT_HISTORY_FIELD: [m.to_dict() for m in history]})
        self.chat_history = history

    def accept_response(self, text: str) -> Optional[RecommendationRecord]:
        """
        Parse an assistant response and keep it if it has recommendations.

        Args:
            text: Full assistant response

        Returns:
            The new current record, or None if the response had no recommendations
            (the stored record is left untouched in that case)

        Raises:
            InvalidInputError: If text is not a str
        """
        record = build_recommendations(text, labels=self.labels, mode=self.mode)

        if record.is_empty():
            _log_debug("Response had no recommendation sections, keeping stored record")
            return None

        if record == self.current:
            _log_debug("Response repeated the current recommendations")
            return record

        self._save({RECOMMENDATIONS_FIELD: record.to_dict()})
        self.previous = self.current
        self.current = record

        filled = [c for c in record.to_dict() if record.has_items(c)]
        _log_success(f"Recommendations updated for {self.user_id}: {', '.join(filled)}")
        self._event("recommendations_updated", categories=filled)
        return record

    def finish(self) -> Optional[str]:
        """
        Close the chat and pick the category shown first in the results view.

        Returns:
            Selected category key, or None if there are no recommendations yet
        """
        self.selected_category = first_non_empty_category(self.current)
        if self.selected_category is None:
            _log_warning(f"Chat finished for {self.user_id} without recommendations")
        return self.selected_category
