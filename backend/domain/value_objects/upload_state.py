"""
UploadState Value Object

Immutable representation of where a single upload request is in the pipeline.
"""

from enum import Enum


class UploadState(str, Enum):
    """
    Lifecycle of one upload request.

    RECEIVED -> VALIDATED -> STAGED -> COMMITTED -> SYNCHRONIZED on success.
    Any step may fail straight to FAILED. A COMMITTED asset is never rolled
    back when a later step fails.
    """

    RECEIVED = "received"
    VALIDATED = "validated"
    STAGED = "staged"
    COMMITTED = "committed"
    SYNCHRONIZED = "synchronized"
    FAILED = "failed"

    def can_transition_to(self, new_state: "UploadState") -> bool:
        """
        Check if transition to new state is valid.

        Args:
            new_state: Target state

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            UploadState.RECEIVED: {UploadState.VALIDATED, UploadState.FAILED},
            UploadState.VALIDATED: {UploadState.STAGED, UploadState.FAILED},
            UploadState.STAGED: {UploadState.COMMITTED, UploadState.FAILED},
            UploadState.COMMITTED: {UploadState.SYNCHRONIZED, UploadState.FAILED},
            UploadState.SYNCHRONIZED: set(),
            UploadState.FAILED: set(),
        }

        return new_state in valid_transitions.get(self, set())

    def advance(self, new_state: "UploadState") -> "UploadState":
        """
        Return new_state if the transition is allowed.

        Raises:
            ValueError: If the transition is not part of the lifecycle
        """
        if not self.can_transition_to(new_state):
            raise ValueError(f"Invalid upload transition: {self.value} -> {new_state.value}")
        return new_state
