"""
Error codes returned by use cases, grouped by taxonomy.

ValidationError codes are returned before any state is touched. StateConflict
codes are recoverable and leave no partial mutation. PERSISTENCE_ERROR means
the store failed and the transaction was rolled back. COMMITMENT_VIOLATION is
returned for the one operation that is intentionally unsupported.
"""

from enum import Enum

from libs.result import Error


class ErrorCategory(str, Enum):
    validation = "validation"
    not_found = "not_found"
    state_conflict = "state_conflict"
    persistence = "persistence"
    commitment_violation = "commitment_violation"


# Validation
INVALID_SCHEDULE = "INVALID_SCHEDULE"
WINDOW_TOO_SHORT = "WINDOW_TOO_SHORT"
INVALID_DURATION = "INVALID_DURATION"
INVALID_TARGET = "INVALID_TARGET"
INVALID_CHALLENGE = "INVALID_CHALLENGE"
EMPTY_GOAL = "EMPTY_GOAL"
PHRASE_TOO_SHORT = "PHRASE_TOO_SHORT"
INVALID_LOCK_DURATION = "INVALID_LOCK_DURATION"
INVALID_UNLOCK_DURATION = "INVALID_UNLOCK_DURATION"
OUTSIDE_WINDOW = "OUTSIDE_WINDOW"
SESSION_DISABLED = "SESSION_DISABLED"

# Not found
SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
ESSENTIAL_APP_NOT_FOUND = "ESSENTIAL_APP_NOT_FOUND"

# State conflicts
ALREADY_ACTIVE = "ALREADY_ACTIVE"
ON_COOLDOWN = "ON_COOLDOWN"
SESSION_LOCKED = "SESSION_LOCKED"
SESSION_ENFORCED = "SESSION_ENFORCED"
NOT_ENFORCED = "NOT_ENFORCED"
SESSION_NOT_LOCKED = "SESSION_NOT_LOCKED"
DUPLICATE_GOAL_ITEM = "DUPLICATE_GOAL_ITEM"
GOAL_ACTIVE = "GOAL_ACTIVE"
GOAL_INACTIVE = "GOAL_INACTIVE"
GOAL_EXPIRED = "GOAL_EXPIRED"
CHALLENGE_INCOMPLETE = "CHALLENGE_INCOMPLETE"
NO_CHALLENGE = "NO_CHALLENGE"
WRONG_PHRASE = "WRONG_PHRASE"
TICK_SKIPPED = "TICK_SKIPPED"
DUPLICATE_ESSENTIAL_APP = "DUPLICATE_ESSENTIAL_APP"
SYSTEM_ESSENTIAL_APP = "SYSTEM_ESSENTIAL_APP"
NO_GRANT = "NO_GRANT"

PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
COMMITMENT_VIOLATION = "COMMITMENT_VIOLATION"

_CATEGORIES = {
    ErrorCategory.validation: {
        INVALID_SCHEDULE,
        WINDOW_TOO_SHORT,
        INVALID_DURATION,
        INVALID_TARGET,
        INVALID_CHALLENGE,
        EMPTY_GOAL,
        PHRASE_TOO_SHORT,
        INVALID_LOCK_DURATION,
        INVALID_UNLOCK_DURATION,
        OUTSIDE_WINDOW,
        SESSION_DISABLED,
    },
    ErrorCategory.not_found: {
        SESSION_NOT_FOUND,
        GOAL_NOT_FOUND,
        ESSENTIAL_APP_NOT_FOUND,
    },
    ErrorCategory.state_conflict: {
        ALREADY_ACTIVE,
        ON_COOLDOWN,
        SESSION_LOCKED,
        SESSION_ENFORCED,
        NOT_ENFORCED,
        SESSION_NOT_LOCKED,
        DUPLICATE_GOAL_ITEM,
        GOAL_ACTIVE,
        GOAL_INACTIVE,
        GOAL_EXPIRED,
        CHALLENGE_INCOMPLETE,
        NO_CHALLENGE,
        WRONG_PHRASE,
        TICK_SKIPPED,
        DUPLICATE_ESSENTIAL_APP,
        SYSTEM_ESSENTIAL_APP,
        NO_GRANT,
    },
    ErrorCategory.persistence: {PERSISTENCE_ERROR},
    ErrorCategory.commitment_violation: {COMMITMENT_VIOLATION},
}


def category_of(error: Error):
    """Taxonomy bucket of an Error, or None for codes outside the engine."""
    for category, codes in _CATEGORIES.items():
        if error.code in codes:
            return category
    return None
