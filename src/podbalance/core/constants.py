"""
constants.py
- Project-wide constants shared across logic and runner scripts.
- Includes target adjustment values, eviction pacing, and listing page size.
"""

# --- Target Adjustment ---
DEFAULT_ADJUSTMENT_THRESHOLD = 5  # ideal must exceed this before adjusting
DEFAULT_TARGET_ADJUSTMENT = 5  # pods subtracted from the ideal once above threshold

# --- Eviction ---
DEFAULT_EVICTION_DELAY_SECONDS = 1  # pause between consecutive pod deletions
DEFAULT_OWNER_KINDS = ("ReplicaSet",)

# --- Inventory ---
DEFAULT_LIST_PAGE_SIZE = 500  # pods per list call, drained via continue tokens

# Host key for pods with no node assignment
UNSCHEDULED_HOST = ""
