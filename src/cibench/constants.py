"""Constants for ci-bench."""

# Keyword accepted by --step to select whole-job duration
TOTAL_STEP_KEYWORD = "total"
TOTAL_STEP_LABEL = "[Total job time]"

# Platform bookkeeping steps hidden from step listings
HIDDEN_STEP_NAMES = frozenset({"Set up job", "Complete job"})
HIDDEN_STEP_PREFIXES = ("Post ", "Run actions/")

# GitHub API paging
RUNS_PER_PAGE = 100
JOBS_PER_PAGE = 100

# Report layout
SHORT_SHA_LENGTH = 7
MESSAGE_MAX_LENGTH = 80
RULE_WIDTH = 120
COLUMN_WIDTHS = (10, 9, 12, 10, 10)  # Run, Commit, Date, Duration, Delta
NOT_APPLICABLE = "N/A"
NO_DELTA = "-"
