"""Configuration constants and paths for quizmark."""

import os
from pathlib import Path

# Default export location - override via QUIZMARK_OUT_DIR
DEFAULT_OUT_DIR = Path(os.getenv("QUIZMARK_OUT_DIR", "./quiz-export"))

# Feedback lines are indented to the content column of a "- " item
FEEDBACK_INDENT = 2

# Comment line placed before every quiz block
SEPARATOR_COMMENT = "<!--  -->"

# free_text_number answer meaning "accept anything"
FREE_TEXT_SENTINEL = "any"

# A choose_best question needs something to choose between
MIN_CHOOSE_BEST_OPTIONS = 2

# Parser versioning for determinism tracking
PARSER_VERSION = "0.1.0"
SCHEMA_VERSION = 1

# Export artifact names
RECORDS_FILENAME = "quizzes.ndjson"
MANIFEST_FILENAME = "manifest.json"
