# Lookup defaults. max edit distance must match between build and query:
# deletes only exist up to the depth they were generated with.
MAX_EDIT_DISTANCE: int = 2
VERBOSITY: str = "top"      # "top", "all_min_distance" or "all_within_max"
LANGUAGE_TAG: str = ""      # prefix for co-resident vocabularies

# Saturation limits (signed 32-bit counters)
MAX_COUNT: int = 2**31 - 1
MAX_VOCABULARY: int = 2**31 - 1

# Corpus reading
GLOB_SUFFIX: str = ".txt"
ENCODING: str = "utf-8"

# Progress logging cadence (set SPELLER_VERBOSE=1 to enable)
PROGRESS_EVERY_LINES: int = 100_000
PROGRESS_EVERY_FILES: int = 100

# Default store used by Engine.save() when no DSN is given
DEFAULT_DSN: str = "memory://"
