"""
Global constants used throughout the project
"""

# Separator used by the string key helpers of the weighted splitter.
# Elements must not contain it.
KEY_SEPARATOR = "\x00"

# Directory the demo script reads collection families from
DATA = "data"
DEBUG = False

LOG_FORMAT = "%(levelname)s | %(message)s"
