"""
rawcompat version constants.
"""

# Library version (matches pyproject.toml)
RAWCOMPAT_VERSION = "0.1.0"
