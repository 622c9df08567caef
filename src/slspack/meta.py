# src/slspack/meta.py
"""Program identity constants shared by the CLI, logger and config loader."""

PROGRAM_PACKAGE = "slspack"
PROGRAM_SCRIPT = "slspack"
PROGRAM_DISPLAY = "slspack"
PROGRAM_ENV = "SLSPACK"
# key under `custom` in the service descriptor
PROGRAM_CONFIG = "rspack"
