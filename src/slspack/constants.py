# src/slspack/constants.py
"""Central constants used across the project."""

from typing import Any


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
LOG_LEVEL_CHOICES: tuple[str, ...] = (
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
)

# --- cli ---
DEFAULT_SERVICE_FILE: str = "serverless.json"

# --- plugin settings defaults ---
DEFAULT_CONFIG_PATH: str = "rspack.config.py"
DEFAULT_PACKAGER: str = "npm"
SUPPORTED_PACKAGERS: tuple[str, ...] = ("npm", "yarn")
DEFAULT_INCLUDE_MODULES: bool = False
DEFAULT_KEEP_OUTPUT_DIRECTORY: bool = False

# legacy top-level custom key for includeModules
LEGACY_INCLUDE_MODULES_KEY: str = "rspackIncludeModules"

# --- entry discovery ---
# Ambiguous handler files are resolved in this order (after name length).
PREFERRED_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx")
DEFAULT_RUNTIME: str = "nodejs"
NODE_RUNTIME_MARKER: str = "node"
CUSTOM_RUNTIME: str = "provided"
GOOGLE_PROVIDER: str = "google"

# --- build config defaults ---
DEFAULT_TARGET: str = "node"
DEFAULT_OUTPUT_DIR: str = ".rspack"
SERVICE_OUTPUT_SEGMENT: str = "service"
DEFAULT_OUTPUT: dict[str, Any] = {
    "libraryTarget": "commonjs",
    "filename": "[name].js",
}

# --- compile ---
EXTERNAL_MODULE_MARKER: str = "external "

# stats.to_string() presets for the quiet reporting paths
WARNINGS_ONLY_STATS_OPTIONS: dict[str, Any] = {
    "all": False,
    "errors": False,
    "errorsCount": False,
    "warnings": True,
    "warningsCount": False,
    "logging": "warn",
}
ERRORS_ONLY_STATS_OPTIONS: dict[str, Any] = {
    "all": False,
    "errors": True,
    "errorsCount": False,
    "errorDetails": True,
    "warnings": False,
    "warningsCount": False,
    "logging": "error",
}

# --- watch ---
DEFAULT_POLL_INTERVAL_MS: int = 3000
