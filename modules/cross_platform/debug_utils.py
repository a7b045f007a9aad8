import inspect
import sys
import platform
import os
import datetime

# --- Configuration ---
DEFAULT_CONSOLE_VERBOSITY = "Warning"
DEFAULT_LOG_VERBOSITY = "Debug"
VERBOSITY_LEVELS = ["Verbose", "Debug", "Information", "Warning", "Error", "Critical"]

# Environment overrides
LOG_LEVEL_ENV = "SHELL_TOOLS_LOG_LEVEL"
LOG_FILE_ENV = "SHELL_TOOLS_LOG_FILE"

# --- Global Variables ---
_console_verbosity_level = DEFAULT_CONSOLE_VERBOSITY
_log_verbosity_level = DEFAULT_LOG_VERBOSITY
_log_filepath = None               # File logging is enabled when this is set


# --- Utility Functions ---
def set_console_verbosity(level: str = DEFAULT_CONSOLE_VERBOSITY) -> None:
    """Set the global verbosity level for console output."""
    global _console_verbosity_level
    _console_verbosity_level = _validate_verbosity_level(level, "console")


def enable_file_logging(filepath: str) -> None:
    """Append log records to `filepath`, creating parent directories as needed."""
    global _log_filepath
    filepath = os.path.expanduser(filepath)
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)
    _log_filepath = filepath


def disable_file_logging() -> None:
    global _log_filepath
    _log_filepath = None


def configure_from_env(environ=None) -> None:
    """Apply SHELL_TOOLS_LOG_LEVEL / SHELL_TOOLS_LOG_FILE, if present."""
    env = os.environ if environ is None else environ
    level = env.get(LOG_LEVEL_ENV)
    if level:
        set_console_verbosity(level)
    log_file = env.get(LOG_FILE_ENV)
    if log_file:
        enable_file_logging(log_file)


def _validate_verbosity_level(level: str, target_type: str) -> str:
    """Validate verbosity level and raise ValueError if invalid."""
    level_capitalized = level.capitalize()
    if level_capitalized not in VERBOSITY_LEVELS:
        raise ValueError(f"Invalid {target_type} verbosity level: '{level}'. Must be one of {VERBOSITY_LEVELS}")
    return level_capitalized


def _is_at_verbosity_level(channel: str, verbosity_level: str) -> bool:
    """Check if a channel is at or above the given verbosity level."""
    current_index = VERBOSITY_LEVELS.index(verbosity_level)
    channel_index = VERBOSITY_LEVELS.index(channel.capitalize())
    return channel_index >= current_index


def _append_to_log_file(line: str) -> None:
    timestamp = datetime.datetime.now().isoformat(timespec="seconds")
    try:
        with open(_log_filepath, "a", encoding="utf-8") as log_file:
            log_file.write(f"{timestamp} {line}\n")
    except OSError as e:
        print(f"[Error] Failed to write to log file {_log_filepath}: {e}", file=sys.stderr)


def write_debug(message: str = "", channel: str = "Debug", condition: bool = True,
                output_stream: str = "stderr", location_channels=None) -> None:
    """
    Write a debug message to console and, if enabled, to the log file.
    Parameters:
      - message: The debug message.
      - channel: One of ("Verbose", "Debug", "Information", "Warning", "Error", "Critical").
      - condition: If False, the message will not be processed.
      - output_stream: "stdout" or "stderr".
      - location_channels: If True, always show caller location; if list, only for specified channels.
    """
    if not condition:
        return

    channel_cap = _validate_verbosity_level(channel, "channel")
    output_message = message

    # Determine whether to include caller location
    show_location = False
    if isinstance(location_channels, bool):
        show_location = location_channels
    elif isinstance(location_channels, list):
        show_location = channel_cap in location_channels

    if show_location:
        caller = inspect.stack()[1]
        output_message = f"[{os.path.basename(caller.filename)}:{caller.lineno}] {message}"

    stream = sys.stdout if output_stream.lower() == "stdout" else sys.stderr

    # Color mapping for terminal output (if supported)
    color_map = {
        "Error": "\033[91m", "Warning": "\033[93m", "Verbose": "\033[90m",
        "Information": "\033[96m", "Debug": "\033[92m", "Critical": "\033[95m"
    }
    reset_color = "\033[0m"
    supports_color = stream.isatty() and platform.system() != "Windows" and not os.environ.get("NO_COLOR")
    color = color_map.get(channel_cap, "") if supports_color else ""
    formatted_message = f"{color}[{channel_cap}]{reset_color} {output_message}" if color else f"[{channel_cap}] {output_message}"

    # Console output
    if _is_at_verbosity_level(channel_cap, _console_verbosity_level):
        print(formatted_message, file=stream, flush=True)

    # File logging
    if _log_filepath and _is_at_verbosity_level(channel_cap, _log_verbosity_level):
        _append_to_log_file(f"[{channel_cap}] {output_message}")
