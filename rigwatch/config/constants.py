"""
Centralized constants for rigwatch.

Layout conventions of a town workspace, filter markers and presentation
limits live here so the pipeline modules share one definition of each.
"""

# =============================================================================
# WORKSPACE LAYOUT
# =============================================================================

TOWN_SOURCE_NAME = "town"  # Source name of the town-level bead store

MAYOR_DIR = "mayor"
TOWN_MARKER = "mayor/town.json"  # A directory containing this file is a town root
RIGS_CONFIG_PATH = "mayor/rigs.json"  # Registered rigs, relative to the town root

BEADS_DIR = ".beads"
RIG_MAYOR_BEADS_DIR = "mayor/rig/.beads"  # Preferred rig store location when present
FORMULAS_DIR = "formulas"  # Formula templates, relative to a beads dir
FORMULA_SUFFIXES = (".formula.json", ".formula.toml")
ISSUES_JSONL = "issues.jsonl"  # Issue export, relative to a beads dir

# =============================================================================
# FILTERING
# =============================================================================

WISP_MARKER = "-wisp-"  # Ephemeral issue ids carry this substring
FORMULA_STEP_SEPARATOR = "."  # Scaffold ids look like "<formula>.<step>"

# =============================================================================
# PRIORITIES & PRESENTATION
# =============================================================================

PRIORITY_LEVELS = 5  # P0 (critical) .. P4 (backlog)
DEFAULT_ISSUE_PRIORITY = 2  # Used when a store omits the priority field
TITLE_MAX_LEN = 60  # Longer titles are cut to TITLE_MAX_LEN - 3 plus "..."

# =============================================================================
# EXTERNAL COMMANDS
# =============================================================================

DEFAULT_BD_BIN = "bd"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "RIGWATCH_TOWN_ROOT": {
        "description": "Town root to report on instead of searching upward from the cwd",
        "valid_values": None,
        "default": None,
    },
    "RIGWATCH_BD_BIN": {
        "description": "Path or name of the bd executable used to query bead stores",
        "valid_values": None,
        "default": DEFAULT_BD_BIN,
    },
    "RIGWATCH_LOG_LEVEL": {
        "description": "Log level for stderr logging when neither --verbose nor --quiet is given",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
        "default": "WARNING",
    },
    "NO_COLOR": {
        "description": "Disable colored human-readable output when set",
        "valid_values": None,
        "default": None,
    },
}
