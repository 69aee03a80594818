from pathlib import Path

DEFAULT_YARD = Path("/tmp/scrapyard")
YARD_ENV_VAR = "SCRAPYARD_YARD"

# Archive naming
ARCHIVE_SUFFIX = ".tgz"  # Written by dump, removed by junk
SEARCH_SUFFIX = "*"  # Search accepts any trailing content after the resolved key
TEMP_PREFIX = ".scrapyard-"  # In-flight dumps live in the yard until renamed

# Key placeholders: "#(path/to/file)" is replaced by the file's SHA-1
PLACEHOLDER_START = "#("
PLACEHOLDER_END = ")"

# Eviction
CRUSH_MAX_AGE_DAYS = 20
SECONDS_PER_DAY = 24 * 60 * 60

# Archiver
TAR_EXECUTABLE = "tar"
HASH_CHUNK_SIZE = 1024 * 1024

# Commands and their argument requirements (minimum number of paths)
COMMAND_MIN_PATHS = {
    "search": 1,
    "dump": 1,
    "junk": 0,
    "crush": 0,
}
KEYED_COMMANDS = ("search", "dump", "junk")

# Process exit codes
EXIT_OK = 0
EXIT_MISS = 1
EXIT_USAGE = 2
EXIT_YARD_ERROR = 3
EXIT_ARCHIVER_FAILED = 255
