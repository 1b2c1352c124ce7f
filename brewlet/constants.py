# The name of the project
PROJECT_NAME = "brewlet"

# The environment variable for the directory where the brewlet data is saved
HOME_ENV_VAR = "BREWLET_HOME"

# The directory (under the data directory) holding user supplied formula files
FORMULA_DIR = "formula"

# The extension of formula files
FORMULA_EXT = ".yml"

# The directory (under the data directory) binaries are installed into by default
BIN_DIR = "bin"

# Read size used when hashing artifacts
CHUNK_SIZE = 8192
