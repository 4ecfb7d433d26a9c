"""MySQL dialect constants and hard-coded defaults."""

# Flavors
MYSQL_FLAVOR = "mysql"
MARIADB_FLAVOR = "mariadb"

DEFAULT_CHARSET = "utf8"

DEFAULT_ADDR = "127.0.0.1:3306"
DEFAULT_USER = "root"
DEFAULT_DUMP_EXECUTION_PATH = "mysqldump"

# Default server ids are drawn from [SERVER_ID_BASE, SERVER_ID_BASE + SERVER_ID_SPAN)
SERVER_ID_BASE = 1001
SERVER_ID_SPAN = 1000

MAX_SERVER_ID = 2**32 - 1

# Durations are bounded like Go's time.Duration (signed 64-bit nanoseconds)
MAX_DURATION_NS = 2**63 - 1
