# Section holding the service-wide settings
MAIN_SECTION = "main"
SESSION_KEY = "session"

DEFAULT_CONFIG_FILE = "bgpexplorer.ini"
CONFIG_FILE_ENVVAR = "BGPEXPLORER_CONFIG"

# Ports paired with bare IP addresses
BGP_PORT = 179
BMP_PORT = 632
DNS_PORT = 53

DEFAULT_ROUTER_ID = "1.1.1.1"
DEFAULT_PEER_AS = 0
DEFAULT_HTTP_LISTEN = "0.0.0.0:8080"
DEFAULT_HTTP_ROOT = "./contrib"
# wildcard address used when protolisten is unparsable
DEFAULT_PROTO_LISTEN_IP = "0.0.0.0"
DEFAULT_DNS_RESOLVER = "1.1.1.1:53"
DEFAULT_WHOIS_DB = "whoiscache.db"

# Timing constants (in seconds)
DEFAULT_HTTP_TIMEOUT = 120
DEFAULT_WHOIS_REQUEST_TIMEOUT = 30
DEFAULT_WHOIS_CACHE_SECONDS = 1800  # 30 minutes
DEFAULT_PURGE_EVERY = 300  # 5 minutes

DEFAULT_HISTORY_DEPTH = 10
DEFAULT_PURGE_AFTER_WITHDRAWS = 0  # disabled

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
