"""Constants of the MySQL client/server protocol."""

from __future__ import annotations

import platform
import sys
from enum import IntEnum, IntFlag

DEFAULT_AUTH_PLUGIN = "mysql_native_password"
DEFAULT_MAX_ALLOWED_PACKET = 64 << 20
MIN_PROTOCOL_VERSION = 10
MAX_PACKET_SIZE = (1 << 24) - 1
TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

CONN_ATTR_CLIENT_NAME = "_client_name"
CONN_ATTR_CLIENT_NAME_VALUE = "authorhub"
CONN_ATTR_OS = "_os"
CONN_ATTR_OS_VALUE = sys.platform
CONN_ATTR_PLATFORM = "_platform"
CONN_ATTR_PLATFORM_VALUE = platform.machine()
CONN_ATTR_PID = "_pid"
CONN_ATTR_SERVER_HOST = "_server_host"


class PacketMarker(IntEnum):
    """First byte of a server response packet."""

    OK = 0x00
    AUTH_MORE_DATA = 0x01
    LOCAL_IN_FILE = 0xFB
    EOF = 0xFE
    ERR = 0xFF


class ClientFlag(IntFlag):
    """Capability flags exchanged during the handshake."""

    LONG_PASSWORD = 1 << 0
    FOUND_ROWS = 1 << 1
    LONG_FLAG = 1 << 2
    CONNECT_WITH_DB = 1 << 3
    NO_SCHEMA = 1 << 4
    COMPRESS = 1 << 5
    ODBC = 1 << 6
    LOCAL_FILES = 1 << 7
    IGNORE_SPACE = 1 << 8
    PROTOCOL_41 = 1 << 9
    INTERACTIVE = 1 << 10
    SSL = 1 << 11
    IGNORE_SIGPIPE = 1 << 12
    TRANSACTIONS = 1 << 13
    RESERVED = 1 << 14
    SECURE_CONN = 1 << 15
    MULTI_STATEMENTS = 1 << 16
    MULTI_RESULTS = 1 << 17
    PS_MULTI_RESULTS = 1 << 18
    PLUGIN_AUTH = 1 << 19
    CONNECT_ATTRS = 1 << 20
    PLUGIN_AUTH_LEN_ENC_CLIENT_DATA = 1 << 21
    CAN_HANDLE_EXPIRED_PASSWORDS = 1 << 22
    SESSION_TRACK = 1 << 23
    DEPRECATE_EOF = 1 << 24


class Command(IntEnum):
    """Command bytes sent by the client."""

    QUIT = 1
    INIT_DB = 2
    QUERY = 3
    FIELD_LIST = 4
    CREATE_DB = 5
    DROP_DB = 6
    REFRESH = 7
    SHUTDOWN = 8
    STATISTICS = 9
    PROCESS_INFO = 10
    CONNECT = 11
    PROCESS_KILL = 12
    DEBUG = 13
    PING = 14
    TIME = 15
    DELAYED_INSERT = 16
    CHANGE_USER = 17
    BINLOG_DUMP = 18
    TABLE_DUMP = 19
    CONNECT_OUT = 20
    REGISTER_SLAVE = 21
    STMT_PREPARE = 22
    STMT_EXECUTE = 23
    STMT_SEND_LONG_DATA = 24
    STMT_CLOSE = 25
    STMT_RESET = 26
    SET_OPTION = 27
    STMT_FETCH = 28


class FieldType(IntEnum):
    """Column types in result-set metadata."""

    DECIMAL = 0
    TINY = 1
    SHORT = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5
    NULL = 6
    TIMESTAMP = 7
    LONGLONG = 8
    INT24 = 9
    DATE = 10
    TIME = 11
    DATETIME = 12
    YEAR = 13
    NEWDATE = 14
    VARCHAR = 15
    BIT = 16
    VECTOR = 0xF2
    INVALID = 0xF3
    BOOL = 0xF4
    JSON = 0xF5
    NEWDECIMAL = 0xF6
    ENUM = 0xF7
    SET = 0xF8
    TINY_BLOB = 0xF9
    MEDIUM_BLOB = 0xFA
    LONG_BLOB = 0xFB
    BLOB = 0xFC
    VAR_STRING = 0xFD
    STRING = 0xFE
    GEOMETRY = 0xFF


class FieldFlag(IntFlag):
    """Column attribute flags."""

    NOT_NULL = 1 << 0
    PRI_KEY = 1 << 1
    UNIQUE_KEY = 1 << 2
    MULTIPLE_KEY = 1 << 3
    BLOB = 1 << 4
    UNSIGNED = 1 << 5
    ZERO_FILL = 1 << 6
    BINARY = 1 << 7
    ENUM = 1 << 8
    AUTO_INCREMENT = 1 << 9
    TIMESTAMP = 1 << 10
    SET = 1 << 11
    UNKNOWN1 = 1 << 12
    UNKNOWN2 = 1 << 13
    UNKNOWN3 = 1 << 14
    UNKNOWN4 = 1 << 15


class StatusFlag(IntFlag):
    """Server status flags reported in OK and EOF packets."""

    IN_TRANS = 1 << 0
    IN_AUTOCOMMIT = 1 << 1
    RESERVED = 1 << 2
    MORE_RESULTS_EXISTS = 1 << 3
    NO_GOOD_INDEX_USED = 1 << 4
    NO_INDEX_USED = 1 << 5
    CURSOR_EXISTS = 1 << 6
    LAST_ROW_SENT = 1 << 7
    DB_DROPPED = 1 << 8
    NO_BACKSLASH_ESCAPES = 1 << 9
    METADATA_CHANGED = 1 << 10
    QUERY_WAS_SLOW = 1 << 11
    PS_OUT_PARAMS = 1 << 12
    IN_TRANS_READONLY = 1 << 13
    SESSION_STATE_CHANGED = 1 << 14


class CachingSha2Response(IntEnum):
    """Replies of the caching_sha2_password authentication exchange."""

    REQUEST_PUBLIC_KEY = 2
    FAST_AUTH_SUCCESS = 3
    PERFORM_FULL_AUTHENTICATION = 4