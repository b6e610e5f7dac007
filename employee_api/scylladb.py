"""A small client for the CQL native protocol (version 4)."""

from __future__ import annotations

import datetime as _dt
import ipaddress
import logging
import socket
import struct
import threading
import uuid
from decimal import Decimal
from enum import IntEnum
from typing import Any

from employee_api.config import read_config_and_property
from employee_api.model import Config

log = logging.getLogger(__name__)

DEFAULT_PORT = 9042
TIMEOUT = 1.0
_REQUEST_VERSION = 0x04
_CONSISTENCY_QUORUM = 0x0004
_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)
_HEADER = struct.Struct(">BBhBi")


class Opcode(IntEnum):
    ERROR = 0x00
    STARTUP = 0x01
    READY = 0x02
    AUTHENTICATE = 0x03
    QUERY = 0x07
    RESULT = 0x08
    AUTH_CHALLENGE = 0x0E
    AUTH_RESPONSE = 0x0F
    AUTH_SUCCESS = 0x10


class CqlError(Exception):
    """Failure reported by the server or while talking to it."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code


def _short(value: int) -> bytes:
    return struct.pack(">H", value)


def _string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return _short(len(raw)) + raw


def _long_string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return struct.pack(">i", len(raw)) + raw


def _bytes(raw: bytes | None) -> bytes:
    if raw is None:
        return struct.pack(">i", -1)
    return struct.pack(">i", len(raw)) + raw


def _encode_value(value: Any) -> bytes | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return b"\x01" if value else b"\x00"
    if isinstance(value, int):
        return struct.pack(">q", value)
    if isinstance(value, float):
        return struct.pack(">d", value)
    if isinstance(value, _dt.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=_dt.timezone.utc)
        return struct.pack(">q", (value - _EPOCH) // _dt.timedelta(milliseconds=1))
    if isinstance(value, _dt.date):
        return _encode_value(_dt.datetime.combine(value, _dt.time(), _dt.timezone.utc))
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, uuid.UUID):
        return value.bytes
    raise TypeError(f"cannot bind value of type {type(value).__name__}")


class _Reader:
    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def take(self, size: int) -> bytes:
        if self._pos + size > len(self._data):
            raise CqlError("truncated frame")
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def short(self) -> int:
        return struct.unpack(">H", self.take(2))[0]

    def int(self) -> int:
        return struct.unpack(">i", self.take(4))[0]

    def string(self) -> str:
        return self.take(self.short()).decode("utf-8")

    def bytes(self) -> bytes | None:
        size = self.int()
        return None if size < 0 else self.take(size)

    def string_list(self) -> list[str]:
        return [self.string() for _ in range(self.short())]

    def read_type(self) -> tuple:
        type_id = self.short()
        if type_id == 0x0000:
            return (type_id, self.string())
        if type_id in (0x20, 0x22):
            return (type_id, self.read_type())
        if type_id == 0x21:
            return (type_id, (self.read_type(), self.read_type()))
        if type_id == 0x30:
            self.string()
            self.string()
            return (type_id, [(self.string(), self.read_type()) for _ in range(self.short())])
        if type_id == 0x31:
            return (type_id, [self.read_type() for _ in range(self.short())])
        return (type_id, None)


def _decode(cql_type: tuple, raw: bytes | None) -> Any:
    if raw is None:
        return None
    type_id, sub = cql_type
    if type_id in (0x01, 0x0A, 0x0D):
        return raw.decode("utf-8")
    if type_id in (0x02, 0x05):
        return struct.unpack(">q", raw)[0]
    if type_id == 0x04:
        return raw != b"\x00"
    if type_id == 0x06:
        scale = struct.unpack(">i", raw[:4])[0]
        return Decimal(int.from_bytes(raw[4:], "big", signed=True)).scaleb(-scale)
    if type_id == 0x07:
        return struct.unpack(">d", raw)[0]
    if type_id == 0x08:
        return struct.unpack(">f", raw)[0]
    if type_id == 0x09:
        return struct.unpack(">i", raw)[0]
    if type_id == 0x0B:
        return _EPOCH + _dt.timedelta(milliseconds=struct.unpack(">q", raw)[0])
    if type_id in (0x0C, 0x0F):
        return uuid.UUID(bytes=raw)
    if type_id == 0x0E:
        return int.from_bytes(raw, "big", signed=True)
    if type_id == 0x10:
        return ipaddress.ip_address(raw)
    if type_id == 0x11:
        days = struct.unpack(">I", raw)[0] - 2**31
        return _dt.date(1970, 1, 1) + _dt.timedelta(days=days)
    if type_id == 0x12:
        return struct.unpack(">q", raw)[0]
    if type_id == 0x13:
        return struct.unpack(">h", raw)[0]
    if type_id == 0x14:
        return struct.unpack(">b", raw)[0]
    reader = _Reader(raw)
    if type_id in (0x20, 0x22):
        items = [_decode(sub, reader.bytes()) for _ in range(reader.int())]
        return items if type_id == 0x20 else set(items)
    if type_id == 0x21:
        key_type, value_type = sub
        return {
            _decode(key_type, reader.bytes()): _decode(value_type, reader.bytes())
            for _ in range(reader.int())
        }
    if type_id == 0x30:
        return {name: _decode(t, reader.bytes()) for name, t in sub}
    if type_id == 0x31:
        return tuple(_decode(t, reader.bytes()) for t in sub)
    return raw


def _parse_rows(reader: _Reader) -> list[dict[str, Any]]:
    flags = reader.int()
    column_count = reader.int()
    if flags & 0x0002:
        reader.bytes()
    if flags & 0x0004:
        raise CqlError("result without column metadata")
    if flags & 0x0001:
        reader.string()
        reader.string()
    columns = []
    for _ in range(column_count):
        if not flags & 0x0001:
            reader.string()
            reader.string()
        columns.append((reader.string(), reader.read_type()))
    return [
        {name: _decode(cql_type, reader.bytes()) for name, cql_type in columns}
        for _ in range(reader.int())
    ]


class Session:
    """An open connection to one node."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._lock = threading.Lock()
        self.closed = False

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _recv(self, size: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self._sock.recv(size - len(chunks))
            if not chunk:
                raise CqlError("connection closed by server")
            chunks.extend(chunk)
        return bytes(chunks)

    def _request(self, opcode: Opcode, body: bytes) -> tuple[int, _Reader]:
        if self.closed:
            raise CqlError("gocql: session has been closed")
        with self._lock:
            try:
                self._sock.sendall(_HEADER.pack(_REQUEST_VERSION, 0, 0, opcode, len(body)) + body)
                _, flags, _, response_op, length = _HEADER.unpack(self._recv(_HEADER.size))
                reader = _Reader(self._recv(length))
            except OSError as exc:
                raise CqlError(str(exc)) from exc
        if flags & 0x02:
            reader.take(16)
        if flags & 0x08:
            reader.string_list()
        if response_op == Opcode.ERROR:
            code = reader.int()
            raise CqlError(reader.string(), code)
        return response_op, reader

    def _handshake(self, username: str, password: str) -> None:
        body = _short(1) + _string("CQL_VERSION") + _string("3.0.0")
        opcode, _ = self._request(Opcode.STARTUP, body)
        if opcode == Opcode.READY:
            return
        if opcode != Opcode.AUTHENTICATE:
            raise CqlError(f"unexpected response to startup: {opcode:#x}")
        token = b"\x00" + username.encode() + b"\x00" + password.encode()
        while True:
            opcode, _ = self._request(Opcode.AUTH_RESPONSE, _bytes(token))
            if opcode == Opcode.AUTH_SUCCESS:
                return
            if opcode != Opcode.AUTH_CHALLENGE:
                raise CqlError(f"unexpected response to authentication: {opcode:#x}")

    def query(self, statement: str, *args: Any) -> list[dict[str, Any]]:
        """Run a statement and return its rows as dictionaries."""
        body = _long_string(statement) + _short(_CONSISTENCY_QUORUM)
        if args:
            body += b"\x01" + _short(len(args))
            body += b"".join(_bytes(_encode_value(arg)) for arg in args)
        else:
            body += b"\x00"
        _, reader = self._request(Opcode.QUERY, body)
        if reader.int() == 0x0002:
            return _parse_rows(reader)
        return []

    def execute(self, statement: str, *args: Any) -> None:
        """Run a statement, discarding any rows."""
        self.query(statement, *args)

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._sock.close()


def _split_host(host: str) -> tuple[str, int]:
    if host.count(":") == 1:
        name, port = host.split(":")
        return name, int(port)
    return host.strip("[]"), DEFAULT_PORT


def create_scylladb_client(config: Config | None = None) -> Session:
    """Connect to the first reachable configured node and select the keyspace."""
    cfg = config if config is not None else read_config_and_property()
    settings = cfg.scylladb
    if not settings.host:
        error = CqlError("no hosts provided")
        log.error("Unable to create session with scylladb: %s", error)
        raise error
    last_error: Exception | None = None
    for host in settings.host:
        try:
            sock = socket.create_connection(_split_host(host), timeout=TIMEOUT)
        except (OSError, ValueError) as exc:
            last_error = exc
            continue
        session = Session(sock)
        try:
            session._handshake(settings.username, settings.password)
            if settings.keyspace:
                session.execute('USE "' + settings.keyspace.replace('"', '""') + '"')
            return session
        except CqlError as exc:
            session.close()
            last_error = exc
    error = CqlError(f"no connections were made when creating the session: {last_error}")
    log.error("Unable to create session with scylladb: %s", error)
    raise error from last_error