"""Wire format shared by the clients and servers: handshake and framed messages."""

from __future__ import annotations

import enum
import socket
import struct

CHUNK_SIZE = 1000
_HEADER = struct.Struct("<i")
_HANDSHAKE_SIZE = 4


class Mode(enum.Enum):
    """Which service a peer provides or expects."""

    ENC = "enc"
    DEC = "dec"

    @property
    def handshake(self) -> bytes:
        return self.value.encode("ascii") + b"\0"


class ProtocolError(Exception):
    """Raised when the peer breaks the wire format or the connection fails."""


class HandshakeError(ProtocolError):
    """Raised when the peer identifies itself as the wrong service."""


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        try:
            chunk = sock.recv(min(remaining, CHUNK_SIZE))
        except OSError as exc:
            raise ProtocolError("ERROR reading from socket") from exc
        if not chunk:
            raise ProtocolError("Connection closed before the message was complete")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _recv_upto(sock: socket.socket, size: int) -> bytes:
    received = b""
    while len(received) < size:
        try:
            chunk = sock.recv(size - len(received))
        except OSError as exc:
            raise ProtocolError("Failed to receive handshake") from exc
        if not chunk:
            break
        received += chunk
    return received


def _peer_name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def send_message(sock: socket.socket, data: str) -> None:
    """Send a length-prefixed message in chunks of at most CHUNK_SIZE bytes."""
    payload = data.encode("latin-1")
    try:
        sock.sendall(_HEADER.pack(len(payload)))
        for start in range(0, len(payload), CHUNK_SIZE):
            sock.sendall(payload[start : start + CHUNK_SIZE])
    except OSError as exc:
        raise ProtocolError("ERROR writing to socket") from exc


def receive_message(sock: socket.socket) -> str:
    """Receive one length-prefixed message."""
    (length,) = _HEADER.unpack(_recv_exact(sock, _HEADER.size))
    if length < 0:
        raise ProtocolError(f"Invalid message length {length}")
    return _recv_exact(sock, length).decode("latin-1")


def client_handshake(sock: socket.socket, mode: Mode) -> None:
    """Announce ``mode`` and check that the server answers with the same one."""
    try:
        sock.sendall(mode.handshake)
    except OSError as exc:
        raise ProtocolError("Failed to send handshake") from exc
    response = _recv_upto(sock, _HANDSHAKE_SIZE)
    if _peer_name(response) != mode.value:
        raise HandshakeError("Connected to incompatible server")


def server_handshake(sock: socket.socket, mode: Mode) -> None:
    """Read the client's announcement, reply with ``mode``, then check the match."""
    received = _recv_upto(sock, _HANDSHAKE_SIZE)
    try:
        sock.sendall(mode.handshake)
    except OSError as exc:
        raise ProtocolError("ERROR writing to socket") from exc
    if _peer_name(received) != mode.value:
        raise HandshakeError("Rejected connection: Client not validated")