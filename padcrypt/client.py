"""Clients that send a message and key to a padcrypt server and print the reply."""

from __future__ import annotations

import os
import re
import socket
import sys
from typing import Optional, Sequence, Union

from padcrypt.cipher import CipherError, read_message_file
from padcrypt.protocol import (
    HandshakeError,
    Mode,
    ProtocolError,
    client_handshake,
    receive_message,
    send_message,
)

PathLike = Union[str, "os.PathLike[str]"]
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ClientError(Exception):
    """Raised when the client cannot complete its request."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def run_client(
    mode: Mode,
    plaintext_path: PathLike,
    key_path: PathLike,
    port: int,
    host: str = "localhost",
) -> str:
    """Send the text and key files to the server for ``mode``; return its reply."""
    try:
        text = read_message_file(plaintext_path)
        key = read_message_file(key_path)
    except CipherError as exc:
        raise ClientError(str(exc)) from exc
    if len(key) < len(text):
        raise ClientError("Key is shorter than plaintext")

    try:
        address = socket.gethostbyname(host)
    except OSError as exc:
        raise ClientError("CLIENT: ERROR, no such host") from exc

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    with sock:
        try:
            sock.connect((address, port))
        except (OSError, OverflowError) as exc:
            raise ClientError("CLIENT: ERROR connecting") from exc
        try:
            client_handshake(sock, mode)
        except HandshakeError as exc:
            raise ClientError(str(exc), exit_code=2) from exc
        except ProtocolError as exc:
            raise ClientError(str(exc)) from exc
        try:
            send_message(sock, text)
            send_message(sock, key)
            return receive_message(sock)
        except ProtocolError as exc:
            raise ClientError(f"CLIENT: {exc}") from exc


def _parse_port(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _main(mode: Mode, argv: Optional[Sequence[str]], prog: str) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 3:
            raise ClientError(f"Usage: ./{prog} <plaintext> <key> <portNumber>")
        result = run_client(mode, args[0], args[1], _parse_port(args[2]))
    except ClientError as exc:
        sys.stderr.write(f"Client error: {exc}\n")
        return exc.exit_code
    sys.stdout.write(result + "\n")
    return 0


def enc_main(argv: Optional[Sequence[str]] = None) -> int:
    """Encrypt a plaintext file with a key file through the encryption server."""
    return _main(Mode.ENC, argv, "enc_client")


def dec_main(argv: Optional[Sequence[str]] = None) -> int:
    """Decrypt a ciphertext file with a key file through the decryption server."""
    return _main(Mode.DEC, argv, "dec_client")


if __name__ == "__main__":
    sys.exit(enc_main())