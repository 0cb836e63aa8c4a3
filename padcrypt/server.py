"""Encryption and decryption servers that speak the padcrypt wire protocol."""

from __future__ import annotations

import re
import socket
import sys
import threading
from typing import Optional, Sequence

from padcrypt.cipher import CipherError, decrypt, encrypt
from padcrypt.protocol import (
    Mode,
    ProtocolError,
    receive_message,
    send_message,
    server_handshake,
)

DEFAULT_MAX_WORKERS = 5
_BACKLOG = 5
_POLL_INTERVAL = 0.1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def transform(mode: Mode, text: str, key: str) -> str:
    """Encrypt or decrypt ``text`` with ``key`` depending on ``mode``."""
    if mode is Mode.ENC:
        return encrypt(text, key)
    return decrypt(text, key)


def handle_connection(sock: socket.socket, mode: Mode) -> None:
    """Serve one client: handshake, read text and key, reply with the result.

    The socket is closed when this returns or raises.
    """
    with sock:
        server_handshake(sock, mode)
        text = receive_message(sock)
        key = receive_message(sock)
        send_message(sock, transform(mode, text, key))


class OtpServer:
    """A threaded TCP server that encrypts or decrypts messages for clients."""

    def __init__(
        self,
        mode: Mode,
        port: int,
        host: str = "",
        max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1 or None")
        self.mode = mode
        self._slots = (
            threading.BoundedSemaphore(max_workers) if max_workers is not None else None
        )
        self._stop = threading.Event()
        self._idle = threading.Event()
        self._idle.set()
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.bind((host, port))
            self._listener.listen(_BACKLOG)
            self._listener.settimeout(_POLL_INTERVAL)
        except BaseException:
            self._listener.close()
            raise

    @property
    def server_address(self) -> tuple[str, int]:
        """The (host, port) the server listens on."""
        host, port = self._listener.getsockname()[:2]
        return host, port

    def _release(self) -> None:
        if self._slots is not None:
            self._slots.release()

    def _worker(self, conn: socket.socket) -> None:
        try:
            handle_connection(conn, self.mode)
        except (ProtocolError, CipherError) as exc:
            sys.stderr.write(f"Client error: {exc}\n")
        finally:
            self._release()

    def serve_forever(self) -> None:
        """Accept and serve clients until :meth:`shutdown` is called."""
        self._stop.clear()
        self._idle.clear()
        try:
            while not self._stop.is_set():
                if self._slots is not None and not self._slots.acquire(
                    timeout=_POLL_INTERVAL
                ):
                    continue
                try:
                    conn, _ = self._listener.accept()
                except socket.timeout:
                    self._release()
                    continue
                except OSError:
                    self._release()
                    if self._stop.is_set():
                        break
                    raise
                conn.settimeout(None)
                threading.Thread(target=self._worker, args=(conn,), daemon=True).start()
        finally:
            self._idle.set()

    def shutdown(self) -> None:
        """Stop :meth:`serve_forever` and wait for it to return."""
        self._stop.set()
        self._idle.wait()

    def close(self) -> None:
        """Close the listening socket."""
        self._listener.close()

    def __enter__(self) -> "OtpServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _parse_port(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _main(
    mode: Mode, argv: Optional[Sequence[str]], prog: str, max_workers: Optional[int]
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stderr.write(f"USAGE: {prog} port\n")
        return 1
    port = _parse_port(args[0])
    try:
        server = OtpServer(mode, port, "", max_workers)
    except (OSError, OverflowError):
        sys.stderr.write("Client error: ERROR on binding\n")
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            return 0
    return 0


def enc_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the encryption server on the port given in ``argv``."""
    return _main(Mode.ENC, argv, "enc_server", DEFAULT_MAX_WORKERS)


def dec_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the decryption server on the port given in ``argv``."""
    return _main(Mode.DEC, argv, "dec_server", None)


if __name__ == "__main__":
    sys.exit(enc_main())