import socket
import threading

import pytest

from padcrypt.cipher import encrypt
from padcrypt.client import ClientError, dec_main, enc_main, run_client
from padcrypt.protocol import Mode
from padcrypt.server import OtpServer


def _start(mode):
    server = OtpServer(mode, 0, "127.0.0.1")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, thread


@pytest.fixture
def servers():
    enc_server, enc_thread = _start(Mode.ENC)
    dec_server, dec_thread = _start(Mode.DEC)
    yield enc_server.server_address[1], dec_server.server_address[1]
    for server, thread in ((enc_server, enc_thread), (dec_server, dec_thread)):
        server.shutdown()
        server.close()
        thread.join(5)


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _write(path, text):
    path.write_text(text, encoding="ascii")
    return path


def test_round_trip_through_servers(tmp_path, servers):
    enc_port, dec_port = servers
    plain = _write(tmp_path / "plain", "THE RED GOOSE FLIES AT MIDNIGHT\n")
    key = _write(tmp_path / "key", "ABCDEFGHIJKLMNOPQRSTUVWXYZ ABCDEFGH\n")
    cipher_text = run_client(Mode.ENC, plain, key, enc_port, "127.0.0.1")
    assert cipher_text == encrypt(
        "THE RED GOOSE FLIES AT MIDNIGHT", "ABCDEFGHIJKLMNOPQRSTUVWXYZ ABCDEFGH"
    )
    cipher_file = _write(tmp_path / "cipher", cipher_text + "\n")
    assert (
        run_client(Mode.DEC, cipher_file, key, dec_port, "127.0.0.1")
        == "THE RED GOOSE FLIES AT MIDNIGHT"
    )


def test_wrong_server_is_rejected(tmp_path, servers):
    enc_port, _ = servers
    plain = _write(tmp_path / "plain", "HELLO\n")
    key = _write(tmp_path / "key", "WORLD\n")
    with pytest.raises(ClientError) as info:
        run_client(Mode.DEC, plain, key, enc_port, "127.0.0.1")
    assert info.value.exit_code == 2
    assert str(info.value) == "Connected to incompatible server"


def test_short_key_is_rejected_before_connecting(tmp_path):
    plain = _write(tmp_path / "plain", "HELLO WORLD\n")
    key = _write(tmp_path / "key", "ABC\n")
    with pytest.raises(ClientError, match="Key is shorter than plaintext") as info:
        run_client(Mode.ENC, plain, key, _free_port(), "127.0.0.1")
    assert info.value.exit_code == 1


def test_invalid_character_is_rejected(tmp_path):
    plain = _write(tmp_path / "plain", "hello\n")
    key = _write(tmp_path / "key", "ABCDEF\n")
    with pytest.raises(ClientError, match="Invalid character in file"):
        run_client(Mode.ENC, plain, key, _free_port(), "127.0.0.1")


def test_missing_file_is_rejected(tmp_path):
    key = _write(tmp_path / "key", "ABCDEF\n")
    with pytest.raises(ClientError, match="Cannot open file"):
        run_client(Mode.ENC, tmp_path / "absent", key, _free_port(), "127.0.0.1")


def test_refused_connection(tmp_path):
    plain = _write(tmp_path / "plain", "HELLO\n")
    key = _write(tmp_path / "key", "HELLO\n")
    with pytest.raises(ClientError, match="CLIENT: ERROR connecting"):
        run_client(Mode.ENC, plain, key, _free_port(), "127.0.0.1")


def test_enc_main_wrong_argument_count(capsys):
    assert enc_main(["only-one"]) == 1
    assert "Usage: ./enc_client <plaintext> <key> <portNumber>" in capsys.readouterr().err


def test_dec_main_reports_short_key(tmp_path, capsys):
    plain = _write(tmp_path / "plain", "HELLO\n")
    key = _write(tmp_path / "key", "HI\n")
    assert dec_main([str(plain), str(key), str(_free_port())]) == 1
    assert "Client error: Key is shorter than plaintext" in capsys.readouterr().err


def test_enc_main_prints_result(tmp_path, capsys):
    server = OtpServer(Mode.ENC, 0, "")
    port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        plain = _write(tmp_path / "plain", "ATTACK\n")
        key = _write(tmp_path / "key", "AAAAAAAA\n")
        assert enc_main([str(plain), str(key), str(port)]) == 0
    finally:
        server.shutdown()
        server.close()
        thread.join(5)
    assert capsys.readouterr().out == "ATTACK\n"