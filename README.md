# padcrypt

A small one-time pad toolkit that works over TCP. Messages use a 27-character
alphabet: the capital letters `A`–`Z` and the space. The toolkit has:

- a key generator that prints random keys,
- an encryption server and a decryption server,
- matching clients that send a message file and a key file to a server and
  print what comes back.

The encryption client talks only to the encryption server, and the decryption
client talks only to the decryption server. A handshake at the start of each
connection enforces this.

## Installation

```
pip install .
```

## Usage

Generate a key at least as long as the message:

```
padcrypt-keygen 1024 > mykey
```

The key is printed on standard output followed by a newline. A missing or
non-positive length prints an error and exits with status 1.

Start the servers on two ports:

```
padcrypt-enc-server 57171 &
padcrypt-dec-server 57172 &
```

The servers listen on all interfaces and serve each client on its own
thread. The encryption server handles at most five clients at a time; the
decryption server has no such limit. A problem with one client is written to
standard error as `Client error: ...` and the server keeps running. Stop a
server with Ctrl-C.

Encrypt a file, then decrypt the result:

```
padcrypt-enc-client plaintext mykey 57171 > ciphertext
padcrypt-dec-client ciphertext mykey 57172
```

The clients connect to `localhost` on the given port. Input files may contain
only capital letters, spaces and newlines. Newlines are dropped before the
text is sent. The client stops with an error (status 1) and does not connect
if a file cannot be read, holds any other character, or if the key is shorter
than the message. A client connected to the wrong kind of server exits with
status 2.

## Library use

```python
from padcrypt.cipher import encrypt, decrypt
from padcrypt.keygen import generate_key

key = generate_key(11)
secret = encrypt("HELLO WORLD", key)
assert decrypt(secret, key) == "HELLO WORLD"
```

`generate_key` draws from `random.SystemRandom` unless a `random.Random`
instance is passed as `rng`. `encrypt` and `decrypt` raise
`padcrypt.cipher.CipherError` when the key is shorter than the text and
`InvalidCharacterError` for characters outside the alphabet.
`padcrypt.cipher.read_message_file` reads and checks an input file the way
the clients do.

`padcrypt.protocol` has the length-prefixed message framing
(`send_message`, `receive_message`) and the handshakes (`client_handshake`,
`server_handshake`) for the two services in `Mode.ENC` and `Mode.DEC`.

A server and a client can be embedded in your own program:

```python
import threading

from padcrypt.client import run_client
from padcrypt.protocol import Mode
from padcrypt.server import OtpServer

with OtpServer(Mode.ENC, 0, "127.0.0.1") as server:
    threading.Thread(target=server.serve_forever, daemon=True).start()
    host, port = server.server_address
    print(run_client(Mode.ENC, "plaintext", "mykey", port, host))
    server.shutdown()
```

`run_client` raises `padcrypt.client.ClientError`, whose `exit_code` is the
status the command-line client would exit with.

## Limits

The pad arithmetic and the traffic are not protected in any other way: there
is no transport encryption or authentication beyond the handshake, and each
connection carries exactly one message and one key.

## Running the tests

```
pip install .[test]
pytest
```