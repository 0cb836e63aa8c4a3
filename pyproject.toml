[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "padcrypt"
version = "0.1.0"
description = "One-time pad encryption over TCP: key generator, encryption and decryption servers and clients"
requires-python = ">=3.10"
dependencies = []
keywords = ["one-time pad", "otp", "cipher", "socket", "server", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
padcrypt-keygen = "padcrypt.keygen:main"
padcrypt-enc-server = "padcrypt.server:enc_main"
padcrypt-dec-server = "padcrypt.server:dec_main"
padcrypt-enc-client = "padcrypt.client:enc_main"
padcrypt-dec-client = "padcrypt.client:dec_main"

[tool.hatch.build.targets.wheel]
packages = ["padcrypt"]

[tool.pytest.ini_options]
addopts = "-ra"
