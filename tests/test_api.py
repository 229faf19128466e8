"""
Tests for the FastAPI interface
"""

import base64
import inspect

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from Crypto.Cipher import AES
from fastapi.testclient import TestClient

from cryptoscope.interfaces import api
from cryptoscope.interfaces.api import app

client = TestClient(app)


def test_root_and_health():
    assert client.get("/").json()["service"] == "Cryptoscope API"
    assert client.get("/health").json()["status"] == "healthy"


def test_break_xor(xor_ciphertext, english_text):
    response = client.post("/break-xor", data={
        "ciphertext": base64.b64encode(xor_ciphertext).decode(),
        "preset": "thorough",
    })
    assert response.status_code == 200
    assert response.json()["plaintext"] == english_text.decode()


def test_break_xor_bad_preset(xor_ciphertext):
    response = client.post("/break-xor", data={
        "ciphertext": base64.b64encode(xor_ciphertext).decode(),
        "preset": "nonexistent",
    })
    assert response.status_code == 400


def test_single_xor():
    response = client.post("/single-xor", data={
        "ciphertext": "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"
    })
    assert response.json()["key"] == ord('X')


def test_cbc_round_trip():
    encrypted = client.post("/cbc/encrypt", data={"plaintext": "Play that funky music", "key": "YELLOW SUBMARINE"})
    assert encrypted.status_code == 200

    decrypted = client.post("/cbc/decrypt", data={
        "ciphertext": encrypted.json()["ciphertext"],
        "key": "YELLOW SUBMARINE",
    })
    assert decrypted.json()["plaintext"] == "Play that funky music"


def test_cbc_bad_key_is_client_error():
    response = client.post("/cbc/encrypt", data={"plaintext": "abc", "key": "short"})
    assert response.status_code == 400


def test_detect_ecb():
    repeated = (b"\x11" * 16 * 3).hex()
    response = client.post("/detect-ecb", data={"ciphertexts": f"{bytes(range(48)).hex()}\n{repeated}\n"})
    body = response.json()
    assert body["total"] == 2
    assert body["findings"] == [{"index": 1, "repeated_blocks": 2}]


def test_ecb_decrypt_matches_library():
    cipher = AES.new(b"YELLOW SUBMARINE", AES.MODE_ECB).encrypt(b"Ice Ice Baby" + bytes([4]) * 4)
    response = client.post("/ecb/decrypt", data={
        "ciphertext": base64.b64encode(cipher).decode(),
        "key": "YELLOW SUBMARINE",
    })
    assert response.json()["plaintext"] == "Ice Ice Baby"


def test_ecb_encrypt_bad_key_is_client_error():
    response = client.post("/ecb/encrypt", data={"plaintext": "abc", "key": "short"})
    assert response.status_code == 400


def test_cpu_bound_endpoints_run_in_threadpool():
    for endpoint in (api.break_xor, api.single_xor, api.detect_ecb, api.ecb_encrypt,
                     api.ecb_decrypt, api.cbc_encrypt, api.cbc_decrypt):
        assert not inspect.iscoroutinefunction(endpoint)


def test_break_xor_zero_candidates_rejected(xor_ciphertext):
    response = client.post("/break-xor", data={
        "ciphertext": base64.b64encode(xor_ciphertext).decode(),
        "candidates": "0",
    })
    assert response.status_code == 400
