"""
Tests for the orchestration engine and report generation
"""

import base64
import json

import pytest
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad

from cryptoscope.core.engine import CryptoscopeEngine
from cryptoscope.core.errors import InvalidBlockAlignmentError
from cryptoscope.core.presets import AnalysisConfig
from cryptoscope.core.byte_utils import xor_scalar
from cryptoscope.utils.report_generator import ReportGenerator

KEY = b"YELLOW SUBMARINE"


def test_break_repeating_xor(xor_ciphertext, english_text, corpus_key):
    engine = CryptoscopeEngine(AnalysisConfig.from_preset("thorough"))
    result = engine.break_repeating_xor(xor_ciphertext)
    assert result.plaintext == english_text
    assert result.key[:len(corpus_key)] == corpus_key


def test_verbose_engine_prints_progress(xor_ciphertext, capsys):
    CryptoscopeEngine(verbose=True).break_repeating_xor(xor_ciphertext)
    out = capsys.readouterr().out
    assert "[*] Ranking key sizes" in out
    assert "[+] Recovered" in out


def test_quiet_engine_prints_nothing(xor_ciphertext, capsys):
    CryptoscopeEngine().break_repeating_xor(xor_ciphertext)
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("input_format", ["base64", "hex", "raw"])
def test_break_file_formats(tmp_path, xor_ciphertext, english_text, input_format):
    path = tmp_path / "cipher.txt"
    if input_format == "base64":
        encoded = base64.b64encode(xor_ciphertext).decode()
        path.write_text("\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)))
    elif input_format == "hex":
        path.write_text(xor_ciphertext.hex())
    else:
        path.write_bytes(xor_ciphertext)

    result = CryptoscopeEngine().break_file(path, input_format)
    assert result.plaintext == english_text


def test_read_input_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        CryptoscopeEngine.read_input(tmp_path / "missing.txt")
    with pytest.raises(ValueError):
        CryptoscopeEngine.read_input(tmp_path / "missing.txt", "rot13")


def test_detect_single_xor():
    lines = [b"\x01\x92\xf3\x10" * 8, xor_scalar(b"Now that the party is jumping", 0x35)]
    detection = CryptoscopeEngine().detect_single_xor(lines)
    assert detection.index == 1
    assert detection.key == 0x35


def test_detect_ecb_reports_repeat_counts():
    ecb = AES.new(KEY, AES.MODE_ECB).encrypt(b"B" * 64)
    findings = CryptoscopeEngine().detect_ecb([bytes(range(64)), ecb])
    assert findings == [{'index': 1, 'repeated_blocks': 3}]


def test_cbc_with_padding_round_trip():
    engine = CryptoscopeEngine()
    plain = b"For sale: baby shoes, never worn!"
    cipher = engine.cbc_encrypt(plain, KEY, pad=True)
    assert len(cipher) == 48
    assert cipher == AES.new(KEY, AES.MODE_CBC, bytes(16)).encrypt(plain + bytes([15]) * 15)
    assert engine.cbc_decrypt(cipher, KEY, unpad=True) == plain


def test_cbc_without_padding_requires_alignment():
    with pytest.raises(InvalidBlockAlignmentError):
        CryptoscopeEngine().cbc_encrypt(b"odd length", KEY)


def test_export_results(tmp_path, xor_ciphertext, english_text):
    engine = CryptoscopeEngine()
    result = engine.break_repeating_xor(xor_ciphertext)
    report = ReportGenerator().generate_markdown(result, title="corpus", source="cipher.txt")
    engine.export_results(result, tmp_path / "out", "corpus", markdown_report=report)

    summary = json.loads((tmp_path / "out" / "corpus.json").read_text())
    assert summary['key_hex'] == result.key.hex()
    assert (tmp_path / "out" / "corpus.txt").read_bytes() == english_text
    assert (tmp_path / "out" / "corpus_report.md").read_text().startswith("# Cryptoscope Report: corpus")


def test_report_contents(xor_ciphertext):
    result = CryptoscopeEngine().break_repeating_xor(xor_ciphertext)
    report = ReportGenerator(preview_length=40, ranking_rows=3).generate_markdown(result)

    assert result.key.hex() in report
    assert "**(selected)**" in report
    assert "## Key Size Ranking" in report
    assert report.count("\n| ") >= 3
    assert "\n...\n```" in report


def test_ecb_with_padding_matches_library():
    engine = CryptoscopeEngine()
    plain = b"Play that funky music, white boy"
    cipher = engine.ecb_encrypt(plain, KEY, pad=True)
    assert cipher == AES.new(KEY, AES.MODE_ECB).encrypt(plain + bytes([16]) * 16)
    assert engine.ecb_decrypt(cipher, KEY, unpad=True) == plain


def test_ecb_decrypt_base64_file(tmp_path):
    plain = b"I'm back and I'm ringin' the bell \nA rockin' on the mike while the fly girls yell\n"
    cipher = AES.new(KEY, AES.MODE_ECB).encrypt(pad(plain, 16))
    encoded = base64.b64encode(cipher).decode()
    path = tmp_path / "7.txt"
    path.write_text("\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)))

    data = CryptoscopeEngine.read_input(path, "base64")
    assert CryptoscopeEngine().ecb_decrypt(data, KEY, unpad=True) == plain


def test_export_writes_utf8(tmp_path):
    engine = CryptoscopeEngine()
    result = engine.break_repeating_xor(xor_scalar(b"\xff\xfe" + b"plain words here" * 4, 0x20))
    report = "# Preview\n\ufffd\ufffd plain words\n"
    engine.export_results(result, tmp_path, "odd", markdown_report=report)

    assert (tmp_path / "odd_report.md").read_bytes() == report.encode('utf-8')
    assert json.loads((tmp_path / "odd.json").read_text(encoding='utf-8'))['key_size'] >= 2


def test_engine_config_rejects_zero_block_size():
    with pytest.raises(ValueError):
        CryptoscopeEngine(AnalysisConfig.from_preset("baseline", block_size=0))
