"""
Core Analysis Engine
Coordinates the XOR breaker, ECB detector and CBC chainer under one configuration
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from Crypto.Util.Padding import pad as pkcs7_pad, unpad as pkcs7_unpad

from .cbc import (
    AesEcbPrimitive, CBCChainer, CipherContext, EcbPrimitive, ecb_decrypt, ecb_encrypt
)
from .ecb_detector import count_repeated_blocks
from .presets import AnalysisConfig
from .xor_breaker import BreakResult, SingleXorDetection, XORBreaker, detect_single_byte_xor
from ..utils.codecs import base64_to_bytes, hex_to_bytes

INPUT_FORMATS = ("base64", "hex", "raw")


class CryptoscopeEngine:
    """
    Main engine that wires modules to a shared AnalysisConfig

    Workflow for repeating-key XOR:
    1. Rank candidate key sizes by normalized Hamming distance
    2. Transpose ciphertext into one column per key position
    3. Solve each column as single-byte XOR
    4. Keep the key whose plaintext scores best
    """

    def __init__(self, config: Optional[AnalysisConfig] = None,
                 primitive: Optional[EcbPrimitive] = None,
                 verbose: bool = False):
        """
        Args:
            config: Analysis configuration (defaults to the baseline preset)
            primitive: ECB primitive for CBC operations (AES by default)
            verbose: Print progress messages
        """
        self.config = config or AnalysisConfig()
        self.primitive = primitive or AesEcbPrimitive()
        self.verbose = verbose
        self.breaker = XORBreaker(
            key_sizes=self.config.key_sizes,
            candidates=self.config.key_size_candidates,
            encoding=self.config.text_encoding
        )

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def break_repeating_xor(self, data: bytes) -> BreakResult:
        """
        Recover key and plaintext from repeating-key XOR ciphertext

        Args:
            data: Ciphertext bytes

        Returns:
            BreakResult with key, plaintext and the key-size ranking
        """
        self._log(f"[*] Ranking key sizes {self.config.key_size_min}-{self.config.key_size_max - 1} "
                  f"over {len(data)} bytes...")
        result = self.breaker.break_ciphertext(data)

        top = ", ".join(f"{s.key_size} ({s.score:.3f})" for s in result.key_size_scores[:5])
        self._log(f"    Best key sizes: {top}")
        self._log(f"[+] Recovered {result.key_size}-byte key: {result.key!r}")
        return result

    def break_file(self, file_path: Union[str, Path], input_format: str = "base64") -> BreakResult:
        """
        Break repeating-key XOR ciphertext stored in a file

        Args:
            file_path: Path to ciphertext file
            input_format: "base64", "hex" or "raw"
        """
        return self.break_repeating_xor(self.read_input(file_path, input_format))

    def detect_single_xor(self, lines: Sequence[bytes]) -> Optional[SingleXorDetection]:
        """Find the input most likely encrypted with single-byte XOR"""
        self._log(f"[*] Scoring {len(lines)} candidate lines...")
        detection = detect_single_byte_xor(lines, self.config.text_encoding)
        if detection is not None:
            self._log(f"[+] Line {detection.index}, key 0x{detection.key:02x}, score {detection.score}")
        return detection

    def detect_ecb(self, ciphertexts: Sequence[bytes]) -> List[Dict]:
        """
        Report ciphertexts with repeated blocks

        Returns:
            One entry per suspected ECB ciphertext: index and repeated block count
        """
        block_size = self.config.block_size
        self._log(f"[*] Checking {len(ciphertexts)} ciphertexts for repeated {block_size}-byte blocks...")
        findings = []
        for index, data in enumerate(ciphertexts):
            repeated = count_repeated_blocks(data, block_size)
            if repeated:
                findings.append({'index': index, 'repeated_blocks': repeated})
        self._log(f"[+] {len(findings)} suspected ECB ciphertext(s)")
        return findings

    def _chainer(self, key: bytes, iv: Optional[bytes]) -> CBCChainer:
        block_size = self.config.block_size
        context = CipherContext(
            key=key,
            iv=iv if iv is not None else bytes(block_size),
            block_size=block_size,
            primitive=self.primitive
        )
        return CBCChainer(context)

    def cbc_encrypt(self, plain: bytes, key: bytes, iv: Optional[bytes] = None,
                    pad: bool = False) -> bytes:
        """
        CBC-encrypt, optionally applying PKCS#7 padding first

        A missing IV means an all-zero block.
        """
        if pad:
            plain = pkcs7_pad(plain, self.config.block_size)
        return self._chainer(key, iv).encrypt(plain)

    def cbc_decrypt(self, cipher: bytes, key: bytes, iv: Optional[bytes] = None,
                    unpad: bool = False) -> bytes:
        """CBC-decrypt, optionally stripping PKCS#7 padding afterwards"""
        plain = self._chainer(key, iv).decrypt(cipher)
        if unpad:
            plain = pkcs7_unpad(plain, self.config.block_size)
        return plain

    def ecb_encrypt(self, plain: bytes, key: bytes, pad: bool = False) -> bytes:
        """ECB-encrypt, optionally applying PKCS#7 padding first"""
        if pad:
            plain = pkcs7_pad(plain, self.config.block_size)
        return ecb_encrypt(plain, key, self.primitive, self.config.block_size)

    def ecb_decrypt(self, cipher: bytes, key: bytes, unpad: bool = False) -> bytes:
        """ECB-decrypt, optionally stripping PKCS#7 padding afterwards"""
        plain = ecb_decrypt(cipher, key, self.primitive, self.config.block_size)
        if unpad:
            plain = pkcs7_unpad(plain, self.config.block_size)
        return plain

    @staticmethod
    def read_input(file_path: Union[str, Path], input_format: str = "base64") -> bytes:
        """
        Read ciphertext from a file

        Args:
            file_path: Path to input file
            input_format: "base64", "hex" or "raw"

        Returns:
            Decoded bytes
        """
        file_path = Path(file_path)
        if input_format not in INPUT_FORMATS:
            raise ValueError(f"Unknown input format: {input_format}. Available: {list(INPUT_FORMATS)}")
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if input_format == "raw":
            return file_path.read_bytes()

        text = file_path.read_text(encoding='utf-8')
        if input_format == "hex":
            return hex_to_bytes("".join(text.split()))
        return base64_to_bytes(text)

    def export_results(self, result: BreakResult, output_dir: Union[str, Path], base_name: str,
                       markdown_report: Optional[str] = None):
        """
        Write break results to files

        Args:
            result: BreakResult to export
            output_dir: Directory to write output files
            base_name: Base name for output files
            markdown_report: Optional rendered report to save alongside
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        json_file = output_path / f"{base_name}.json"
        with open(json_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2)
        self._log(f"[+] JSON summary: {json_file}")

        plain_file = output_path / f"{base_name}.txt"
        plain_file.write_bytes(result.plaintext)
        self._log(f"[+] Plaintext: {plain_file}")

        if markdown_report is not None:
            report_file = output_path / f"{base_name}_report.md"
            report_file.write_text(markdown_report, encoding='utf-8')
            self._log(f"[+] Markdown report: {report_file}")
