"""
FastAPI REST API Interface
Programmatic access to Cryptoscope for automation and integration
"""

from typing import Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.byte_utils import xor_scalar
from ..core.engine import CryptoscopeEngine
from ..core.errors import CryptoscopeError
from ..core.presets import AnalysisConfig
from ..core.xor_breaker import solve_single_byte_xor
from ..utils.codecs import base64_to_bytes, bytes_to_base64, hex_to_bytes


# Initialize FastAPI app
app = FastAPI(
    title="Cryptoscope API",
    description="Repeating-key XOR cryptanalysis and manual ECB/CBC modes",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Default engine (baseline preset)
engine = CryptoscopeEngine()


def _bad_request(e: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))


@app.get("/")
async def root():
    """
    API root endpoint - service info
    """
    return {
        "service": "Cryptoscope API",
        "version": __version__,
        "status": "operational",
        "endpoints": {
            "break_xor": "/break-xor",
            "single_xor": "/single-xor",
            "ecb_encrypt": "/ecb/encrypt",
            "ecb_decrypt": "/ecb/decrypt",
            "cbc_encrypt": "/cbc/encrypt",
            "cbc_decrypt": "/cbc/decrypt",
            "detect_ecb": "/detect-ecb",
            "health": "/health",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring
    """
    return {
        "status": "healthy",
        "service": "cryptoscope-api",
        "version": __version__
    }


@app.post("/break-xor")
def break_xor(
    ciphertext: str = Form(..., description="Base64-encoded repeating-key XOR ciphertext"),
    preset: Optional[str] = Form("baseline", description="Key-size search preset"),
    candidates: Optional[int] = Form(None, description="Number of key sizes to try")
):
    """
    Recover the key and plaintext of repeating-key XOR ciphertext

    Example:
    ```bash
    curl -X POST "http://localhost:8000/break-xor" \
         -F "ciphertext=$(cat 6.txt)" -F "preset=thorough"
    ```
    """
    try:
        overrides = {'key_size_candidates': candidates} if candidates is not None else {}
        config = AnalysisConfig.from_preset(preset or "baseline", **overrides)
        result = CryptoscopeEngine(config=config).break_repeating_xor(base64_to_bytes(ciphertext))
    except (CryptoscopeError, ValueError) as e:
        raise _bad_request(e)

    response = result.to_dict()
    response['key_size_scores'] = response['key_size_scores'][:10]
    return response


@app.post("/single-xor")
def single_xor(
    ciphertext: str = Form(..., description="Hex-encoded single-byte XOR ciphertext")
):
    """
    Solve single-byte XOR by English frequency scoring
    """
    try:
        data = hex_to_bytes(ciphertext)
    except ValueError as e:
        raise _bad_request(e)

    scored = solve_single_byte_xor(data)
    if scored is None:
        raise HTTPException(status_code=400, detail="Empty ciphertext")

    return {
        "key": scored.key,
        "score": scored.score,
        "plaintext": xor_scalar(data, scored.key).decode('utf-8', errors='replace')
    }


@app.post("/ecb/encrypt")
def ecb_encrypt(
    plaintext: str = Form(..., description="Text to encrypt"),
    key: str = Form(..., description="AES key text (16, 24 or 32 bytes)"),
    pad: Optional[bool] = Form(True, description="Apply PKCS#7 padding")
):
    """
    AES-ECB encrypt text, returning base64 ciphertext
    """
    try:
        cipher = engine.ecb_encrypt(plaintext.encode('utf-8'), key.encode('utf-8'), pad=pad)
    except (CryptoscopeError, ValueError) as e:
        raise _bad_request(e)

    return {"ciphertext": bytes_to_base64(cipher)}


@app.post("/ecb/decrypt")
def ecb_decrypt(
    ciphertext: str = Form(..., description="Base64 ciphertext"),
    key: str = Form(..., description="AES key text (16, 24 or 32 bytes)"),
    unpad: Optional[bool] = Form(True, description="Strip PKCS#7 padding")
):
    """
    AES-ECB decrypt base64 ciphertext
    """
    try:
        plain = engine.ecb_decrypt(base64_to_bytes(ciphertext), key.encode('utf-8'), unpad=unpad)
    except (CryptoscopeError, ValueError) as e:
        raise _bad_request(e)

    return {"plaintext": plain.decode('utf-8', errors='replace')}


@app.post("/cbc/encrypt")
def cbc_encrypt(
    plaintext: str = Form(..., description="Text to encrypt"),
    key: str = Form(..., description="AES key text (16, 24 or 32 bytes)"),
    iv: Optional[str] = Form(None, description="IV as hex (default: zeros)"),
    pad: Optional[bool] = Form(True, description="Apply PKCS#7 padding")
):
    """
    AES-CBC encrypt text, returning base64 ciphertext
    """
    try:
        cipher = engine.cbc_encrypt(
            plaintext.encode('utf-8'),
            key.encode('utf-8'),
            hex_to_bytes(iv) if iv else None,
            pad=pad
        )
    except (CryptoscopeError, ValueError) as e:
        raise _bad_request(e)

    return {"ciphertext": bytes_to_base64(cipher)}


@app.post("/cbc/decrypt")
def cbc_decrypt(
    ciphertext: str = Form(..., description="Base64 ciphertext"),
    key: str = Form(..., description="AES key text (16, 24 or 32 bytes)"),
    iv: Optional[str] = Form(None, description="IV as hex (default: zeros)"),
    unpad: Optional[bool] = Form(True, description="Strip PKCS#7 padding")
):
    """
    AES-CBC decrypt base64 ciphertext
    """
    try:
        plain = engine.cbc_decrypt(
            base64_to_bytes(ciphertext),
            key.encode('utf-8'),
            hex_to_bytes(iv) if iv else None,
            unpad=unpad
        )
    except (CryptoscopeError, ValueError) as e:
        raise _bad_request(e)

    return {"plaintext": plain.decode('utf-8', errors='replace')}


@app.post("/detect-ecb")
def detect_ecb(
    ciphertexts: str = Form(..., description="Hex ciphertexts, one per line"),
    block_size: Optional[int] = Form(16, description="Cipher block size")
):
    """
    Flag ciphertexts with repeated blocks (ECB mode)
    """
    try:
        lines = [hex_to_bytes(line) for line in ciphertexts.splitlines() if line.strip()]
        detector = CryptoscopeEngine(config=AnalysisConfig(block_size=block_size))
    except ValueError as e:
        raise _bad_request(e)

    findings = detector.detect_ecb(lines)
    return {"total": len(lines), "suspected": len(findings), "findings": findings}


# Run server with: uvicorn cryptoscope.interfaces.api:app --reload --host 0.0.0.0 --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
