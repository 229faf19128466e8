"""
Command-Line Interface (CLI) for Cryptoscope
XOR cryptanalysis and ECB/CBC operations from the terminal
"""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .core.byte_utils import fixed_xor, hamming_distance, repeating_key_xor, xor_scalar
from .core.engine import INPUT_FORMATS, CryptoscopeEngine
from .core.errors import CryptoscopeError
from .core.presets import AnalysisConfig, PresetLibrary
from .core.xor_breaker import solve_single_byte_xor
from .utils.codecs import bytes_to_base64, hex_to_base64, hex_to_bytes
from .utils.report_generator import ReportGenerator


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands"""
    parser = argparse.ArgumentParser(
        prog='cryptoscope',
        description='Cryptoscope - Repeating-key XOR cryptanalysis and manual CBC mode',
        epilog='Offline analysis tool, not a production cryptographic library. MIT License.'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output JSON only (machine-readable)'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'Cryptoscope v{__version__}'
    )

    sub = parser.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    # Encoding helpers
    p = sub.add_parser('hex-to-base64', help='Re-encode a hex string as base64')
    p.add_argument('hex', help='Hex string')

    p = sub.add_parser('fixed-xor', help='XOR two equal-length hex strings')
    p.add_argument('hex1', help='First hex string')
    p.add_argument('hex2', help='Second hex string')

    p = sub.add_parser('repeating-xor', help='Encrypt text with a repeating XOR key (hex output)')
    p.add_argument('text', help='Plaintext (use - to read stdin)')
    p.add_argument('--key', required=True, help='XOR key text')

    p = sub.add_parser('hamming', help='Bit-level Hamming distance between two strings')
    p.add_argument('text1')
    p.add_argument('text2')

    # XOR analysis
    p = sub.add_parser('single-xor', help='Solve single-byte XOR on a hex string')
    p.add_argument('hex', help='Hex ciphertext')

    p = sub.add_parser('detect-xor', help='Find the single-byte XOR line in a file of hex lines')
    p.add_argument('input', help='File with one hex ciphertext per line')

    p = sub.add_parser('break-xor', help='Break repeating-key XOR ciphertext in a file')
    p.add_argument('input', help='Ciphertext file')
    p.add_argument(
        '--format',
        choices=INPUT_FORMATS,
        default='base64',
        help='Input encoding (default: base64)'
    )
    p.add_argument(
        '--preset',
        choices=PresetLibrary.list_presets(),
        default='baseline',
        help='Key-size search preset (default: baseline)'
    )
    p.add_argument(
        '--candidates',
        type=int,
        metavar='N',
        help='Number of best-ranked key sizes to try (overrides preset)'
    )
    p.add_argument(
        '--out',
        type=str,
        help='Output directory for JSON, plaintext and Markdown report'
    )

    p = sub.add_parser('detect-ecb', help='Find ECB-encrypted lines in a file of hex lines')
    p.add_argument('input', help='File with one hex ciphertext per line')
    p.add_argument('--block-size', type=int, default=16, metavar='N', help='Block size (default: 16)')

    # Block modes
    for name, verb in (('ecb-encrypt', 'Encrypt'), ('ecb-decrypt', 'Decrypt'),
                       ('cbc-encrypt', 'Encrypt'), ('cbc-decrypt', 'Decrypt')):
        mode = name[:3].upper()
        p = sub.add_parser(name, help=f'{verb} a file with AES-{mode}')
        p.add_argument('input', help='Input file')
        p.add_argument('--key', required=True, help='Key text (16, 24 or 32 bytes)')
        if mode == 'CBC':
            p.add_argument('--iv', help='IV as hex (default: all zeros)')
        p.add_argument(
            '--format',
            choices=INPUT_FORMATS,
            default='raw' if name.endswith('encrypt') else 'base64',
            help='Input encoding'
        )
        p.add_argument('--no-padding', action='store_true', help='Skip PKCS#7 padding')

    return parser


def main(argv=None):
    """
    Main CLI entry point

    Handles argument parsing and dispatches to the selected command
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        output = run_command(args)
    except KeyboardInterrupt:
        print(f"\n\n[!] Interrupted by user", file=sys.stderr)
        sys.exit(130)
    except (CryptoscopeError, ValueError, OSError) as e:
        print(f"[!] Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(output, indent=2))
    else:
        for key, value in output.items():
            if key == 'key_size_scores':
                continue
            if isinstance(value, list):
                for item in value:
                    print(f"    {item}")
                continue
            print(f"[+] {key}: {value}")


def run_command(args) -> dict:
    """
    Execute one subcommand

    Returns:
        Dictionary of results for display
    """
    command = args.command

    if command == 'hex-to-base64':
        return {'base64': hex_to_base64(args.hex)}

    if command == 'fixed-xor':
        return {'hex': fixed_xor(hex_to_bytes(args.hex1), hex_to_bytes(args.hex2)).hex()}

    if command == 'repeating-xor':
        text = sys.stdin.read() if args.text == '-' else args.text
        return {'hex': repeating_key_xor(text.encode('utf-8'), args.key.encode('utf-8')).hex()}

    if command == 'hamming':
        return {'distance': hamming_distance(args.text1.encode('utf-8'), args.text2.encode('utf-8'))}

    if command == 'single-xor':
        data = hex_to_bytes(args.hex)
        scored = solve_single_byte_xor(data)
        if scored is None:
            raise ValueError("Empty ciphertext")
        return {
            'key': scored.key,
            'key_char': chr(scored.key),
            'score': scored.score,
            'plaintext': xor_scalar(data, scored.key).decode('utf-8', errors='replace')
        }

    engine = CryptoscopeEngine(config=_config_from_args(args), verbose=not args.json)

    if command == 'detect-xor':
        lines = [hex_to_bytes(line) for line in _read_lines(args.input)]
        detection = engine.detect_single_xor(lines)
        if detection is None:
            raise ValueError(f"No ciphertext lines in {args.input}")
        return {
            'line': detection.index,
            'key': detection.key,
            'score': detection.score,
            'plaintext': detection.plaintext.decode('utf-8', errors='replace')
        }

    if command == 'break-xor':
        if not args.json:
            print_banner()
        result = engine.break_file(args.input, args.format)
        if args.out:
            report = ReportGenerator().generate_markdown(result, title=Path(args.input).stem,
                                                         source=args.input)
            engine.export_results(result, args.out, Path(args.input).stem, markdown_report=report)
        output = result.to_dict()
        output['key_size_scores'] = output['key_size_scores'][:10]
        return output

    if command == 'detect-ecb':
        lines = [hex_to_bytes(line) for line in _read_lines(args.input)]
        findings = engine.detect_ecb(lines)
        return {'suspected': len(findings), 'findings': findings}

    if command in ('ecb-encrypt', 'ecb-decrypt'):
        data = CryptoscopeEngine.read_input(args.input, args.format)
        key = args.key.encode('utf-8')
        if command == 'ecb-encrypt':
            cipher = engine.ecb_encrypt(data, key, pad=not args.no_padding)
            return {'base64': bytes_to_base64(cipher)}
        plain = engine.ecb_decrypt(data, key, unpad=not args.no_padding)
        return {'plaintext': plain.decode('utf-8', errors='replace')}

    if command in ('cbc-encrypt', 'cbc-decrypt'):
        data = CryptoscopeEngine.read_input(args.input, args.format)
        key = args.key.encode('utf-8')
        iv = hex_to_bytes(args.iv) if args.iv else None
        if command == 'cbc-encrypt':
            cipher = engine.cbc_encrypt(data, key, iv, pad=not args.no_padding)
            return {'base64': bytes_to_base64(cipher)}
        plain = engine.cbc_decrypt(data, key, iv, unpad=not args.no_padding)
        return {'plaintext': plain.decode('utf-8', errors='replace')}

    raise ValueError(f"Unknown command: {command}")


def _config_from_args(args) -> AnalysisConfig:
    """Build AnalysisConfig from preset/override flags"""
    overrides = {}
    # Zero and negative values go through so AnalysisConfig can reject them
    if getattr(args, 'candidates', None) is not None:
        overrides['key_size_candidates'] = args.candidates
    if getattr(args, 'block_size', None) is not None:
        overrides['block_size'] = args.block_size
    return AnalysisConfig.from_preset(getattr(args, 'preset', 'baseline'), **overrides)


def _read_lines(path: str):
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return [line.strip() for line in input_path.read_text(encoding='utf-8').splitlines() if line.strip()]


def print_banner():
    """Print ASCII banner"""
    banner = f"""
╔═╗┬─┐┬ ┬┌─┐┌┬┐┌─┐┌─┐┌─┐┌─┐┌─┐┌─┐
║  ├┬┘└┬┘├─┘ │ │ │└─┐│  │ │├─┘├┤
╚═╝┴└─ ┴ ┴   ┴ └─┘└─┘└─┘└─┘┴  └─┘

Repeating-key XOR + CBC Toolkit
Version {__version__} | MIT License
"""
    print(banner)


if __name__ == '__main__':
    main()
