#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Safe64 v3 invariants (randomized property checks).
#
# This runner:
# - generates random byte strings, texts and JSON-eligible maps
# - checks round-trip, alphabet and header invariants against the Python binding
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, base64, random
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

import safe64
from safe64 import Format, Transcoder, Type

SEED = int(os.environ.get("SAFE64_SEED", "1337"))
TRIALS = int(os.environ.get("SAFE64_TRIALS", "2000"))
MAX_GEN_DEPTH = int(os.environ.get("SAFE64_GEN_MAX_DEPTH", "4"))
MAX_KEYS = int(os.environ.get("SAFE64_GEN_MAX_KEYS", "6"))
MAX_STR = int(os.environ.get("SAFE64_GEN_MAX_STR", "24"))
MAX_BYTES = int(os.environ.get("SAFE64_GEN_MAX_BYTES", "48"))

random.seed(SEED)

def rand_text() -> str:
    # Scalars only; surrogates are not valid UTF-8 text.
    out = []
    for _ in range(random.randint(0, MAX_STR)):
        r = random.random()
        if r < 0.70:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.90:
            out.append(chr(random.randint(0xA0, 0xD7FF)))
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_bytes() -> bytes:
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, MAX_BYTES)))

def gen_value(depth: int) -> Any:
    if depth >= MAX_GEN_DEPTH:
        return rand_text()
    r = random.random()
    if r < 0.35:
        d: Dict[str, Any] = {}
        for _ in range(random.randint(0, MAX_KEYS)):
            d[rand_text()] = gen_value(depth + 1)
        return d
    if r < 0.55:
        return [gen_value(depth + 1) for _ in range(random.randint(0, MAX_KEYS))]
    if r < 0.75:
        return random.randint(-2**53, 2**53)
    if r < 0.85:
        return random.choice([True, False, None])
    return rand_text()

def rand_transcoder() -> Transcoder:
    return Transcoder(
        format=random.choice([Format.JSON, Format.MSGPACK, Format.PICKLE]),
        type=Type.MAP,
        legacy_padding=random.random() < 0.5,
        add_header=True,
        full_header=random.random() < 0.3,
    )

def fail(label: str, ctx: Any) -> int:
    print("INVARIANT FAIL:", label)
    print("CTX:", repr(ctx)[:2000])
    return 1

def main() -> int:
    for t in range(TRIALS):
        data = rand_bytes()
        b64 = base64.b64encode(data).decode("ascii")

        # (1) Alphabet invertibility, both padding modes
        for legacy in (False, True):
            if safe64.to_base64(safe64.from_base64(b64, legacy)) != b64:
                return fail("alphabet invertibility", {"trial": t, "data": data, "legacy": legacy})

        # (2) Padding interop: either convention, either decoder mode
        for legacy in (False, True):
            for strict in (False, True):
                if safe64.decode_bytes(safe64.encode_bytes(data, legacy), strict) != data:
                    return fail("padding interop", {"trial": t, "legacy": legacy, "strict": strict})

        # (3) Header never swallows body characters
        for fmt in Format:
            enc = Transcoder(format=fmt, type=random.choice(list(Type))).encode(data)
            if safe64.strip_header(enc) != safe64.encode_bytes(data):
                return fail("header/body split", {"trial": t, "format": fmt, "encoded": enc})

        # (4) strip_header idempotence
        once = safe64.strip_header(enc)
        if safe64.strip_header(once) != once:
            return fail("strip_header idempotence", {"trial": t, "encoded": enc})

        # (5) Text round trip without header, including bodies that
        # start like a header ("IPA" encodes to "SVBB")
        plain = Transcoder(format=Format.NONE, add_header=False)
        for s in (rand_text(), "IPA" + rand_text()):
            if plain.decode(plain.encode(s)) != s:
                return fail("text round trip", {"trial": t, "text": s})

        # (6) Structured round trip, decoded by a differently configured instance
        root = gen_value(0)
        if not isinstance(root, dict):
            root = {"root": root}
        enc = rand_transcoder().encode(root)
        if Transcoder(format=Format.NONE, type=Type.MAP).decode(enc) != root:
            return fail("structured round trip", {"trial": t, "encoded": enc})

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
