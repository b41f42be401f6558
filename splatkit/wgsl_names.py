"""Name handling for shader modules: demangling composed names and mapping WGSL types."""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import PurePosixPath

DECORATION_PRE = "X_naga_oil_mod_X"
DECORATION_POST = "X"

_UNDECORATE = re.compile(
    r"(\x1B\[\d+\w)?([\w\d_]+)"
    + re.escape(DECORATION_PRE)
    + r"([A-Z0-9]*)"
    + re.escape(DECORATION_POST)
)

_RUST_TYPES = {
    "i32": "i32",
    "u32": "u32",
    "f32": "f32",
    "atomic<u32>": "u32",
    "atomic<i32>": "i32",
    "vec2<f32>": "[f32; 2]",
    "vec4<f32>": "[f32; 4]",
    "mat4x4<f32>": "[[f32; 4]; 4]",
    "vec2<u32>": "[u32; 2]",
    "vec2<i32>": "[i32; 2]",
    "vec3<u32>": "[u32; 4]",
    "vec3<f32>": "[f32; 4]",
    "vec4<u32>": "[u32; 4]",
}

_ALIGNMENTS = {
    **dict.fromkeys(("i32", "u32", "f32", "atomic<u32>", "atomic<i32>"), 4),
    **dict.fromkeys(("vec2<f32>", "vec2<u32>", "vec2<i32>"), 8),
    **dict.fromkeys(("vec3<f32>", "vec4<f32>", "mat4x4<f32>", "vec4<u32>"), 16),
}


def _file_stem(text: str) -> str | None:
    if not text:
        return None
    name = PurePosixPath(text).name
    if name in ("", ".", ".."):
        return None
    before, dot, _ = name.rpartition(".")
    if not dot or not before:
        return name
    return before


def make_valid_rust_import(value: str) -> str:
    """Turn a quoted import path such as ``"../helpers.wgsl"`` into a module name."""
    cleaned = value.replace('"../', "").replace('"', "")
    stem = _file_stem(cleaned)
    return cleaned if stem is None else stem


def decode(text: str) -> str:
    """Decode unpadded base32 text into a UTF-8 string; ValueError if it is malformed."""
    padded = text + "=" * (-len(text) % 8)
    try:
        raw = base64.b32decode(padded)
    except binascii.Error as exc:
        raise ValueError(f"invalid base32 text: {text!r}") from exc
    if base64.b32encode(raw).decode("ascii").rstrip("=") != text:
        raise ValueError(f"invalid base32 text: {text!r}")
    return raw.decode("utf-8")


def demangle_str(text: str) -> str:
    """Replace every decorated name in ``text`` with ``module::name``."""

    def replace(match: re.Match[str]) -> str:
        prefix = match.group(1) or ""
        module = make_valid_rust_import(decode(match.group(3)))
        return f"{prefix}{module}::{match.group(2)}"

    return _UNDECORATE.sub(replace, text)


def mod_name_from_mangled(text: str) -> tuple[str, str]:
    """Split a mangled name into its module path (maybe empty) and its plain name."""
    parts = demangle_str(text).split("::")
    name = parts.pop()
    return "::".join(parts), name


def rust_type_name(wgsl_name: str) -> str:
    """The plain-data type matching a WGSL type; ValueError for unsupported types."""
    try:
        return _RUST_TYPES[wgsl_name]
    except KeyError:
        raise ValueError(wgsl_name) from None


def alignment_of(wgsl_name: str) -> int:
    """Byte alignment of a WGSL type; ValueError for unsupported types."""
    try:
        return _ALIGNMENTS[wgsl_name]
    except KeyError:
        raise ValueError(wgsl_name) from None