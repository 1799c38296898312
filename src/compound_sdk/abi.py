"""
Human-readable ABI support.

web3.py binds contracts from JSON ABI only, while callers of this SDK
usually pass a single method signature such as
``"function balanceOf(address owner) view returns (uint256)"``.
This module turns such signatures (and lists of them, compiler artifacts,
or JSON text) into JSON ABI entries.

Example:
    >>> parse_signature("transfer(address to, uint amount) returns (bool)")["inputs"]
    [{'name': 'to', 'type': 'address'}, {'name': 'amount', 'type': 'uint256'}]
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Sequence, Union

from .errors import AbiError

__all__ = ["normalize_abi", "parse_signature", "method_name"]

AbiEntry = Dict[str, Any]
AbiLike = Union[str, Mapping[str, Any], Sequence[Union[str, Mapping[str, Any]]]]

_NAME_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_ARRAY_SUFFIX_RE = re.compile(r"^((?:\[\d*\])*)\s*(.*)$")

_MUTABILITY = {"view", "pure", "payable", "nonpayable"}
_IGNORED_MODIFIERS = {"external", "public", "virtual", "override"}
_LOCATIONS = {"memory", "calldata", "storage"}


def normalize_abi(abi: AbiLike) -> List[AbiEntry]:
    """Turn any supported ABI shape into a list of JSON ABI entries.

    Supported shapes: one signature string, JSON text, a single JSON entry,
    a compiler artifact (mapping with an ``abi`` key), or a sequence mixing
    signature strings and JSON entries.

    Raises:
        AbiError: If the ABI or one of its signatures cannot be parsed.
    """
    if isinstance(abi, str):
        text = abi.strip()
        if text.startswith("[") or text.startswith("{"):
            try:
                return normalize_abi(json.loads(text))
            except json.JSONDecodeError as e:
                raise AbiError(f"invalid JSON ABI: {e}") from e
        return [parse_signature(text)]

    if isinstance(abi, Mapping):
        if "abi" in abi:
            return normalize_abi(abi["abi"])
        if "type" in abi or "name" in abi:
            return [dict(abi)]
        raise AbiError("ABI mapping must be an entry or contain an 'abi' key")

    if isinstance(abi, Sequence):
        entries: List[AbiEntry] = []
        for item in abi:
            if isinstance(item, str):
                entries.append(parse_signature(item))
            elif isinstance(item, Mapping):
                entries.append(dict(item))
            else:
                raise AbiError(f"unsupported ABI item: {item!r}")
        return entries

    raise AbiError(f"unsupported ABI type: {type(abi).__name__}")


def method_name(signature: str) -> str:
    """Return the member name declared by a signature (``name(type,...)``)."""
    return parse_signature(signature)["name"]


def parse_signature(signature: str) -> AbiEntry:
    """Parse a human-readable function or event signature.

    Accepts an optional ``function``/``event`` keyword, named or unnamed
    parameters, tuple types, mutability modifiers and a ``returns`` clause.

    Raises:
        AbiError: If the signature is malformed.
    """
    if not isinstance(signature, str) or not signature.strip():
        raise AbiError("signature must be a non-empty string")

    text = " ".join(signature.split())
    kind = "function"
    for keyword in ("function", "event"):
        if text.startswith(keyword + " "):
            kind = keyword
            text = text[len(keyword) + 1 :]
            break

    open_idx = text.find("(")
    if open_idx <= 0:
        raise AbiError(f"invalid signature: {signature!r}")
    name = text[:open_idx].strip()
    if not _NAME_RE.match(name):
        raise AbiError(f"invalid member name in signature: {signature!r}")

    close_idx = _matching_paren(text, open_idx, signature)
    inputs = [_parse_param(p, signature, kind) for p in _split_params(text[open_idx + 1 : close_idx])]
    tail = text[close_idx + 1 :].strip()

    if kind == "event":
        anonymous = tail == "anonymous"
        if tail and not anonymous:
            raise AbiError(f"unexpected tokens after event: {signature!r}")
        return {"type": "event", "name": name, "inputs": inputs, "anonymous": anonymous}

    outputs: List[AbiEntry] = []
    returns_idx = tail.find("returns")
    if returns_idx >= 0:
        ret = tail[returns_idx + len("returns") :].strip()
        if not ret.startswith("("):
            raise AbiError(f"returns clause must be parenthesized: {signature!r}")
        ret_close = _matching_paren(ret, 0, signature)
        if ret[ret_close + 1 :].strip():
            raise AbiError(f"unexpected tokens after returns: {signature!r}")
        outputs = [_parse_param(p, signature, kind) for p in _split_params(ret[1:ret_close])]
        tail = tail[:returns_idx]

    mutability = "nonpayable"
    for modifier in tail.split():
        if modifier == "constant":
            mutability = "view"
        elif modifier in _MUTABILITY:
            mutability = modifier
        elif modifier not in _IGNORED_MODIFIERS:
            raise AbiError(f"unknown modifier {modifier!r} in {signature!r}")

    return {
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": outputs,
        "stateMutability": mutability,
    }


def _matching_paren(text: str, open_idx: int, signature: str) -> int:
    depth = 0
    for i in range(open_idx, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    raise AbiError(f"unbalanced parentheses in signature: {signature!r}")


def _split_params(text: str) -> List[str]:
    params: List[str] = []
    depth = 0
    current = ""
    for ch in text:
        if ch == "," and depth == 0:
            params.append(current.strip())
            current = ""
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        current += ch
    if current.strip():
        params.append(current.strip())
    elif params:
        raise AbiError(f"trailing comma in parameter list: ({text})")
    return params


def _parse_param(text: str, signature: str, kind: str) -> AbiEntry:
    if not text:
        raise AbiError(f"empty parameter in signature: {signature!r}")

    if text.startswith("(") or text.startswith("tuple("):
        open_idx = text.index("(")
        close_idx = _matching_paren(text, open_idx, signature)
        components = [_parse_param(p, signature, kind) for p in _split_params(text[open_idx + 1 : close_idx])]
        suffix, rest = _ARRAY_SUFFIX_RE.match(text[close_idx + 1 :].strip()).groups()
        param: AbiEntry = {"type": "tuple" + suffix, "components": components}
    else:
        type_, _, rest = text.partition(" ")
        param = {"type": _canonical_type(type_, signature)}

    tokens = [t for t in rest.split() if t not in _LOCATIONS]
    if kind == "event":
        param["indexed"] = "indexed" in tokens
        tokens = [t for t in tokens if t != "indexed"]
    if len(tokens) > 1:
        raise AbiError(f"unexpected tokens {tokens!r} in signature: {signature!r}")
    name = tokens[0] if tokens else ""
    if name and not _NAME_RE.match(name):
        raise AbiError(f"invalid parameter name {name!r} in signature: {signature!r}")
    return {"name": name, **param}


def _canonical_type(type_: str, signature: str) -> str:
    match = re.match(r"^([a-z]+)(\d*(?:x\d+)?)((?:\[\d*\])*)$", type_)
    if not match:
        raise AbiError(f"invalid type {type_!r} in signature: {signature!r}")
    base, bits, suffix = match.groups()
    if base in ("uint", "int") and not bits:
        bits = "256"
    return f"{base}{bits}{suffix}"
