"""Derive the node's BLS public key from its proof of possession."""

from __future__ import annotations

from dataclasses import replace

from py_ecc.bls import G2ProofOfPossession
from py_ecc.bls.g2_primitives import pubkey_to_G1
from py_ecc.optimized_bls12_381 import normalize

from .envelope import Response
from .errors import RPCError
from .models import BlsPublicKey, GetNodeIdResult, ProofOfPossession

COMPRESSED_PUBKEY_LEN = 48


def _strip_0x(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def load_pubkey(pop: ProofOfPossession) -> BlsPublicKey:
    """Decompress and validate the 48-byte compressed G1 public key."""
    try:
        compressed = bytes.fromhex(_strip_0x(pop.public_key))
    except ValueError as exc:
        raise ValueError(f"public key is not hex: {exc}") from exc
    if len(compressed) != COMPRESSED_PUBKEY_LEN:
        raise ValueError(f"public key must be {COMPRESSED_PUBKEY_LEN} bytes, got {len(compressed)}")
    # rejects points off the curve, the point at infinity and points outside the subgroup
    if not G2ProofOfPossession.KeyValidate(compressed):
        raise ValueError("public key is not a valid BLS12-381 G1 point")
    x, y = normalize(pubkey_to_G1(compressed))
    return BlsPublicKey(compressed=compressed, x=x.n, y=y.n)


def attach_pubkey(response: Response[GetNodeIdResult]) -> Response[GetNodeIdResult]:
    """Return a copy of ``response`` whose proof of possession carries the derived key."""
    result = response.result
    if result is None:
        raise RPCError("no result found")
    pop = result.node_pop
    if pop is None:
        raise RPCError("no result.node_pop found")
    try:
        pubkey = load_pubkey(pop)
    except ValueError as exc:
        raise RPCError(f"failed to load proof-of-possession public key '{exc}'", cause=exc) from exc
    return replace(response, result=replace(result, node_pop=replace(pop, pubkey=pubkey)))
