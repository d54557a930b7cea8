"""Conversions between LUX sub-denominations.

X/P-chain amounts are in nano-LUX (10^9 per LUX); C-chain and other EVM
subnets use 10^18 per LUX. Conversions saturate instead of overflowing the
fixed-width integers the node uses.
"""

from decimal import Decimal

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

NANO_LUX = 1
MICRO_LUX = 1000 * NANO_LUX
MILLI_LUX = 1000 * MICRO_LUX
LUX = 1000 * MILLI_LUX
KILO_LUX = 1000 * LUX
MEGA_LUX = 1000 * KILO_LUX
LUX_EVM_CHAIN = 1000 * MEGA_LUX

U64_MAX = 2**64 - 1
I64_MAX = 2**63 - 1
U256_MAX = 2**256 - 1

_XP_UNIT = 10**9
_EVM_UNIT = 10**18


def cast_xp_nlux_to_lux(nlux: int) -> int:
    return min(nlux // _XP_UNIT, U64_MAX)


def cast_lux_to_xp_nlux(lux: int) -> int:
    return min(lux * _XP_UNIT, U256_MAX)


def cast_evm_nlux_to_lux_i64(nlux: int) -> int:
    return min(nlux // _EVM_UNIT, I64_MAX)


def cast_lux_to_evm_nlux(lux: int) -> int:
    return min(lux * _EVM_UNIT, U256_MAX)


def xp_nlux_to_decimal(nlux: int) -> Decimal:
    return Decimal(nlux) / Decimal(_XP_UNIT)
