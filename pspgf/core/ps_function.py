# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript Function Evaluation

Function dictionaries of types 0 (Sampled, one input), 2 (Exponential
Interpolation) and 3 (Stitching) as defined in PLRM Section 3.10. Shading
dictionaries use them to map the shading parameter t to color components.
Type 4 (calculator) functions are not supported.
"""

from __future__ import annotations

from . import error as ps_error
from . import types as ps


def evaluate_function(func: ps.PSObject, inputs: list[float]) -> list[float]:
    """
    Evaluate a function dictionary, or an array of one-output function
    dictionaries whose results are concatenated.
    """
    if func.TYPE == ps.T_ARRAY:
        results = []
        for sub_func in func.items():
            results.extend(_evaluate_single(sub_func, inputs))
        return results
    return _evaluate_single(func, inputs)


def _evaluate_single(func_dict: ps.PSObject, inputs: list[float]) -> list[float]:
    d = func_dict.to_dict()
    func_type = _get_int(d, b"FunctionType", None)

    domain = _get_float_array(d, b"Domain")
    if len(domain) < 2 * len(inputs):
        raise ps_error.PSError(ps_error.RANGECHECK, detail="function Domain too short")
    clamped_inputs = [
        max(domain[i * 2], min(domain[i * 2 + 1], val)) for i, val in enumerate(inputs)
    ]

    if func_type == 0:
        outputs = _eval_type0(d, clamped_inputs)
    elif func_type == 2:
        outputs = _eval_type2(d, clamped_inputs)
    elif func_type == 3:
        outputs = _eval_type3(d, clamped_inputs)
    elif func_type == 4:
        raise ps_error.PSError(ps_error.UNIMPLEMENTED, detail="FunctionType 4")
    else:
        raise ps_error.PSError(ps_error.RANGECHECK, detail=f"FunctionType {func_type}")

    range_arr = _get_float_array(d, b"Range", [])
    if range_arr:
        for i in range(min(len(outputs), len(range_arr) // 2)):
            outputs[i] = max(range_arr[i * 2], min(range_arr[i * 2 + 1], outputs[i]))
    return outputs


def _eval_type2(d: ps.Dict, inputs: list[float]) -> list[float]:
    """
    Type 2: Exponential Interpolation.
    y_j = C0_j + x^N * (C1_j - C0_j)
    """
    x = inputs[0]
    n = _get_float(d, b"N")
    c0 = _get_float_array(d, b"C0", [0.0])
    c1 = _get_float_array(d, b"C1", [1.0])
    if len(c0) != len(c1):
        raise ps_error.PSError(ps_error.RANGECHECK, detail="C0 and C1 differ in length")

    if n == 1.0:
        factor = x
    elif n == 0.0:
        factor = 1.0
    elif x == 0.0:
        factor = 0.0
    else:
        factor = x ** n

    return [c0[j] + factor * (c1[j] - c0[j]) for j in range(len(c0))]


def _eval_type0(d: ps.Dict, inputs: list[float]) -> list[float]:
    """Type 0: one-input sampled function with linear interpolation."""
    if len(inputs) != 1:
        raise ps_error.PSError(ps_error.UNIMPLEMENTED, detail="multi-input sampled function")
    size = _get_int_array(d, b"Size")
    bps = _get_int(d, b"BitsPerSample")
    domain = _get_float_array(d, b"Domain")
    range_arr = _get_float_array(d, b"Range")
    encode = _get_float_array(d, b"Encode", [0.0, float(size[0] - 1)])
    decode = _get_float_array(d, b"Decode", range_arr)
    n_outputs = len(range_arr) // 2

    source = d.get_bytes(b"DataSource")
    if source is None or source.TYPE != ps.T_STRING:
        raise ps_error.PSError(ps_error.TYPECHECK, detail="DataSource must be a string")
    data = source.byte_string()

    x = inputs[0]
    d_min, d_max = domain[0], domain[1]
    enc = encode[0]
    if d_max != d_min:
        enc = encode[0] + (x - d_min) / (d_max - d_min) * (encode[1] - encode[0])
    enc = max(0.0, min(float(size[0] - 1), enc))
    i0 = int(enc)
    i1 = min(i0 + 1, size[0] - 1)
    frac = enc - i0

    lo = _read_samples(data, i0 * n_outputs, n_outputs, bps)
    hi = _read_samples(data, i1 * n_outputs, n_outputs, bps)
    max_sample = (1 << bps) - 1
    outputs = []
    for j in range(n_outputs):
        sample = lo[j] + frac * (hi[j] - lo[j])
        outputs.append(decode[j * 2] + sample / max_sample * (decode[j * 2 + 1] - decode[j * 2]))
    return outputs


def _eval_type3(d: ps.Dict, inputs: list[float]) -> list[float]:
    """
    Type 3: Stitching function.
    Chains sub-functions across domain partitions.
    """
    x = inputs[0]
    functions = d.get_bytes(b"Functions")
    if functions is None or functions.TYPE != ps.T_ARRAY:
        raise ps_error.PSError(ps_error.TYPECHECK, detail="Functions must be an array")
    func_list = functions.items()
    bounds = _get_float_array(d, b"Bounds")
    encode = _get_float_array(d, b"Encode")
    domain = _get_float_array(d, b"Domain")
    n = len(func_list)
    if n == 0 or len(bounds) != n - 1 or len(encode) != 2 * n:
        raise ps_error.PSError(ps_error.RANGECHECK, detail="inconsistent stitching function")

    k = 0
    for i in range(len(bounds)):
        if x < bounds[i]:
            break
        k = i + 1
    k = min(k, n - 1)

    sub_lo = domain[0] if k == 0 else bounds[k - 1]
    sub_hi = domain[1] if k == len(bounds) else bounds[k]

    e_min = encode[k * 2]
    e_max = encode[k * 2 + 1]
    if sub_hi != sub_lo:
        encoded_x = e_min + ((x - sub_lo) / (sub_hi - sub_lo)) * (e_max - e_min)
    else:
        encoded_x = e_min

    return _evaluate_single(func_list[k], [encoded_x])


def _read_samples(data: bytes, sample_offset: int, count: int, bps: int) -> list[float]:
    """Read `count` big-endian samples of `bps` bits starting at sample_offset."""
    results = []
    mask = (1 << bps) - 1
    for i in range(count):
        bit_pos = (sample_offset + i) * bps
        byte_idx = bit_pos // 8
        n_bytes = (bit_pos % 8 + bps + 7) // 8
        chunk = data[byte_idx:byte_idx + n_bytes]
        if len(chunk) < n_bytes:
            raise ps_error.PSError(ps_error.RANGECHECK, detail="DataSource too short")
        val = int.from_bytes(chunk, "big")
        shift = n_bytes * 8 - bit_pos % 8 - bps
        results.append(float((val >> shift) & mask))
    return results


# Helper functions for extracting values from PostScript dictionaries

def _get_int(d: ps.Dict, key: bytes, default: int | None = 0) -> int | None:
    obj = d.get_bytes(key)
    if obj is None:
        return default
    return obj.to_int()


def _get_float(d: ps.Dict, key: bytes, default: float = 0.0) -> float:
    obj = d.get_bytes(key)
    if obj is None:
        return default
    return obj.to_real()


def _get_int_array(d: ps.Dict, key: bytes) -> list[int]:
    obj = d.get_bytes(key)
    if obj is None:
        raise ps_error.PSError(ps_error.UNDEFINED, detail=key.decode("latin-1"))
    return [item.to_int() for item in obj.to_array().items()]


def _get_float_array(d: ps.Dict, key: bytes, default: list[float] | None = None) -> list[float]:
    obj = d.get_bytes(key)
    if obj is None:
        if default is None:
            raise ps_error.PSError(ps_error.UNDEFINED, detail=key.decode("latin-1"))
        return default
    return obj.to_array().to_floats()
