"""
Decodificador (y codificador) del formato wire protobuf de RadarFrame.

Esquema proto3:
    message Timestamp {
        int64 seconds = 1;
        int32 nanos = 2;
    }
    message RadarFrame {
        string ProductName = 1;
        uint32 RadialCount = 2;
        uint32 GateCount = 3;
        repeated float Gates = 4;      // packed
        float StartAzimuthAngle = 5;
        Timestamp Date = 6;
        double Longitude = 7;
        double Latitude = 8;
    }

Se decodifica el wire format directamente, sin librería protobuf.
"""
from __future__ import annotations

import logging
import struct
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import numpy as np

from ..core.errors import DecodeError
from ..models import RadarFrame

logger = logging.getLogger(__name__)

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH = 2
WIRE_FIXED32 = 5

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _decode_varint(buf: memoryview, pos: int) -> Tuple[int, int]:
    """Decodifica un varint desde pos. Devuelve (valor, nueva_pos)."""
    result = 0
    shift = 0
    while pos < len(buf):
        b = buf[pos]
        pos += 1
        result |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            return result, pos
        shift += 7
        if shift >= 64:
            raise DecodeError("Varint demasiado largo")
    raise DecodeError("Varint truncado")


def _to_int64(val: int) -> int:
    # int64 de proto3 usa complemento a dos dentro del varint
    if val > 0x7FFFFFFFFFFFFFFF:
        val -= 0x10000000000000000
    return val


def _take(buf: memoryview, pos: int, size: int, field_number: int) -> Tuple[memoryview, int]:
    end = pos + size
    if end > len(buf):
        raise DecodeError(f"Campo {field_number} truncado: faltan {end - len(buf)} bytes")
    return buf[pos:end], end


def _skip_field(buf: memoryview, pos: int, wire_type: int, field_number: int) -> int:
    """Saltea un campo desconocido según su wire type."""
    if wire_type == WIRE_VARINT:
        _, pos = _decode_varint(buf, pos)
    elif wire_type == WIRE_FIXED64:
        _, pos = _take(buf, pos, 8, field_number)
    elif wire_type == WIRE_LENGTH:
        length, pos = _decode_varint(buf, pos)
        _, pos = _take(buf, pos, length, field_number)
    elif wire_type == WIRE_FIXED32:
        _, pos = _take(buf, pos, 4, field_number)
    else:
        raise DecodeError(f"Wire type desconocido {wire_type} en campo {field_number}")
    return pos


def _expect(wire_type: int, expected: int, field_number: int) -> None:
    if wire_type != expected:
        raise DecodeError(
            f"Campo {field_number} con wire type {wire_type}, se esperaba {expected}"
        )


def _decode_timestamp(buf: memoryview) -> datetime:
    seconds = 0
    nanos = 0
    pos = 0
    while pos < len(buf):
        tag, pos = _decode_varint(buf, pos)
        field_number, wire_type = tag >> 3, tag & 0x07
        if field_number == 1:
            _expect(wire_type, WIRE_VARINT, field_number)
            val, pos = _decode_varint(buf, pos)
            seconds = _to_int64(val)
        elif field_number == 2:
            _expect(wire_type, WIRE_VARINT, field_number)
            val, pos = _decode_varint(buf, pos)
            nanos = _to_int64(val)
        else:
            pos = _skip_field(buf, pos, wire_type, field_number)
    try:
        return _EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)
    except OverflowError as e:
        raise DecodeError(f"Timestamp fuera de rango: {seconds}s") from e


def decode_frame(raw: bytes | bytearray | memoryview) -> RadarFrame:
    """
    Parsea los bytes descomprimidos de un RadarFrame.

    Los campos ausentes quedan en su default (None para nombre y conteos).

    Raises:
        DecodeError: bytes fuera de esquema o mensaje truncado.
    """
    buf = memoryview(raw)
    pos = 0

    product_name: Optional[str] = None
    radial_count: Optional[int] = None
    gate_count: Optional[int] = None
    gate_chunks: List[np.ndarray] = []
    start_azimuth = 0.0
    date: Optional[datetime] = None
    longitude = 0.0
    latitude = 0.0

    while pos < len(buf):
        tag, pos = _decode_varint(buf, pos)
        field_number, wire_type = tag >> 3, tag & 0x07
        if field_number == 0:
            raise DecodeError("Número de campo 0 inválido")

        if field_number == 1:
            _expect(wire_type, WIRE_LENGTH, field_number)
            length, pos = _decode_varint(buf, pos)
            data, pos = _take(buf, pos, length, field_number)
            try:
                product_name = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(f"ProductName no es UTF-8 válido: {e}") from e

        elif field_number in (2, 3):
            _expect(wire_type, WIRE_VARINT, field_number)
            val, pos = _decode_varint(buf, pos)
            val &= 0xFFFFFFFF  # uint32
            if field_number == 2:
                radial_count = val
            else:
                gate_count = val

        elif field_number == 4:
            if wire_type == WIRE_LENGTH:
                length, pos = _decode_varint(buf, pos)
                data, pos = _take(buf, pos, length, field_number)
                if length % 4:
                    raise DecodeError(f"Gates empaquetados con longitud {length} no múltiplo de 4")
                gate_chunks.append(np.frombuffer(data, dtype="<f4"))
            elif wire_type == WIRE_FIXED32:
                # proto3 acepta también repeated float sin empaquetar
                data, pos = _take(buf, pos, 4, field_number)
                gate_chunks.append(np.frombuffer(data, dtype="<f4"))
            else:
                _expect(wire_type, WIRE_LENGTH, field_number)

        elif field_number == 5:
            _expect(wire_type, WIRE_FIXED32, field_number)
            data, pos = _take(buf, pos, 4, field_number)
            (start_azimuth,) = _FLOAT.unpack(data)

        elif field_number == 6:
            _expect(wire_type, WIRE_LENGTH, field_number)
            length, pos = _decode_varint(buf, pos)
            data, pos = _take(buf, pos, length, field_number)
            date = _decode_timestamp(data)

        elif field_number in (7, 8):
            _expect(wire_type, WIRE_FIXED64, field_number)
            data, pos = _take(buf, pos, 8, field_number)
            (val,) = _DOUBLE.unpack(data)
            if field_number == 7:
                longitude = val
            else:
                latitude = val

        else:
            pos = _skip_field(buf, pos, wire_type, field_number)

    gates = (
        np.concatenate(gate_chunks).astype(np.float32)
        if gate_chunks else np.empty(0, dtype=np.float32)
    )

    logger.debug(
        "RadarFrame decodificado: producto=%r radiales=%s gates=%s valores=%d",
        product_name, radial_count, gate_count, gates.size,
    )

    return RadarFrame(
        product_name=product_name,
        radial_count=radial_count,
        gate_count=gate_count,
        gates=gates,
        start_azimuth_angle=start_azimuth,
        date=date,
        longitude=longitude,
        latitude=latitude,
    )


# ------------------------------
# Codificación
# ------------------------------

def _encode_varint(val: int) -> bytes:
    if val < 0:
        val += 1 << 64
    out = bytearray()
    while True:
        b = val & 0x7F
        val >>= 7
        if val:
            out.append(b | 0x80)
        else:
            out.append(b)
            return bytes(out)


def _tag(field_number: int, wire_type: int) -> bytes:
    return _encode_varint((field_number << 3) | wire_type)


def _length_delimited(field_number: int, payload: bytes) -> bytes:
    return _tag(field_number, WIRE_LENGTH) + _encode_varint(len(payload)) + payload


def _encode_timestamp(date: datetime) -> bytes:
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    delta = date - _EPOCH
    seconds = delta.days * 86400 + delta.seconds
    nanos = delta.microseconds * 1000
    out = _tag(1, WIRE_VARINT) + _encode_varint(seconds)
    if nanos:
        out += _tag(2, WIRE_VARINT) + _encode_varint(nanos)
    return out


def encode_frame(frame: RadarFrame) -> bytes:
    """Serializa un RadarFrame al wire format (inversa de decode_frame)."""
    out = bytearray()
    if frame.product_name is not None:
        out += _length_delimited(1, frame.product_name.encode("utf-8"))
    if frame.radial_count is not None:
        out += _tag(2, WIRE_VARINT) + _encode_varint(frame.radial_count)
    if frame.gate_count is not None:
        out += _tag(3, WIRE_VARINT) + _encode_varint(frame.gate_count)
    if frame.gates.size:
        out += _length_delimited(4, frame.gates.astype("<f4").tobytes())
    out += _tag(5, WIRE_FIXED32) + _FLOAT.pack(frame.start_azimuth_angle)
    if frame.date is not None:
        out += _length_delimited(6, _encode_timestamp(frame.date))
    out += _tag(7, WIRE_FIXED64) + _DOUBLE.pack(frame.longitude)
    out += _tag(8, WIRE_FIXED64) + _DOUBLE.pack(frame.latitude)
    return bytes(out)
