"""Payload validation: raw dict in, typed schema out, or a ValidationError.

Only shape and range are checked here. Uniqueness and reference existence
belong to the guards and run after this layer succeeds.
"""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel

from rental_inventory.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

FIELD_LABELS = {
    "code": "Kode produk",
    "name": "Nama",
    "description": "Deskripsi",
    "size": "Ukuran",
    "modalAwal": "Modal awal",
    "hargaSewa": "Harga sewa",
    "quantity": "Jumlah",
    "categoryId": "ID kategori",
    "materialId": "ID material",
    "colorId": "ID warna",
    "materialQuantity": "Jumlah material",
    "color": "Warna",
    "hexCode": "Kode warna",
    "pricePerUnit": "Harga per unit",
    "unit": "Satuan",
    "status": "Status",
    "page": "Page",
    "limit": "Limit",
    "search": "Search",
}


def validate_payload(model: type[ModelT], payload: Mapping[str, Any] | BaseModel) -> ModelT:
    """Parse ``payload`` into ``model``.

    Raises:
        ValidationError: with one ``{"field", "message"}`` entry per violation
    """
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)

    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        details = [_describe(error) for error in e.errors()]
        raise ValidationError("Validasi gagal", details) from e


def _describe(error: Mapping[str, Any]) -> dict[str, str]:
    loc = error.get("loc") or ()
    field = ".".join(str(part) for part in loc) or "payload"
    label = FIELD_LABELS.get(str(loc[0]) if loc else "", field)
    return {"field": field, "message": _message(error, label)}


def _message(error: Mapping[str, Any], label: str) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"{label} wajib diisi"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} tidak boleh kosong"
        return f"{label} minimal {ctx.get('min_length')} karakter"
    if kind == "string_too_long":
        return f"{label} maksimal {ctx.get('max_length')} karakter"
    if kind == "greater_than":
        return f"{label} harus lebih besar dari {ctx.get('gt')}"
    if kind == "greater_than_equal":
        return f"{label} minimal {ctx.get('ge')}"
    if kind in ("less_than_equal", "less_than"):
        return f"{label} maksimal {ctx.get('le', ctx.get('lt'))}"
    if kind.startswith(("int_", "float_")):
        return f"{label} harus berupa angka"
    if kind.startswith("uuid"):
        return f"Format {label} tidak valid"
    if kind in ("literal_error", "enum"):
        return f"{label} harus salah satu dari {ctx.get('expected')}"
    return f"{label}: {error.get('msg', 'tidak valid')}"
