"""
Persisted record schemas.

Pydantic models describing the JSON shape of every object the vault hands to
a storage backend. Field names on the wire are camelCase; Python attributes
are snake_case.
"""

from __future__ import annotations
from typing import Any, Dict, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, StrictBool, StrictStr, ValidationError

from .runtime.errors import MalformedRecordError

RecordT = TypeVar("RecordT", bound=BaseModel)


class HDKeyRecord(BaseModel):
    """Serialized HD key: identifier, absolute path and private scalar."""
    id: UUID
    path: StrictStr
    private_scalar: StrictStr = Field(alias="privateScalar", pattern=r"^[0-9a-fA-F]{64}$")

    model_config = {"populate_by_name": True}


class KeyVaultRecord(BaseModel):
    """
    Serialized vault (portfolio).

    The master key and storage context are not part of the record; they are
    rebuilt from the stored seed when the vault is opened.
    """
    id: UUID
    enable_simple_signer: StrictBool = Field(alias="enableSimpleSigner")
    index_mapper: Dict[StrictStr, UUID] = Field(alias="indexMapper")

    model_config = {"populate_by_name": True}


class WalletRecord(BaseModel):
    """Serialized HD wallet."""
    id: UUID
    name: StrictStr
    path: StrictStr
    key: HDKeyRecord

    model_config = {"populate_by_name": True}


class AccountRecord(BaseModel):
    """Serialized validator account."""
    id: UUID
    wallet_id: UUID = Field(alias="walletId")
    name: StrictStr
    validation_key: HDKeyRecord = Field(alias="validationKey")
    withdrawal_pub_key: StrictStr = Field(alias="withdrawalPubKey", pattern=r"^[0-9a-fA-F]{96}$")

    model_config = {"populate_by_name": True}


def parse_record(model: Type[RecordT], data: Any) -> RecordT:
    """
    Validate a raw record against its schema.

    Args:
        model: Record schema
        data: Decoded JSON object

    Returns:
        Validated record

    Raises:
        MalformedRecordError: naming the first missing field, or describing
            the first invalid one
    """
    if not isinstance(data, dict):
        raise MalformedRecordError(f"record must be an object, got {type(data).__name__}")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        for error in errors:
            if error["type"] == "missing":
                field = ".".join(str(part) for part in error["loc"])
                raise MalformedRecordError(f"could not find var: {field}", cause=e)
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"])
        raise MalformedRecordError(
            f"invalid var {field}: {first['msg']}",
            details={"field": field, "type": first["type"]},
            cause=e
        )


def dump_record(record: BaseModel) -> Dict[str, Any]:
    """Convert a record to a JSON-compatible dictionary using wire names."""
    return record.model_dump(mode="json", by_alias=True)


__all__ = [
    "HDKeyRecord",
    "KeyVaultRecord",
    "WalletRecord",
    "AccountRecord",
    "parse_record",
    "dump_record",
]
