"""
Protobuf encoding for the VSS ``ListKeyVersionsRequest`` message.

The message descriptor is assembled at import time and registered in a
private descriptor pool, so no generated ``_pb2`` module is needed::

    message ListKeyVersionsRequest {
      string store_id = 1;
      optional string key_prefix = 2;
      optional int32 page_size = 3;
      optional string page_token = 4;
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

CONTENT_TYPE = "application/x-protobuf"

_PACKAGE = "vss"
_MESSAGE_NAME = "ListKeyVersionsRequest"

_Field = descriptor_pb2.FieldDescriptorProto


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="vss_auth_probe/vss.proto",
        package=_PACKAGE,
        syntax="proto3",
    )
    message = file_proto.message_type.add(name=_MESSAGE_NAME)
    message.field.add(
        name="store_id",
        json_name="storeId",
        number=1,
        type=_Field.TYPE_STRING,
        label=_Field.LABEL_OPTIONAL,
    )

    # proto3 ``optional`` fields each live in a synthetic oneof named ``_<field>``
    optional_fields = [
        ("key_prefix", "keyPrefix", 2, _Field.TYPE_STRING),
        ("page_size", "pageSize", 3, _Field.TYPE_INT32),
        ("page_token", "pageToken", 4, _Field.TYPE_STRING),
    ]
    for index, (name, json_name, number, field_type) in enumerate(optional_fields):
        message.oneof_decl.add(name=f"_{name}")
        message.field.add(
            name=name,
            json_name=json_name,
            number=number,
            type=field_type,
            label=_Field.LABEL_OPTIONAL,
            oneof_index=index,
            proto3_optional=True,
        )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file_descriptor().SerializeToString())

ListKeyVersionsMessage = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{_PACKAGE}.{_MESSAGE_NAME}")
)


@dataclass(frozen=True)
class ListKeyVersionsRequest:
    """Request body for the ``listKeyVersions`` operation."""

    store_id: str
    key_prefix: str | None = None
    page_size: int | None = None
    page_token: str | None = None

    def to_message(self) -> Any:
        """Build the protobuf message, leaving unset optionals absent from the wire."""
        fields: dict[str, Any] = {"store_id": self.store_id}
        if self.key_prefix is not None:
            fields["key_prefix"] = self.key_prefix
        if self.page_size is not None:
            fields["page_size"] = self.page_size
        if self.page_token is not None:
            fields["page_token"] = self.page_token
        return ListKeyVersionsMessage(**fields)

    def encode(self) -> bytes:
        return self.to_message().SerializeToString()
