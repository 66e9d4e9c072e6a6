# -*- coding: utf-8 -*-
# Protocol buffer messages for learnlink/proto/chat.proto.
#
# The file descriptor is assembled from descriptor_pb2 at import time instead
# of being embedded as serialized bytes, so the package builds without a
# protoc step. Keep the tables below in sync with chat.proto; test_chat_pb2
# compiles chat.proto with grpc_tools and compares the two.
"""Message classes and enums for the LearnLink chat protocol."""
from google.protobuf import descriptor_pb2 as _descriptor_pb2
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import symbol_database as _symbol_database
from google.protobuf.internal import builder as _builder

_sym_db = _symbol_database.Default()

_FIELD = _descriptor_pb2.FieldDescriptorProto
_PACKAGE = "learnlink"

_EVENT_TYPES = [
    "EVENT_UNSPECIFIED",
    "JOIN_GROUP",
    "LEAVE_GROUP",
    "SEND_MESSAGE",
    "RECEIVE_MESSAGE",
    "ERROR",
    "GROUP_DELETED",
    "PING",
]

# message name -> [(field name, field type, repeated, referenced type)]
_MESSAGES = [
    ("ChatEnvelope", [
        ("type", _FIELD.TYPE_ENUM, False, "EventType"),
        ("group_id", _FIELD.TYPE_STRING, False, None),
        ("message", _FIELD.TYPE_STRING, False, None),
        ("user", _FIELD.TYPE_STRING, False, None),
        ("created_at", _FIELD.TYPE_STRING, False, None),
    ]),
    ("Group", [
        ("id", _FIELD.TYPE_STRING, False, None),
        ("name", _FIELD.TYPE_STRING, False, None),
        ("description", _FIELD.TYPE_STRING, False, None),
        ("tags", _FIELD.TYPE_STRING, True, None),
        ("created_by", _FIELD.TYPE_STRING, False, None),
        ("joined_users", _FIELD.TYPE_STRING, True, None),
        ("created_ts", _FIELD.TYPE_INT64, False, None),
        ("updated_ts", _FIELD.TYPE_INT64, False, None),
    ]),
    ("CreateGroupRequest", [
        ("name", _FIELD.TYPE_STRING, False, None),
        ("description", _FIELD.TYPE_STRING, False, None),
        ("tags", _FIELD.TYPE_STRING, True, None),
        ("creator_user_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("JoinGroupRequest", [
        ("group_id", _FIELD.TYPE_STRING, False, None),
        ("user_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("LeaveGroupRequest", [
        ("group_id", _FIELD.TYPE_STRING, False, None),
        ("user_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("DeleteGroupRequest", [
        ("group_id", _FIELD.TYPE_STRING, False, None),
        ("requester_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("DeleteGroupResponse", [
        ("success", _FIELD.TYPE_BOOL, False, None),
    ]),
    ("ListGroupsRequest", []),
    ("ListUserGroupsRequest", [
        ("user_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("ListGroupsResponse", [
        ("groups", _FIELD.TYPE_MESSAGE, True, "Group"),
    ]),
    ("Resource", [
        ("id", _FIELD.TYPE_STRING, False, None),
        ("title", _FIELD.TYPE_STRING, False, None),
        ("link", _FIELD.TYPE_STRING, False, None),
        ("description", _FIELD.TYPE_STRING, False, None),
        ("tags", _FIELD.TYPE_STRING, True, None),
        ("likes", _FIELD.TYPE_INT64, False, None),
        ("user_id", _FIELD.TYPE_STRING, False, None),
        ("created_ts", _FIELD.TYPE_INT64, False, None),
    ]),
    ("ListResourcesRequest", []),
    ("ListResourcesResponse", [
        ("resources", _FIELD.TYPE_MESSAGE, True, "Resource"),
    ]),
    ("CreateResourceRequest", [
        ("title", _FIELD.TYPE_STRING, False, None),
        ("link", _FIELD.TYPE_STRING, False, None),
        ("description", _FIELD.TYPE_STRING, False, None),
        ("tags", _FIELD.TYPE_STRING, True, None),
        ("user_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("DeleteResourceRequest", [
        ("resource_id", _FIELD.TYPE_STRING, False, None),
        ("requester_id", _FIELD.TYPE_STRING, False, None),
    ]),
    ("DeleteResourceResponse", [
        ("success", _FIELD.TYPE_BOOL, False, None),
    ]),
    ("LikeResourceRequest", [
        ("resource_id", _FIELD.TYPE_STRING, False, None),
    ]),
]

# service name -> [(method, input, output, client streaming, server streaming)]
_SERVICES = [
    ("ChatService", [
        ("CreateGroup", "CreateGroupRequest", "Group", False, False),
        ("JoinGroup", "JoinGroupRequest", "Group", False, False),
        ("LeaveGroup", "LeaveGroupRequest", "Group", False, False),
        ("DeleteGroup", "DeleteGroupRequest", "DeleteGroupResponse", False, False),
        ("ListGroups", "ListGroupsRequest", "ListGroupsResponse", False, False),
        ("ListUserGroups", "ListUserGroupsRequest", "ListGroupsResponse", False, False),
        ("OpenStream", "ChatEnvelope", "ChatEnvelope", True, True),
    ]),
    ("ResourceService", [
        ("ListResources", "ListResourcesRequest", "ListResourcesResponse", False, False),
        ("CreateResource", "CreateResourceRequest", "Resource", False, False),
        ("DeleteResource", "DeleteResourceRequest", "DeleteResourceResponse", False, False),
        ("LikeResource", "LikeResourceRequest", "Resource", False, False),
    ]),
]


def _qualified(name):
    return f".{_PACKAGE}.{name}"


def _build_file_proto():
    file_proto = _descriptor_pb2.FileDescriptorProto(
        name="learnlink/proto/chat.proto",
        package=_PACKAGE,
        syntax="proto3",
    )

    enum_proto = file_proto.enum_type.add(name="EventType")
    for number, name in enumerate(_EVENT_TYPES):
        enum_proto.value.add(name=name, number=number)

    for message_name, fields in _MESSAGES:
        message_proto = file_proto.message_type.add(name=message_name)
        for number, (field_name, field_type, repeated, type_name) in enumerate(fields, start=1):
            field_proto = message_proto.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=_FIELD.LABEL_REPEATED if repeated else _FIELD.LABEL_OPTIONAL,
            )
            if type_name:
                field_proto.type_name = _qualified(type_name)

    for service_name, methods in _SERVICES:
        service_proto = file_proto.service.add(name=service_name)
        for method_name, input_type, output_type, client_streaming, server_streaming in methods:
            service_proto.method.add(
                name=method_name,
                input_type=_qualified(input_type),
                output_type=_qualified(output_type),
                client_streaming=client_streaming,
                server_streaming=server_streaming,
            )

    return file_proto


DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(_build_file_proto().SerializeToString())

_globals = globals()
_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _globals)
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, 'learnlink.proto.chat_pb2', _globals)
