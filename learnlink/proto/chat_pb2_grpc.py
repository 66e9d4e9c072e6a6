# gRPC client and server bindings for learnlink/proto/chat.proto.
"""Client and server classes corresponding to the LearnLink services."""
import grpc

from . import chat_pb2 as chat__pb2


class ChatServiceStub(object):
    """Group membership and real-time room messaging."""

    def __init__(self, channel):
        """Constructor.

        Args:
            channel: A grpc.Channel (or grpc.aio.Channel).
        """
        self.CreateGroup = channel.unary_unary(
                '/learnlink.ChatService/CreateGroup',
                request_serializer=chat__pb2.CreateGroupRequest.SerializeToString,
                response_deserializer=chat__pb2.Group.FromString,
                )
        self.JoinGroup = channel.unary_unary(
                '/learnlink.ChatService/JoinGroup',
                request_serializer=chat__pb2.JoinGroupRequest.SerializeToString,
                response_deserializer=chat__pb2.Group.FromString,
                )
        self.LeaveGroup = channel.unary_unary(
                '/learnlink.ChatService/LeaveGroup',
                request_serializer=chat__pb2.LeaveGroupRequest.SerializeToString,
                response_deserializer=chat__pb2.Group.FromString,
                )
        self.DeleteGroup = channel.unary_unary(
                '/learnlink.ChatService/DeleteGroup',
                request_serializer=chat__pb2.DeleteGroupRequest.SerializeToString,
                response_deserializer=chat__pb2.DeleteGroupResponse.FromString,
                )
        self.ListGroups = channel.unary_unary(
                '/learnlink.ChatService/ListGroups',
                request_serializer=chat__pb2.ListGroupsRequest.SerializeToString,
                response_deserializer=chat__pb2.ListGroupsResponse.FromString,
                )
        self.ListUserGroups = channel.unary_unary(
                '/learnlink.ChatService/ListUserGroups',
                request_serializer=chat__pb2.ListUserGroupsRequest.SerializeToString,
                response_deserializer=chat__pb2.ListGroupsResponse.FromString,
                )
        self.OpenStream = channel.stream_stream(
                '/learnlink.ChatService/OpenStream',
                request_serializer=chat__pb2.ChatEnvelope.SerializeToString,
                response_deserializer=chat__pb2.ChatEnvelope.FromString,
                )


class ChatServiceServicer(object):
    """Group membership and real-time room messaging."""

    def CreateGroup(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def JoinGroup(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def LeaveGroup(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def DeleteGroup(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def ListGroups(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def ListUserGroups(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def OpenStream(self, request_iterator, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')


def add_ChatServiceServicer_to_server(servicer, server):
    rpc_method_handlers = {
            'CreateGroup': grpc.unary_unary_rpc_method_handler(
                    servicer.CreateGroup,
                    request_deserializer=chat__pb2.CreateGroupRequest.FromString,
                    response_serializer=chat__pb2.Group.SerializeToString,
            ),
            'JoinGroup': grpc.unary_unary_rpc_method_handler(
                    servicer.JoinGroup,
                    request_deserializer=chat__pb2.JoinGroupRequest.FromString,
                    response_serializer=chat__pb2.Group.SerializeToString,
            ),
            'LeaveGroup': grpc.unary_unary_rpc_method_handler(
                    servicer.LeaveGroup,
                    request_deserializer=chat__pb2.LeaveGroupRequest.FromString,
                    response_serializer=chat__pb2.Group.SerializeToString,
            ),
            'DeleteGroup': grpc.unary_unary_rpc_method_handler(
                    servicer.DeleteGroup,
                    request_deserializer=chat__pb2.DeleteGroupRequest.FromString,
                    response_serializer=chat__pb2.DeleteGroupResponse.SerializeToString,
            ),
            'ListGroups': grpc.unary_unary_rpc_method_handler(
                    servicer.ListGroups,
                    request_deserializer=chat__pb2.ListGroupsRequest.FromString,
                    response_serializer=chat__pb2.ListGroupsResponse.SerializeToString,
            ),
            'ListUserGroups': grpc.unary_unary_rpc_method_handler(
                    servicer.ListUserGroups,
                    request_deserializer=chat__pb2.ListUserGroupsRequest.FromString,
                    response_serializer=chat__pb2.ListGroupsResponse.SerializeToString,
            ),
            'OpenStream': grpc.stream_stream_rpc_method_handler(
                    servicer.OpenStream,
                    request_deserializer=chat__pb2.ChatEnvelope.FromString,
                    response_serializer=chat__pb2.ChatEnvelope.SerializeToString,
            ),
    }
    generic_handler = grpc.method_handlers_generic_handler(
            'learnlink.ChatService', rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))


class ResourceServiceStub(object):
    """Shared study resources."""

    def __init__(self, channel):
        """Constructor.

        Args:
            channel: A grpc.Channel (or grpc.aio.Channel).
        """
        self.ListResources = channel.unary_unary(
                '/learnlink.ResourceService/ListResources',
                request_serializer=chat__pb2.ListResourcesRequest.SerializeToString,
                response_deserializer=chat__pb2.ListResourcesResponse.FromString,
                )
        self.CreateResource = channel.unary_unary(
                '/learnlink.ResourceService/CreateResource',
                request_serializer=chat__pb2.CreateResourceRequest.SerializeToString,
                response_deserializer=chat__pb2.Resource.FromString,
                )
        self.DeleteResource = channel.unary_unary(
                '/learnlink.ResourceService/DeleteResource',
                request_serializer=chat__pb2.DeleteResourceRequest.SerializeToString,
                response_deserializer=chat__pb2.DeleteResourceResponse.FromString,
                )
        self.LikeResource = channel.unary_unary(
                '/learnlink.ResourceService/LikeResource',
                request_serializer=chat__pb2.LikeResourceRequest.SerializeToString,
                response_deserializer=chat__pb2.Resource.FromString,
                )


class ResourceServiceServicer(object):
    """Shared study resources."""

    def ListResources(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def CreateResource(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def DeleteResource(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')

    def LikeResource(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details('Method not implemented!')
        raise NotImplementedError('Method not implemented!')


def add_ResourceServiceServicer_to_server(servicer, server):
    rpc_method_handlers = {
            'ListResources': grpc.unary_unary_rpc_method_handler(
                    servicer.ListResources,
                    request_deserializer=chat__pb2.ListResourcesRequest.FromString,
                    response_serializer=chat__pb2.ListResourcesResponse.SerializeToString,
            ),
            'CreateResource': grpc.unary_unary_rpc_method_handler(
                    servicer.CreateResource,
                    request_deserializer=chat__pb2.CreateResourceRequest.FromString,
                    response_serializer=chat__pb2.Resource.SerializeToString,
            ),
            'DeleteResource': grpc.unary_unary_rpc_method_handler(
                    servicer.DeleteResource,
                    request_deserializer=chat__pb2.DeleteResourceRequest.FromString,
                    response_serializer=chat__pb2.DeleteResourceResponse.SerializeToString,
            ),
            'LikeResource': grpc.unary_unary_rpc_method_handler(
                    servicer.LikeResource,
                    request_deserializer=chat__pb2.LikeResourceRequest.FromString,
                    response_serializer=chat__pb2.Resource.SerializeToString,
            ),
    }
    generic_handler = grpc.method_handlers_generic_handler(
            'learnlink.ResourceService', rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))
