import unittest
import tempfile
import shutil
import os
import asyncio
import grpc
from learnlink.proto import chat_pb2
from learnlink.server.groups import GroupService
from learnlink.server.hub import RoomBroadcaster
from learnlink.server.repo import GroupsRepo, ResourcesRepo
from learnlink.server.resources import ResourceService
from learnlink.server.service import ChatService, ResourceServicer

class _Aborted(Exception):
    def __init__(self, code, details):
        super().__init__(details)
        self.code = code
        self.details = details

class FakeContext:
    """Just enough of grpc.aio.ServicerContext for unary handlers."""

    async def abort(self, code, details=""):
        raise _Aborted(code, details)

class TestRPCGroups(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.groups_file = os.path.join(self.temp_dir, "groups.jsonl")
        self.groups_repo = GroupsRepo(self.groups_file)
        self.hub = RoomBroadcaster()
        self.service = ChatService(GroupService(self.groups_repo, self.hub), self.hub)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _call(self, rpc, request):
        return asyncio.run(rpc(request, FakeContext()))

    def _create(self, name, creator, tags=()):
        return self._call(self.service.CreateGroup, chat_pb2.CreateGroupRequest(
            name=name, tags=list(tags), creator_user_id=creator))

    def test_list_user_groups_rpc(self):
        g1 = self._create('DSA Study', 'u1')
        g2 = self._create('Graphs', 'u2')
        self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id=g1.id, user_id='u2'))
        self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id=g2.id, user_id='u2'))

        resp = self._call(self.service.ListUserGroups, chat_pb2.ListUserGroupsRequest(user_id='u2'))
        names = sorted([g.name for g in resp.groups])
        self.assertEqual(names, ['DSA Study', 'Graphs'])

    def test_list_groups_rpc(self):
        self._create('DSA Study', 'u1')
        self._create('Graphs', 'u2')

        resp = self._call(self.service.ListGroups, chat_pb2.ListGroupsRequest())
        names = sorted([g.name for g in resp.groups])
        self.assertEqual(names, ['DSA Study', 'Graphs'])

    def test_create_join_leave_rpc(self):
        g = self._create('DSA Study', 'u1', tags=['dsa'])
        self.assertEqual(list(g.tags), ['dsa'])
        self.assertEqual(g.created_by, 'u1')
        self.assertEqual(list(g.joined_users), [])

        joined = self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id=g.id, user_id='u2'))
        self.assertEqual(list(joined.joined_users), ['u2'])
        again = self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id=g.id, user_id='u2'))
        self.assertEqual(list(again.joined_users), ['u2'])

        left = self._call(self.service.LeaveGroup, chat_pb2.LeaveGroupRequest(group_id=g.id, user_id='u2'))
        self.assertEqual(list(left.joined_users), [])

    def test_create_with_blank_name_is_invalid_argument(self):
        with self.assertRaises(_Aborted) as cm:
            self._create('  ', 'u1')
        self.assertEqual(cm.exception.code, grpc.StatusCode.INVALID_ARGUMENT)

    def test_join_missing_group_is_not_found(self):
        with self.assertRaises(_Aborted) as cm:
            self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id='missing', user_id='u2'))
        self.assertEqual(cm.exception.code, grpc.StatusCode.NOT_FOUND)
        self.assertEqual(cm.exception.details, 'Group not found')

    def test_delete_group_rpc(self):
        g = self._create('DSA Study', 'u1')
        with self.assertRaises(_Aborted) as cm:
            self._call(self.service.DeleteGroup, chat_pb2.DeleteGroupRequest(group_id=g.id, requester_id='u2'))
        self.assertEqual(cm.exception.code, grpc.StatusCode.PERMISSION_DENIED)

        resp = self._call(self.service.DeleteGroup, chat_pb2.DeleteGroupRequest(group_id=g.id, requester_id='u1'))
        self.assertTrue(resp.success)
        self.assertFalse(self.groups_repo.exists(g.id))

    def test_datastore_failure_is_internal(self):
        g = self._create('DSA Study', 'u1')
        # A directory where the file should be makes every rewrite fail
        os.remove(self.groups_file)
        os.mkdir(self.groups_file)
        with self.assertRaises(_Aborted) as cm:
            self._call(self.service.JoinGroup, chat_pb2.JoinGroupRequest(group_id=g.id, user_id='u2'))
        self.assertEqual(cm.exception.code, grpc.StatusCode.INTERNAL)
        self.assertEqual(cm.exception.details, 'Server error')
        self.assertEqual(self.groups_repo.get_group(g.id).joined_users, [])

        with self.assertRaises(_Aborted) as cm:
            self._call(self.service.DeleteGroup, chat_pb2.DeleteGroupRequest(group_id=g.id, requester_id='u1'))
        self.assertEqual(cm.exception.code, grpc.StatusCode.INTERNAL)
        self.assertTrue(self.groups_repo.exists(g.id))

class TestRPCResources(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        repo = ResourcesRepo(os.path.join(self.temp_dir, "resources.jsonl"))
        self.service = ResourceServicer(ResourceService(repo))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _call(self, rpc, request):
        return asyncio.run(rpc(request, FakeContext()))

    def test_create_like_list_delete(self):
        r = self._call(self.service.CreateResource, chat_pb2.CreateResourceRequest(
            title='Graphs', link='https://example.com/graphs', tags=['dsa'], user_id='u1'))
        liked = self._call(self.service.LikeResource, chat_pb2.LikeResourceRequest(resource_id=r.id))
        self.assertEqual(liked.likes, 1)

        listed = self._call(self.service.ListResources, chat_pb2.ListResourcesRequest())
        self.assertEqual([x.id for x in listed.resources], [r.id])

        resp = self._call(self.service.DeleteResource, chat_pb2.DeleteResourceRequest(
            resource_id=r.id, requester_id='u1'))
        self.assertTrue(resp.success)

    def test_missing_title_is_invalid_argument(self):
        with self.assertRaises(_Aborted) as cm:
            self._call(self.service.CreateResource, chat_pb2.CreateResourceRequest(link='https://a'))
        self.assertEqual(cm.exception.code, grpc.StatusCode.INVALID_ARGUMENT)
        self.assertEqual(cm.exception.details, 'Title and link required')

if __name__ == '__main__':
    unittest.main()
