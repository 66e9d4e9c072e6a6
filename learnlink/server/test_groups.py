import unittest
import tempfile
import shutil
import os
import asyncio
from learnlink.proto import chat_pb2
from learnlink.server.errors import NotFoundError, PermissionDeniedError, ValidationError
from learnlink.server.groups import GroupService
from learnlink.server.hub import RoomBroadcaster
from learnlink.server.models import Group
from learnlink.server.repo import GroupsRepo

class TestGroupService(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.groups_file = os.path.join(self.temp_dir, "groups.jsonl")
        self.repo = GroupsRepo(self.groups_file)
        self.service = GroupService(self.repo)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _create(self, name="DSA Study", creator="u1", tags=("dsa",)):
        return asyncio.run(self.service.create_group(name, "", list(tags), creator))

    def test_create_join_leave_scenario(self):
        group = self._create()
        self.assertEqual(group.created_by, "u1")
        self.assertEqual(group.tags, ["dsa"])
        self.assertEqual(group.joined_users, [])

        joined = asyncio.run(self.service.join_group(group.id, "u2"))
        self.assertEqual(joined.joined_users, ["u2"])
        self.assertFalse(joined.is_member("u1"))

        left = asyncio.run(self.service.leave_group(group.id, "u2"))
        self.assertEqual(left.joined_users, [])

    def test_join_twice_keeps_single_entry(self):
        group = self._create()
        once = list(asyncio.run(self.service.join_group(group.id, "u2")).joined_users)
        twice = list(asyncio.run(self.service.join_group(group.id, "u2")).joined_users)
        self.assertEqual(once, twice)
        self.assertEqual(GroupsRepo(self.groups_file).get_group(group.id).joined_users, ["u2"])

    def test_leave_as_non_member_changes_nothing(self):
        group = self._create()
        asyncio.run(self.service.join_group(group.id, "u2"))
        after = asyncio.run(self.service.leave_group(group.id, "u3"))
        self.assertEqual(after.joined_users, ["u2"])

    def test_blank_name_is_rejected_without_persisting(self):
        with self.assertRaises(ValidationError):
            self._create(name="   ")
        self.assertEqual(self.repo.all(), [])
        self.assertEqual(GroupsRepo(self.groups_file).all(), [])

    def test_missing_creator_is_rejected(self):
        with self.assertRaises(ValidationError):
            self._create(creator="")

    def test_tags_and_fields_are_normalized(self):
        group = asyncio.run(self.service.create_group("  Graphs  ", "  BFS/DFS ", ["dsa", " dsa", "", "graphs"], "u1"))
        self.assertEqual(group.name, "Graphs")
        self.assertEqual(group.description, "BFS/DFS")
        self.assertEqual(group.tags, ["dsa", "graphs"])

    def test_membership_changes_on_missing_group(self):
        with self.assertRaises(NotFoundError):
            asyncio.run(self.service.join_group("missing", "u2"))
        with self.assertRaises(NotFoundError):
            asyncio.run(self.service.leave_group("missing", "u2"))

    def test_only_creator_can_delete(self):
        group = self._create()
        with self.assertRaises(PermissionDeniedError):
            asyncio.run(self.service.delete_group(group.id, "u2"))
        self.assertTrue(self.repo.exists(group.id))

        asyncio.run(self.service.delete_group(group.id, "u1"))
        self.assertFalse(self.repo.exists(group.id))
        with self.assertRaises(NotFoundError):
            asyncio.run(self.service.delete_group(group.id, "u1"))

    def test_delete_closes_the_group_room(self):
        async def scenario():
            hub = RoomBroadcaster()
            service = GroupService(self.repo, hub)
            group = await service.create_group("DSA Study", "", [], "u1")
            q = await hub.register("c1")
            await hub.subscribe("c1", group.id)
            await service.delete_group(group.id, "u1")
            return hub, group, q.get_nowait()

        hub, group, final = asyncio.run(scenario())
        self.assertEqual(final.type, chat_pb2.GROUP_DELETED)
        self.assertEqual(final.group_id, group.id)
        self.assertEqual(hub.subscribers(group.id), set())

    def test_auto_join_creator_flag(self):
        service = GroupService(self.repo, auto_join_creator=True)
        group = asyncio.run(service.create_group("DSA Study", "", [], "u1"))
        self.assertEqual(group.joined_users, ["u1"])

    def test_list_groups_and_user_groups(self):
        g1 = self._create(name="One")
        g2 = self._create(name="Two", creator="u2")
        asyncio.run(self.service.join_group(g2.id, "u3"))

        self.assertEqual({g.id for g in asyncio.run(self.service.list_groups())}, {g1.id, g2.id})
        self.assertEqual([g.id for g in asyncio.run(self.service.list_user_groups("u3"))], [g2.id])

    def test_is_member_query(self):
        group = Group(id="g1", name="One", created_by="u1", joined_users=["u2"])
        self.assertTrue(group.is_member("u2"))
        self.assertFalse(group.is_member("u1"))

if __name__ == '__main__':
    unittest.main()
