import unittest
import tempfile
import shutil
import os
import asyncio
from learnlink.server.errors import NotFoundError, PermissionDeniedError, ValidationError
from learnlink.server.repo import ResourcesRepo
from learnlink.server.resources import ResourceService

class TestResourceService(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.repo = ResourcesRepo(os.path.join(self.temp_dir, "resources.jsonl"))
        self.service = ResourceService(self.repo)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_title_and_link_are_required(self):
        for title, link in [("", "https://a"), ("Graphs", "  "), (None, None)]:
            with self.assertRaises(ValidationError):
                asyncio.run(self.service.create_resource(title, link, "", [], "u1"))
        self.assertEqual(self.repo.all(), [])

    def test_create_trims_and_lists_newest_first(self):
        first = asyncio.run(self.service.create_resource(" Graphs ", " https://a ", "", ["dsa", "dsa"], "u1"))
        second = asyncio.run(self.service.create_resource("Trees", "https://b", "notes", [], "u2"))

        self.assertEqual((first.title, first.link, first.tags), ("Graphs", "https://a", ["dsa"]))
        listed = asyncio.run(self.service.list_resources())
        self.assertEqual([r.id for r in listed], [second.id, first.id])

    def test_like_counts_up(self):
        r = asyncio.run(self.service.create_resource("Graphs", "https://a", "", [], "u1"))
        asyncio.run(self.service.like_resource(r.id))
        self.assertEqual(asyncio.run(self.service.like_resource(r.id)).likes, 2)
        with self.assertRaises(NotFoundError):
            asyncio.run(self.service.like_resource("missing"))

    def test_only_owner_deletes(self):
        r = asyncio.run(self.service.create_resource("Graphs", "https://a", "", [], "u1"))
        with self.assertRaises(PermissionDeniedError):
            asyncio.run(self.service.delete_resource(r.id, "u2"))
        asyncio.run(self.service.delete_resource(r.id, "u1"))
        self.assertIsNone(self.repo.get(r.id))
        with self.assertRaises(NotFoundError):
            asyncio.run(self.service.delete_resource(r.id, "u1"))

    def test_unowned_resource_can_be_deleted_by_anyone(self):
        r = asyncio.run(self.service.create_resource("Graphs", "https://a", "", [], ""))
        asyncio.run(self.service.delete_resource(r.id, "u9"))
        self.assertIsNone(self.repo.get(r.id))

if __name__ == '__main__':
    unittest.main()
