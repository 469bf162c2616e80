import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from app import create_app
from database import DatabaseManager
from security import PasswordHasher

BOARD = "test"
PASSWORD = "kibar.pro"


class ApiTestCase(unittest.TestCase):
    """Runs the API against a throwaway SQLite file."""

    def setUp(self):
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.db = DatabaseManager(os.path.join(tmpdir.name, "board.db"))
        self.client = TestClient(create_app(self.db, PasswordHasher(rounds=4)))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def load_board(self, name=BOARD):
        return self.client.portal.call(self.db.get_board, name)

    def create_thread(self, text="This is a test thread", board=BOARD, password=PASSWORD):
        response = self.client.post(f"/api/threads/{board}", json={"text": text, "delete_password": password})
        self.assertEqual(response.status_code, 200)
        return response.json()

    def create_reply(self, thread_id, text="This is a test reply", board=BOARD, password=PASSWORD):
        response = self.client.post(
            f"/api/replies/{board}",
            json={"thread_id": thread_id, "text": text, "delete_password": password},
        )
        self.assertEqual(response.status_code, 200)
        return response.json()
