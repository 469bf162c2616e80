import unittest

from tests.api_case import ApiTestCase, BOARD, PASSWORD


class ReplyApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.thread = self.create_thread()

    def test_create_reply(self):
        updated = self.create_reply(self.thread["id"])

        replies = updated["replies"]
        self.assertEqual(len(replies), 1)
        self.assertEqual(replies[0]["text"], "This is a test reply")
        self.assertFalse(replies[0]["reported"])
        self.assertTrue(replies[0]["delete_password"].startswith("$2b$"))
        self.assertEqual(updated["bumped_on"], replies[0]["created_on"])
        self.assertNotEqual(updated["bumped_on"], self.thread["bumped_on"])

    def test_create_reply_appends_exactly_one(self):
        self.create_reply(self.thread["id"], text="first")
        updated = self.create_reply(self.thread["id"], text="second")

        self.assertEqual([r["text"] for r in updated["replies"]], ["first", "second"])
        self.assertEqual(len(self.load_board().get_thread(self.thread["id"]).replies), 2)

    def test_create_reply_unknown_thread(self):
        response = self.client.post(f"/api/replies/{BOARD}",
                                    json={"thread_id": "missing", "text": "x", "delete_password": PASSWORD})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "thread not found")

    def test_view_thread_with_all_replies(self):
        for i in range(5):
            self.create_reply(self.thread["id"], text=f"reply {i}")

        response = self.client.request("GET", f"/api/replies/{BOARD}", json={"thread_id": self.thread["id"]})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["id"], self.thread["id"])
        self.assertEqual(body["text"], self.thread["text"])
        self.assertEqual(len(body["replies"]), 5)
        self.assertIn("delete_password", body["replies"][0])
        self.assertIn("reported", body["replies"][0])

    def test_view_thread_from_query(self):
        response = self.client.get(f"/api/replies/{BOARD}", params={"thread_id": self.thread["id"]})
        self.assertEqual(response.json()["id"], self.thread["id"])

    def test_body_overrides_query(self):
        response = self.client.request("GET", f"/api/replies/{BOARD}",
                                       params={"thread_id": "missing"},
                                       json={"thread_id": self.thread["id"]})
        self.assertEqual(response.json()["id"], self.thread["id"])

    def test_view_unknown_thread(self):
        response = self.client.get("/api/replies/nowhere", params={"thread_id": self.thread["id"]})
        self.assertEqual(response.text, "thread not found")

    def test_report_reply_is_idempotent(self):
        reply = self.create_reply(self.thread["id"])["replies"][-1]

        for _ in range(2):
            response = self.client.put(f"/api/replies/{BOARD}",
                                       json={"thread_id": self.thread["id"], "reply_id": reply["id"]})
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.text, "reported")

        stored = self.load_board().get_thread(self.thread["id"]).get_reply(reply["id"])
        self.assertTrue(stored.reported)

    def test_report_unknown_reply(self):
        response = self.client.put(f"/api/replies/{BOARD}",
                                   json={"thread_id": self.thread["id"], "reply_id": "missing"})
        self.assertEqual(response.text, "reply not found")

    def test_delete_reply_with_incorrect_password(self):
        reply = self.create_reply(self.thread["id"])["replies"][-1]

        response = self.client.request("DELETE", f"/api/replies/{BOARD}", json={
            "thread_id": self.thread["id"],
            "reply_id": reply["id"],
            "delete_password": "wrong",
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "incorrect password")

        stored = self.load_board().get_thread(self.thread["id"]).get_reply(reply["id"])
        self.assertEqual(stored.text, "This is a test reply")

    def test_delete_reply_with_correct_password(self):
        reply = self.create_reply(self.thread["id"])["replies"][-1]
        self.client.put(f"/api/replies/{BOARD}", json={"thread_id": self.thread["id"], "reply_id": reply["id"]})

        response = self.client.request("DELETE", f"/api/replies/{BOARD}", json={
            "thread_id": self.thread["id"],
            "reply_id": reply["id"],
            "delete_password": PASSWORD,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "success")

        thread = self.load_board().get_thread(self.thread["id"])
        self.assertEqual(len(thread.replies), 1)
        stored = thread.get_reply(reply["id"])
        self.assertEqual(stored.text, "[deleted]")
        self.assertTrue(stored.reported)

    def test_delete_unknown_reply(self):
        response = self.client.request("DELETE", f"/api/replies/{BOARD}", json={
            "thread_id": self.thread["id"],
            "reply_id": "missing",
            "delete_password": PASSWORD,
        })
        self.assertEqual(response.text, "reply not found")


if __name__ == "__main__":
    unittest.main()
