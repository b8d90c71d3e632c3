from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.test import Client, RequestFactory, TestCase
from django.urls import reverse

from messageboards.errors import MessageboardNotFound, TopicNotFound, UserNotFound
from messageboards.middleware import MessageboardsGateMiddleware
from messageboards.models import Messageboard, MessageboardUser, PrivateTopic, Topic, UserPreference

User = get_user_model()


class ErrorPageTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        cls.board = Messageboard.objects.create(name="General", slug="general")
        cls.locked_board = Messageboard.objects.create(name="News", slug="news", locked=True)
        cls.member = User.objects.create_user(username="member", password="x")
        cls.moderator = User.objects.create_user(username="mod", password="x", is_staff=True)

    def setUp(self) -> None:
        self.client: Client = Client()

    def test_missing_board_renders_not_found_page(self) -> None:
        url = reverse("messageboards:messageboard_detail", args=["missing"])
        response = self.client.get(url)
        self.assertContains(response, "This messageboard does not exist.", status_code=404)
        self.assertTemplateUsed(response, "messageboards/error_pages/not_found.html")
        self.assertIsInstance(response.context["error"], MessageboardNotFound)
        self.assertEqual(response.context["message"], "This messageboard does not exist.")

    def test_missing_board_as_json(self) -> None:
        url = reverse("messageboards:messageboard_detail", args=["missing"])
        response = self.client.get(url, HTTP_ACCEPT="application/json")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"error": "not_found", "message": "This messageboard does not exist."},
        )

    def test_missing_topic_and_user(self) -> None:
        response = self.client.get(reverse("messageboards:topic_detail", args=["general", "nope"]))
        self.assertContains(response, "This topic does not exist.", status_code=404)
        self.assertIsInstance(response.context["error"], TopicNotFound)
        response = self.client.get(reverse("messageboards:user_detail", args=["ghost"]))
        self.assertEqual(response.status_code, 404)
        self.assertIsInstance(response.context["error"], UserNotFound)

    def test_anonymous_topic_creation_requires_login(self) -> None:
        url = reverse("messageboards:topic_create", args=["general"])
        response = self.client.post(url, {"title": "Hello"})
        self.assertContains(response, "Please sign in first.", status_code=403)
        self.assertTemplateUsed(response, "messageboards/error_pages/forbidden.html")

    def test_locked_board_denies_topic_creation(self) -> None:
        self.client.force_login(self.member)
        url = reverse("messageboards:topic_create", args=["news"])
        response = self.client.post(url, {"title": "Hello"})
        self.assertContains(response, "You are not authorized to post in this messageboard.", status_code=403)
        self.assertFalse(Topic.objects.exists())

    def test_moderator_posts_on_locked_board(self) -> None:
        self.client.force_login(self.moderator)
        url = reverse("messageboards:topic_create", args=["news"])
        response = self.client.post(url, {"title": "Release notes", "content": "Out now."})
        self.assertEqual(response.status_code, 201)
        topic = Topic.objects.get()
        self.assertEqual(topic.slug, "release-notes")
        self.assertEqual(topic.posts.count(), 1)

    def test_generic_denial_uses_translated_message(self) -> None:
        self.client.force_login(self.member)
        response = self.client.get(reverse("messageboards:moderation_pending"))
        self.assertContains(response, "You are not authorized to access this page.", status_code=403)
        self.assertIsInstance(response.context["error"], PermissionDenied)

    def test_messageboard_creation_denied_for_members(self) -> None:
        self.client.force_login(self.member)
        response = self.client.post(reverse("messageboards:messageboard_create"), {"name": "Off topic"})
        self.assertContains(response, "You are not authorized to create a new messageboard.", status_code=403)

    def test_unrelated_errors_are_not_mapped(self) -> None:
        request = RequestFactory().get("/elsewhere/")
        middleware = MessageboardsGateMiddleware(lambda req: None)
        self.assertIsNone(middleware.process_exception(request, MessageboardNotFound("x")))


class ViewTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        cls.board = Messageboard.objects.create(name="General", slug="general")
        cls.member = User.objects.create_user(username="member", password="x")
        cls.other = User.objects.create_user(username="other", password="x")
        cls.moderator = User.objects.create_user(username="mod", password="x", is_staff=True)

    def test_board_list_reports_signed_in(self) -> None:
        response = self.client.get(reverse("messageboards:messageboard_list"))
        payload = response.json()
        self.assertFalse(payload["signed_in"])
        self.assertEqual([board["slug"] for board in payload["messageboards"]], ["general"])

        self.client.force_login(self.member)
        payload = self.client.get(reverse("messageboards:messageboard_list")).json()
        self.assertTrue(payload["signed_in"])
        self.assertEqual([user["username"] for user in payload["active_users"]], ["member"])

    def test_board_detail_records_activity(self) -> None:
        self.client.force_login(self.member)
        response = self.client.get(reverse("messageboards:messageboard_detail", args=["general"]))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(MessageboardUser.objects.filter(user=self.member, messageboard=self.board).exists())
        self.assertEqual([user["username"] for user in response.json()["active_users"]], ["member"])

    def test_board_detail_by_numeric_id(self) -> None:
        response = self.client.get(reverse("messageboards:messageboard_detail", args=[str(self.board.pk)]))
        self.assertEqual(response.json()["messageboard"]["slug"], "general")

    def test_blocked_topics_hidden_from_members(self) -> None:
        Topic.objects.create(messageboard=self.board, title="Visible", slug="visible")
        Topic.objects.create(
            messageboard=self.board,
            title="Blocked",
            slug="blocked",
            moderation_state=Topic.STATE_BLOCKED,
        )
        self.client.force_login(self.member)
        slugs = [t["slug"] for t in self.client.get(reverse("messageboards:messageboard_detail", args=["general"])).json()["topics"]]
        self.assertEqual(slugs, ["visible"])

        self.client.force_login(self.moderator)
        slugs = [t["slug"] for t in self.client.get(reverse("messageboards:messageboard_detail", args=["general"])).json()["topics"]]
        self.assertCountEqual(slugs, ["visible", "blocked"])

        response = self.client.get(reverse("messageboards:topic_detail", args=["general", "blocked"]))
        self.assertEqual(response.status_code, 200)
        self.client.force_login(self.member)
        response = self.client.get(reverse("messageboards:topic_detail", args=["general", "blocked"]))
        self.assertContains(response, "You are not authorized to read this topic.", status_code=403)

    def test_private_topics(self) -> None:
        self.client.force_login(self.member)
        response = self.client.post(
            reverse("messageboards:private_topic_create"),
            {"title": "Hi", "user_ids": [str(self.other.pk)]},
        )
        self.assertEqual(response.status_code, 201)
        private_topic = PrivateTopic.objects.get()
        self.assertCountEqual(private_topic.users.all(), [self.member, self.other])

        detail_url = reverse("messageboards:private_topic_detail", args=[private_topic.pk])
        self.assertEqual(self.client.get(detail_url).status_code, 200)

        self.client.force_login(self.moderator)
        response = self.client.get(detail_url)
        self.assertContains(response, "You are not authorized to read this private topic.", status_code=403)

        missing = self.client.get(reverse("messageboards:private_topic_detail", args=[private_topic.pk + 1]))
        self.assertContains(missing, "This private topic does not exist.", status_code=404)

    def test_moderator_creates_board_and_sees_queue(self) -> None:
        Topic.objects.create(
            messageboard=self.board,
            title="Waiting",
            slug="waiting",
            moderation_state=Topic.STATE_PENDING,
        )
        self.client.force_login(self.moderator)
        response = self.client.post(reverse("messageboards:messageboard_create"), {"name": "Off Topic"})
        self.assertEqual(response.status_code, 201)
        self.assertTrue(Messageboard.objects.filter(slug="off-topic").exists())

        payload = self.client.get(reverse("messageboards:moderation_pending")).json()
        self.assertEqual([topic["slug"] for topic in payload["pending_topics"]], ["waiting"])

    def test_preferences(self) -> None:
        response = self.client.get(reverse("messageboards:preferences"))
        self.assertEqual(response.status_code, 403)
        self.client.force_login(self.member)
        payload = self.client.get(reverse("messageboards:preferences")).json()
        self.assertTrue(payload["notify_on_message"])
        self.assertFalse(UserPreference.objects.filter(user=self.member).exists())

    def test_user_detail(self) -> None:
        response = self.client.get(reverse("messageboards:user_detail", args=["member"]))
        self.assertEqual(response.json()["user"]["username"], "member")
