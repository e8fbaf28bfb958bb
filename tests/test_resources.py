"""Posts, notifications, my-page and challenges endpoints."""

import json

import httpx
import pytest

from hobbyshare.models.my_page import UpdateUserInfo
from hobbyshare.models.notification import Notification
from hobbyshare.notifications import NotificationInbox
from conftest import json_body, notification


class TestPosts:
    @pytest.mark.asyncio
    async def test_write_sends_json_part_and_images(self, backend, logged_in):
        backend.on("POST", "/post", httpx.Response(200, json={"postId": 12, "title": "Yarn haul"}))

        result = await logged_in.posts.write(
            "Yarn haul", "Look at this", ["knitting"], images=[("a.jpg", b"\xff\xd8", "image/jpeg")],
        )

        assert result.post_id == 12
        (request,) = backend.calls("POST", "/post")
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="request"' in body
        assert b'"hobbyTagNames": ["knitting"]' in body
        assert b'name="imageFiles"; filename="a.jpg"' in body

    @pytest.mark.asyncio
    async def test_update_lists_deleted_images(self, backend, logged_in):
        backend.on("PUT", "/post/12", httpx.Response(200, json={"postId": 12}))

        await logged_in.posts.update(12, "t", "c", ["knitting"], deleted_image_urls=["https://img/1.jpg"])

        body = backend.calls("PUT", "/post/12")[0].content
        assert b'"deletedImageUrls": ["https://img/1.jpg"]' in body

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, backend, logged_in):
        backend.on("POST", "/like/post/3", httpx.Response(200, json={"likeCount": 4, "isLike": True}))
        backend.on("POST", "/unlike/post/3", httpx.Response(200, json={"likeCount": 3, "isLike": False}))

        assert (await logged_in.posts.like(3)).like_count == 4
        assert (await logged_in.posts.unlike(3)).is_like is False

    @pytest.mark.asyncio
    async def test_delete_with_empty_body(self, backend, logged_in):
        backend.on("DELETE", "/post/3", httpx.Response(204))
        assert await logged_in.posts.delete(3) is None


class TestNotifications:
    @pytest.mark.asyncio
    async def test_mark_selected_read(self, backend, logged_in):
        backend.on("POST", "/notifications/read", httpx.Response(200))
        await logged_in.notifications.mark_read([1, 2])
        assert json_body(backend.calls("POST", "/notifications/read")[0]) == {"notificationIds": [1, 2]}

    @pytest.mark.asyncio
    async def test_unread_count_and_detail(self, backend, logged_in):
        backend.on("GET", "/notifications/unread-count", httpx.Response(200, json={"unreadCount": 3}))
        backend.on("POST", "/notifications/9", httpx.Response(200, json=notification(9, read=True)))

        assert await logged_in.notifications.unread_count() == 3
        assert (await logged_in.notifications.get(9)).read is True

    def test_inbox_ordering_and_read_state(self):
        inbox = NotificationInbox()
        inbox.push(Notification.model_validate(notification(1)))
        inbox.push(Notification.model_validate(notification(2)))
        inbox.extend([Notification.model_validate(notification(i)) for i in (2, 0)])

        assert [n.notification_id for n in inbox.items] == [2, 1, 0]

        inbox.push(Notification.model_validate(notification(1, read=True)))
        assert [n.notification_id for n in inbox.items] == [1, 2, 0]
        assert [n.notification_id for n in inbox.unread] == [2, 0]

        inbox.mark_read([2])
        assert [n.notification_id for n in inbox.unread] == [0]
        inbox.mark_read()
        assert inbox.unread == []
        inbox.clear()
        assert len(inbox) == 0


class TestMyPage:
    @pytest.mark.asyncio
    async def test_update_info_is_camel_case(self, backend, logged_in):
        backend.on("POST", "/my-page/update", httpx.Response(200))

        await logged_in.my_page.update_info(UpdateUserInfo(
            username="Goat", gender="남성", birth_year=1990, birth_month=1, birth_day=2, hobby_tags=["chess"],
        ))

        body = json.loads(backend.calls("POST", "/my-page/update")[0].content)
        assert body["birthYear"] == 1990
        assert body["hobbyTags"] == ["chess"]

    @pytest.mark.asyncio
    async def test_delete_account_sends_reason(self, backend, logged_in):
        backend.on("DELETE", "/user/delete", httpx.Response(200, json={"message": "bye"}))
        assert await logged_in.my_page.delete_account("moving on") == {"message": "bye"}
        assert json_body(backend.calls("DELETE", "/user/delete")[0]) == {"reason": "moving on"}

    @pytest.mark.asyncio
    async def test_profile_image_upload(self, backend, logged_in):
        backend.on("POST", "/my-page/update/profile-image", httpx.Response(200, text="https://img/me.png"))
        assert await logged_in.my_page.upload_profile_image("me.png", b"png", "image/png") == "https://img/me.png"

    @pytest.mark.asyncio
    async def test_level_and_password_check(self, backend, logged_in):
        backend.on("GET", "/user-rank/level", httpx.Response(200, json=3))
        backend.on("POST", "/my-page/update/password/check", httpx.Response(200, json={"check": True}))

        assert await logged_in.my_page.level() == 3
        assert await logged_in.my_page.check_current_password("Secret123") is True


class TestChallenges:
    @pytest.mark.asyncio
    async def test_list_and_start(self, backend, logged_in):
        backend.on("GET", "/challenge", httpx.Response(200, json={
            "hobbyShowOff": {"started": True, "achieved": False, "point": 10},
            "hobbyRoutiner": {"started": False, "achieved": False, "point": 0},
            "hobbyRich": {"started": True, "achieved": True, "point": 30},
        }))
        backend.on("POST", "/challenge/start/2", httpx.Response(200))

        summary = await logged_in.challenges.list()
        await logged_in.challenges.start(2)

        assert summary.hobby_show_off.point == 10
        assert summary.hobby_rich.achieved is True
        assert len(backend.calls("POST", "/challenge/start/2")) == 1
