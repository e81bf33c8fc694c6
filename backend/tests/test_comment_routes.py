"""
Zogakzip Backend — Comment API Tests
======================================
"""

import pytest
import pytest_asyncio


def comment_payload(**overrides):
    payload = {"nickname": "minji", "content": "Great photo!", "commentPassword": "comment-secret"}
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def post(make_group, make_post):
    group = await make_group()
    return await make_post(group["id"])


async def _comment_count(test_client, post_id):
    return (await test_client.get(f"/api/posts/{post_id}")).json()["commentCount"]


class TestComments:

    @pytest.mark.asyncio
    async def test_create_comment(self, test_client, post):
        response = await test_client.post(
            f"/api/posts/{post['id']}/comments", json=comment_payload()
        )

        assert response.status_code == 201
        body = response.json()
        assert body["postId"] == post["id"]
        assert body["content"] == "Great photo!"
        assert "commentPassword" not in body
        assert await _comment_count(test_client, post["id"]) == 1

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, test_client):
        response = await test_client.post("/api/posts/999/comments", json=comment_payload())
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_fields(self, test_client, post):
        response = await test_client.post(
            f"/api/posts/{post['id']}/comments", json={"nickname": "minji"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["fields"]

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client, post):
        for text in ("first", "second", "third"):
            await test_client.post(
                f"/api/posts/{post['id']}/comments", json=comment_payload(content=text)
            )

        body = (
            await test_client.get(f"/api/posts/{post['id']}/comments", params={"pageSize": 2})
        ).json()

        assert body["totalItemCount"] == 3
        assert body["totalPages"] == 2
        assert [c["content"] for c in body["data"]] == ["third", "second"]

    @pytest.mark.asyncio
    async def test_update_comment(self, test_client, post):
        comment = (
            await test_client.post(f"/api/posts/{post['id']}/comments", json=comment_payload())
        ).json()

        denied = await test_client.put(
            f"/api/comments/{comment['id']}",
            json=comment_payload(content="edited", commentPassword="wrong"),
        )
        accepted = await test_client.put(
            f"/api/comments/{comment['id']}", json=comment_payload(content="edited")
        )

        assert denied.status_code == 401
        assert accepted.status_code == 200
        assert accepted.json()["content"] == "edited"

    @pytest.mark.asyncio
    async def test_delete_comment(self, test_client, post):
        comment = (
            await test_client.post(f"/api/posts/{post['id']}/comments", json=comment_payload())
        ).json()
        url = f"/api/comments/{comment['id']}"

        denied = await test_client.request("DELETE", url, json={"commentPassword": "wrong"})
        assert denied.status_code == 401
        assert await _comment_count(test_client, post["id"]) == 1

        response = await test_client.request(
            "DELETE", url, json={"commentPassword": "comment-secret"}
        )

        assert response.status_code == 200
        assert await _comment_count(test_client, post["id"]) == 0
        again = await test_client.request(
            "DELETE", url, json={"commentPassword": "comment-secret"}
        )
        assert again.status_code == 404
