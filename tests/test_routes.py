# tests/test_routes.py
"""End-to-end tests of the HTML routes through the ASGI app."""

import pytest

from app.core.config import settings
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _register(client, username="alice", password="pw"):
    return client.post(
        "/register",
        data={"email": f"{username}@example.com", "username": username, "password": password},
        follow_redirects=False,
    )


@pytest.fixture
def logged_in(client):
    response = _register(client)
    assert response.status_code == 303
    return client


@pytest.fixture
def post_id(logged_in, db, comedy):
    response = logged_in.post(
        "/create_post",
        data={"content": "first post", "categories": [comedy.id]},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return db.query(Post).one().id


class TestAuthRoutes:

    def test_pages_render(self, client):
        assert client.get("/register").status_code == 200
        assert client.get("/login").status_code == 200

    def test_register_sets_session_cookie(self, client, db):
        response = _register(client)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        token = response.cookies.get(settings.SESSION_COOKIE_NAME)
        assert token
        assert "httponly" in response.headers["set-cookie"].lower()
        assert db.query(User).one().session_token == token

    def test_duplicate_registration_rerenders_form(self, client, db):
        _register(client)
        client.cookies.clear()

        response = _register(client)

        assert response.status_code == 400
        assert "Email is already registered" in response.text
        assert db.query(User).count() == 1

    def test_login_and_bad_password(self, client):
        _register(client)
        client.cookies.clear()

        bad = client.post("/login", data={"email": "alice@example.com", "password": "nope"})
        assert bad.status_code == 401
        assert "Invalid email or password" in bad.text

        good = client.post(
            "/login",
            data={"email": "alice@example.com", "password": "pw"},
            follow_redirects=False,
        )
        assert good.status_code == 303
        assert good.cookies.get(settings.SESSION_COOKIE_NAME)

    def test_logout_revokes_session(self, logged_in, db):
        token = logged_in.cookies.get(settings.SESSION_COOKIE_NAME)

        response = logged_in.post("/logout", follow_redirects=False)

        assert response.status_code == 303
        assert db.query(User).filter(User.session_token == token).first() is None
        logged_in.cookies.set(settings.SESSION_COOKIE_NAME, token)
        assert logged_in.get("/my_posts", follow_redirects=False).status_code == 303


class TestProtectedRoutes:

    @pytest.mark.parametrize("path", ["/my_posts", "/liked_posts"])
    def test_pages_redirect_to_login(self, client, path):
        response = client.get(path, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    @pytest.mark.parametrize("path", ["/create_post", "/like", "/dislike", "/create_comment", "/like_comment", "/dislike_comment"])
    def test_form_posts_are_unauthorized(self, client, path):
        assert client.post(path, data={}).status_code == 401

    def test_stale_cookie_is_unauthorized(self, client):
        client.cookies.set(settings.SESSION_COOKIE_NAME, "stale-token")

        assert client.post("/like", data={"post_id": "x"}).status_code == 401
        # guests still see the front page
        assert client.get("/").status_code == 200


class TestPostRoutes:

    def test_front_page_lists_posts(self, logged_in, post_id):
        response = logged_in.get("/")

        assert response.status_code == 200
        assert "first post" in response.text
        assert "alice" in response.text

    def test_content_is_escaped_on_the_page(self, logged_in, comedy):
        logged_in.post("/create_post", data={"content": "<b>bold</b>", "categories": [comedy.id]})

        page = logged_in.get("/").text

        assert "&lt;b&gt;bold&lt;/b&gt;" in page
        assert "<b>bold</b>" not in page

    def test_category_filter(self, logged_in, post_id):
        assert "first post" in logged_in.get("/", params={"category": "Comedy"}).text
        assert "first post" not in logged_in.get("/", params={"category": "Mystery"}).text

    def test_create_post_without_categories(self, logged_in, db):
        response = logged_in.post("/create_post", data={"content": "lonely"})

        assert response.status_code == 400
        assert db.query(Post).count() == 0

    def test_create_post_with_image(self, logged_in, db, comedy):
        response = logged_in.post(
            "/create_post",
            data={"content": "pic", "categories[]": [comedy.id]},
            files={"image": ("cat.png", PNG, "image/png")},
            follow_redirects=False,
        )

        assert response.status_code == 303
        image_path = db.query(Post).one().image_path
        assert image_path.startswith("/uploads/")
        assert logged_in.get(image_path).content == PNG

    def test_create_post_with_bad_image(self, logged_in, db, comedy):
        response = logged_in.post(
            "/create_post",
            data={"content": "pic", "categories": [comedy.id]},
            files={"image": ("notes.png", b"plain text", "image/png")},
        )

        assert response.status_code == 400
        assert "Unsupported image type" in response.text
        assert db.query(Post).count() == 0

    def test_post_page(self, logged_in, post_id):
        response = logged_in.get("/post", params={"id": post_id})

        assert response.status_code == 200
        assert "first post" in response.text

    def test_missing_post_page(self, client):
        response = client.get("/post", params={"id": "missing"})

        assert response.status_code == 404
        assert "Post not found" in response.text

    def test_unknown_route(self, client):
        assert client.get("/nowhere").status_code == 404


class TestReactionRoutes:

    def test_like_toggle_updates_counters(self, logged_in, db, post_id):
        referer = f"/post?id={post_id}"

        response = logged_in.post(
            "/like", data={"post_id": post_id}, headers={"referer": referer}, follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == referer
        post = db.query(Post).filter(Post.id == post_id).one()
        assert (post.likes, post.dislikes) == (1, 0)

        logged_in.post("/dislike", data={"post_id": post_id}, follow_redirects=False)
        db.refresh(post)
        assert (post.likes, post.dislikes) == (0, 1)

        logged_in.post("/dislike", data={"post_id": post_id}, follow_redirects=False)
        db.refresh(post)
        assert (post.likes, post.dislikes) == (0, 0)

    def test_like_without_referer_goes_home(self, logged_in, post_id):
        response = logged_in.post("/like", data={"post_id": post_id}, follow_redirects=False)

        assert response.headers["location"] == "/"

    def test_like_missing_post(self, logged_in):
        assert logged_in.post("/like", data={"post_id": "missing"}).status_code == 404

    def test_liked_posts_page(self, logged_in, post_id):
        assert "first post" not in logged_in.get("/liked_posts").text

        logged_in.post("/like", data={"post_id": post_id})

        assert "first post" in logged_in.get("/liked_posts").text
        assert "first post" in logged_in.get("/my_posts").text


class TestCommentRoutes:

    def test_comment_and_react(self, logged_in, db, post_id):
        response = logged_in.post(
            "/create_comment",
            data={"post_id": post_id, "content": "nice one"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/post?id={post_id}"
        comment = db.query(Comment).one()

        response = logged_in.post(
            "/like_comment", data={"comment_id": comment.id}, follow_redirects=False
        )
        assert response.headers["location"] == f"/post?id={post_id}"
        db.refresh(comment)
        assert comment.likes == 1

        page = logged_in.get("/post", params={"id": post_id}).text
        assert "nice one" in page

    def test_empty_comment(self, logged_in, db, post_id):
        response = logged_in.post("/create_comment", data={"post_id": post_id, "content": "  "})

        assert response.status_code == 400
        assert db.query(Comment).count() == 0

    def test_comment_on_missing_post(self, logged_in):
        response = logged_in.post("/create_comment", data={"post_id": "missing", "content": "hi"})

        assert response.status_code == 404
