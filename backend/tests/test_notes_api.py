"""
Tests for owner-scoped note CRUD, ordering and tag filtering.
"""

import pytest

from notekeeper.services.notes import parse_tag_filter, matches_all_tags


def create_note(client, **fields):
    body = {"title": "T", "content": "C", "tags": []}
    body.update(fields)
    resp = client.post("/api/notes", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestTagFilterParsing:
    """Test the comma separated tag filter helpers."""

    def test_split_trim_lower(self):
        """Terms are trimmed, lower-cased and empty terms dropped."""
        assert parse_tag_filter(" Work, ,URGENT ,") == ["work", "urgent"]

    @pytest.mark.parametrize("raw", [None, "", " , ,"])
    def test_empty_filter(self, raw):
        """An empty filter yields no terms."""
        assert parse_tag_filter(raw) == []

    def test_conjunctive_match(self):
        """Every term must be present, compared case-insensitively."""
        tags = ["Work", "Urgent"]
        assert matches_all_tags(tags, ["work", "urgent"])
        assert matches_all_tags(tags, ["urgent"])
        assert not matches_all_tags(tags, ["work", "personal"])

    def test_exact_term_match(self):
        """A term must equal a whole tag, not a substring of one."""
        assert not matches_all_tags(["workshop"], ["work"])


class TestNoteCrud:
    """Test create, read, update and delete for the owner."""

    def test_requires_session(self, client):
        """Every note endpoint is behind the session gate."""
        assert client.get("/api/notes").status_code == 401
        assert client.post("/api/notes", json={"title": "T"}).status_code == 401
        assert client.get("/api/notes/some-id").status_code == 401
        assert client.put("/api/notes/some-id", json={"title": "T"}).status_code == 401
        assert client.delete("/api/notes/some-id").status_code == 401

    def test_create(self, client, signup):
        """A created note is returned with its owner and defaults."""
        signup()
        me = client.get("/api/auth/me").json()
        note = create_note(client, title="T", content="# C", tags=["x"])
        assert note["title"] == "T"
        assert note["content"] == "# C"
        assert note["tags"] == ["x"]
        assert note["pinned"] is False
        assert note["owner_id"] == me["id"]
        assert note["id"]

    def test_create_with_empty_body(self, client, signup):
        """Title, content and tags may all be empty."""
        signup()
        resp = client.post("/api/notes", json={})
        assert resp.status_code == 201
        assert resp.json()["title"] == ""
        assert resp.json()["tags"] == []

    def test_tags_keep_order_and_duplicates(self, client, signup):
        """Tags are stored as given."""
        signup()
        note = create_note(client, tags=["b", "A", "a", "b"])
        assert client.get(f"/api/notes/{note['id']}").json()["tags"] == ["b", "A", "a", "b"]

    def test_get(self, client, signup):
        """The owner can fetch a note by id."""
        signup()
        note = create_note(client)
        resp = client.get(f"/api/notes/{note['id']}")
        assert resp.status_code == 200
        assert resp.json() == note

    def test_update(self, client, signup):
        """Update returns the updated record."""
        signup()
        note = create_note(client)
        resp = client.put(
            f"/api/notes/{note['id']}",
            json={"title": "T2", "content": "C2", "tags": ["y"], "pinned": True},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert (body["title"], body["content"], body["tags"], body["pinned"]) == ("T2", "C2", ["y"], True)

    def test_partial_update_keeps_other_fields(self, client, signup):
        """Fields missing from the body stay as they were."""
        signup()
        note = create_note(client, title="T", content="C", tags=["x"])
        body = client.put(f"/api/notes/{note['id']}", json={"title": "T2"}).json()
        assert body["content"] == "C"
        assert body["tags"] == ["x"]

    def test_delete(self, client, signup):
        """A deleted note is gone; deleting again is not found."""
        signup()
        note = create_note(client)
        resp = client.delete(f"/api/notes/{note['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Note deleted"}
        assert client.get(f"/api/notes/{note['id']}").status_code == 404
        assert client.delete(f"/api/notes/{note['id']}").status_code == 404

    def test_unknown_id_not_found(self, client, signup):
        """An id that was never issued is not found."""
        signup()
        assert client.get("/api/notes/does-not-exist").status_code == 404
        assert client.put("/api/notes/does-not-exist", json={"title": "x"}).status_code == 404


class TestOwnership:
    """Test that notes are invisible to other users."""

    def test_other_user_gets_not_found(self, client, signup, login):
        """User B cannot read, change or delete user A's note."""
        email_a, password_a = signup()
        note = create_note(client, title="T", content="C", tags=["x"])

        client.cookies.clear()
        signup()

        not_found = client.get("/api/notes/does-not-exist").json()
        resp = client.get(f"/api/notes/{note['id']}")
        assert resp.status_code == 404
        assert resp.json() == not_found
        assert client.put(f"/api/notes/{note['id']}", json={"title": "pwned"}).status_code == 404
        assert client.delete(f"/api/notes/{note['id']}").status_code == 404
        assert client.get("/api/notes").json() == []

        client.cookies.clear()
        login(email_a, password_a)
        resp = client.get(f"/api/notes/{note['id']}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "T"

    def test_owner_cannot_be_reassigned(self, client, signup):
        """An owner field in the body is ignored."""
        signup()
        me = client.get("/api/auth/me").json()
        note = create_note(client, owner_id="someone-else")
        assert note["owner_id"] == me["id"]


class TestListing:
    """Test ordering and tag filters on the note list."""

    def test_most_recently_updated_first(self, client, signup):
        """Updating an old note moves it to the front."""
        signup()
        first = create_note(client, title="first")
        second = create_note(client, title="second")
        third = create_note(client, title="third")

        ids = [n["id"] for n in client.get("/api/notes").json()]
        assert ids == [third["id"], second["id"], first["id"]]

        client.put(f"/api/notes/{first['id']}", json={"content": "edited"})
        ids = [n["id"] for n in client.get("/api/notes").json()]
        assert ids == [first["id"], third["id"], second["id"]]

    def test_updated_at_is_descending(self, client, signup):
        """The list is sorted by updated_at, newest first."""
        signup()
        for i in range(4):
            create_note(client, title=str(i))
        stamps = [n["updated_at"] for n in client.get("/api/notes").json()]
        assert stamps == sorted(stamps, reverse=True)

    def test_tag_filter_is_conjunctive_and_case_insensitive(self, client, signup):
        """Work/Urgent matches work,urgent and URGENT but not work,personal."""
        signup()
        tagged = create_note(client, tags=["Work", "Urgent"])
        create_note(client, tags=["work"])
        create_note(client, tags=[])

        def listed(tags):
            resp = client.get("/api/notes", params={"tags": tags})
            assert resp.status_code == 200
            return [n["id"] for n in resp.json()]

        assert listed("work,urgent") == [tagged["id"]]
        assert listed("URGENT") == [tagged["id"]]
        assert listed("work,personal") == []
        assert len(listed("work")) == 2

    def test_blank_tag_filter_lists_everything(self, client, signup):
        """A filter made only of separators does not filter."""
        signup()
        create_note(client, tags=["a"])
        create_note(client)
        assert len(client.get("/api/notes", params={"tags": " , "}).json()) == 2

    def test_tag_list(self, client, signup):
        """Distinct tags across the user's notes, case variants folded."""
        signup()
        create_note(client, tags=["Work", "b"])
        create_note(client, tags=["work", "a", "b"])
        assert client.get("/api/notes/tags").json() == ["a", "b", "Work"]
