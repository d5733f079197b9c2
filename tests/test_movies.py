# tests/test_movies.py
from datetime import timedelta

import pytest

from app.core.security import utcnow
from app.services import movie_service
from .conftest import API, error_code, make_movie


def test_list_filters_by_genre_and_availability_newest_first(client):
    now = utcnow()
    make_movie(title="Alien", genre="Horror", added_at=now - timedelta(days=3))
    make_movie(title="Hereditary", genre="Horror", added_at=now - timedelta(days=1))
    make_movie(title="The Thing", genre="Horror", is_available=False, added_at=now)
    make_movie(title="Up", genre="Animation", added_at=now)

    r = client.get(f"{API}/movies", params={"genre": "Horror", "is_available": "true"})
    assert r.status_code == 200
    assert [m["title"] for m in r.json()] == ["Hereditary", "Alien"]


def test_list_search_is_case_insensitive_substring(client):
    make_movie(title="The Dark Knight", genre="Action")
    make_movie(title="Dark City", genre="Sci-Fi")
    make_movie(title="Heat", genre="Crime")

    r = client.get(f"{API}/movies", params={"search": "dARK"})
    assert sorted(m["title"] for m in r.json()) == ["Dark City", "The Dark Knight"]


def test_list_search_treats_like_wildcards_literally(client):
    make_movie(title="Alien")
    make_movie(title="Heat")
    make_movie(title="100% Wolf")
    make_movie(title="my_movie")

    def titles(search):
        return [m["title"] for m in client.get(f"{API}/movies", params={"search": search}).json()]

    assert titles("%") == ["100% Wolf"]
    assert titles("_") == ["my_movie"]
    assert titles("A_i") == []


def test_genres_are_distinct_and_sorted(client):
    make_movie(genre="Horror")
    make_movie(genre="Comedy")
    make_movie(genre="Horror")
    make_movie(genre="Action")

    assert client.get(f"{API}/movies/genres").json() == ["Action", "Comedy", "Horror"]


def test_get_unknown_movie(client):
    r = client.get(f"{API}/movies/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404
    assert r.json()["detail"]["message"] == "Movie not found"


def test_create_requires_admin(client, user_headers):
    payload = {"title": "Alien", "year": 1979, "genre": "Horror"}
    assert client.post(f"{API}/movies", json=payload).status_code == 401

    r = client.post(f"{API}/movies", json=payload, headers=user_headers)
    assert r.status_code == 403
    assert error_code(r) == "Unauthorized"


def test_create_update_toggle_delete(client, admin_headers):
    r = client.post(
        f"{API}/movies",
        headers=admin_headers,
        json={
            "title": " Alien ",
            "year": 1979,
            "genre": "Horror",
            "qualities": ["1080p", "4k", "1080p"],
        },
    )
    assert r.status_code == 201, r.text
    movie = r.json()
    assert movie["title"] == "Alien"
    assert movie["qualities"] == ["1080p", "4k"]
    assert movie["is_available"] is True

    r = client.patch(
        f"{API}/movies/{movie['id']}",
        headers=admin_headers,
        json={"year": 1986, "image_url": "https://img.example/alien.jpg"},
    )
    assert r.status_code == 200
    assert r.json()["year"] == 1986
    assert r.json()["title"] == "Alien"
    assert r.json()["image_url"] == "https://img.example/alien.jpg"

    r = client.post(f"{API}/movies/{movie['id']}/toggle-availability", headers=admin_headers)
    assert r.json() == {"id": movie["id"], "is_available": False}

    assert client.delete(f"{API}/movies/{movie['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/movies/{movie['id']}").status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "Alien", "year": 1979, "genre": "Horror", "qualities": ["8k"]},
        {"title": "Alien", "year": 1700, "genre": "Horror"},
        {"title": "   ", "year": 1979, "genre": "Horror"},
    ],
)
def test_create_rejects_invalid_payload(client, admin_headers, payload):
    assert client.post(f"{API}/movies", json=payload, headers=admin_headers).status_code == 422


def test_upload_poster(client, admin_headers, monkeypatch):
    movie_id = make_movie()
    uploads = []

    def fake_upload(path, file_bytes, content_type):
        uploads.append((path, file_bytes, content_type))
        return f"https://cdn.example/storage/v1/object/public/posters/{path}"

    monkeypatch.setattr(movie_service, "upload_to_storage", fake_upload)

    r = client.post(
        f"{API}/movies/{movie_id}/poster",
        headers=admin_headers,
        files={"file": ("poster.png", b"\x89PNG data", "image/png")},
    )
    assert r.status_code == 200, r.text
    assert uploads == [(f"movies/{movie_id}/poster.png", b"\x89PNG data", "image/png")]
    assert r.json()["image_url"].endswith(f"movies/{movie_id}/poster.png")


def test_upload_poster_rejects_unsupported_type(client, admin_headers):
    movie_id = make_movie()
    r = client.post(
        f"{API}/movies/{movie_id}/poster",
        headers=admin_headers,
        files={"file": ("poster.gif", b"GIF89a", "image/gif")},
    )
    assert r.status_code == 422
    assert error_code(r) == "ValidationError"
