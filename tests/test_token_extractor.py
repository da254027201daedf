"""Tests for reading the Cursor session token from the local state database."""

from __future__ import annotations

import os

import pytest

from cursor_usage import (
    CannotOpen,
    CredentialError,
    DatabaseNotFound,
    InvalidJwt,
    MissingSubClaim,
    QueryFailed,
    TokenInfo,
    TokenNotFound,
    database_path,
    extract_token,
    session_cookie_value,
    user_id_from_jwt,
)
from tests.conftest import make_jwt


class TestUserIdFromJwt:
    def test_provider_prefix_is_stripped(self):
        assert user_id_from_jwt(make_jwt({"sub": "auth0|abc123"})) == "abc123"

    def test_sub_without_pipe_is_used_verbatim(self):
        assert user_id_from_jwt(make_jwt({"sub": "abc123"})) == "abc123"

    def test_only_second_segment_is_taken(self):
        assert user_id_from_jwt(make_jwt({"sub": "google|u42|extra"})) == "u42"

    def test_two_segments_are_enough(self):
        jwt = make_jwt({"sub": "github|u7"}).rsplit(".", 1)[0]
        assert user_id_from_jwt(jwt) == "u7"

    def test_single_segment_is_invalid(self):
        with pytest.raises(InvalidJwt):
            user_id_from_jwt("not-a-jwt")

    def test_bad_base64_is_invalid(self):
        with pytest.raises(InvalidJwt):
            user_id_from_jwt("header.!!!notbase64!!!.sig")

    def test_non_json_payload_is_invalid(self):
        with pytest.raises(InvalidJwt):
            user_id_from_jwt("header.aGVsbG8gd29ybGQ.sig")  # "hello world"

    def test_missing_sub(self):
        with pytest.raises(MissingSubClaim):
            user_id_from_jwt(make_jwt({"email": "me@example.com"}))

    def test_non_string_sub(self):
        with pytest.raises(MissingSubClaim):
            user_id_from_jwt(make_jwt({"sub": 12345}))

    def test_errors_share_a_base_class(self):
        assert issubclass(InvalidJwt, CredentialError)
        assert issubclass(MissingSubClaim, CredentialError)


class TestSessionCookie:
    def test_separator_is_url_escaped(self):
        assert session_cookie_value("u1", "x.y.z") == "u1%3A%3Ax.y.z"


class TestDatabasePath:
    def test_macos(self):
        path = database_path("darwin")
        assert path.endswith(os.path.join(
            "Library", "Application Support", "Cursor", "User", "globalStorage", "state.vscdb",
        ))

    def test_linux_honours_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert database_path("linux") == os.path.join(
            str(tmp_path), "Cursor", "User", "globalStorage", "state.vscdb",
        )

    def test_windows_uses_appdata(self, monkeypatch, tmp_path):
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert database_path("win32").startswith(str(tmp_path))


class TestExtractToken:
    def test_reads_token_and_builds_cookie(self, state_db):
        jwt = make_jwt({"sub": "auth0|user_01"})
        info = extract_token(state_db(jwt))
        assert info == TokenInfo(session_token=f"user_01%3A%3A{jwt}", user_id="user_01")

    def test_blob_value_is_decoded(self, state_db):
        jwt = make_jwt({"sub": "auth0|blobby"})
        info = extract_token(state_db(jwt.encode()))
        assert info.user_id == "blobby"

    def test_missing_database(self, tmp_path):
        missing = str(tmp_path / "nope.vscdb")
        with pytest.raises(DatabaseNotFound, match="Cursor database not found at"):
            extract_token(missing)

    def test_logged_out(self, state_db):
        with pytest.raises(TokenNotFound, match="Are you logged in"):
            extract_token(state_db(None))

    def test_missing_table_is_a_query_failure(self, state_db):
        with pytest.raises(QueryFailed):
            extract_token(state_db(make_jwt({"sub": "a|b"}), table="OtherTable"))

    def test_garbage_file(self, tmp_path):
        path = tmp_path / "state.vscdb"
        path.write_bytes(b"this is not sqlite" * 100)
        with pytest.raises((CannotOpen, QueryFailed)):
            extract_token(str(path))

    def test_malformed_token_in_db(self, state_db):
        with pytest.raises(InvalidJwt):
            extract_token(state_db("garbage"))

    def test_database_is_left_untouched(self, state_db):
        path = state_db(make_jwt({"sub": "a|b"}))
        before = os.path.getmtime(path), os.path.getsize(path)
        extract_token(path)
        extract_token(path)
        assert (os.path.getmtime(path), os.path.getsize(path)) == before
        assert not os.path.exists(path + "-journal")
