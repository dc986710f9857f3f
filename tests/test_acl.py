"""Tests for the ACL codec."""

import pytest

from zktreelib import ACLParseError, Perm
from zktreelib.acl import (
    ACLEntry,
    build_digest_acl,
    digest_acl,
    digest_credential,
    format_acl,
    format_perms,
    parse_acl,
    parse_perms,
    world_acl,
)


class TestParsePerms:
    """Permission field parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("r", Perm.READ),
        ("w", Perm.WRITE),
        ("c", Perm.CREATE),
        ("d", Perm.DELETE),
        ("a", Perm.ADMIN),
        ("rw", Perm.READ | Perm.WRITE),
        ("cdrwa", Perm.ALL),
        ("awrdc", Perm.ALL),
        ("rr", Perm.READ),
    ])
    def test_letters(self, text, expected):
        assert parse_perms(text) == expected

    @pytest.mark.parametrize("number", [0, 1, 7, 16, 30, 31])
    def test_numbers_in_range(self, number):
        assert parse_perms(str(number)) == number

    @pytest.mark.parametrize("number", [32, 100, 1000000])
    def test_numbers_clamped_to_31(self, number):
        """Numeric input above the 5-bit range is clamped, not rejected."""
        assert parse_perms(str(number)) == 31

    def test_fractional_number_truncates(self):
        assert parse_perms("3.9") == 3
        assert parse_perms("40.5") == 31

    def test_empty_is_no_permissions(self):
        assert parse_perms("") == 0

    @pytest.mark.parametrize("text", ["x", "rwx", "R", "read", "-1", "r w", " 7", "7 ", "1_0"])
    def test_invalid_rejected(self, text):
        with pytest.raises(ACLParseError):
            parse_perms(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_perms("z")


class TestParseACL:
    """ACL text decoding."""

    def test_single_entry(self):
        assert parse_acl("world:anyone:cdrwa") == [ACLEntry("world", "anyone", Perm.ALL)]

    def test_numeric_permissions(self):
        assert parse_acl("world:anyone:31") == [ACLEntry("world", "anyone", Perm.ALL)]

    def test_multiple_entries_keep_order_and_duplicates(self):
        acl = parse_acl("ip:10.0.0.1:r,world:anyone:rw,ip:10.0.0.1:r")
        assert [entry.scheme for entry in acl] == ["ip", "world", "ip"]
        assert acl[0] == acl[2]
        assert acl[1].perms == Perm.READ | Perm.WRITE

    def test_digest_identity_rejoined(self):
        acl = parse_acl("digest:alice:hash123:rw")
        assert acl == [ACLEntry("digest", "alice:hash123", Perm.READ | Perm.WRITE)]

    def test_non_digest_extra_fields_ignored(self):
        """Only the digest scheme gets the four-field treatment."""
        acl = parse_acl("auth:user:r:extra")
        assert acl == [ACLEntry("auth", "user", Perm.READ)]

    def test_invalid_entry_discards_everything(self):
        with pytest.raises(ACLParseError):
            parse_acl("world:anyone:r,ip:1.2.3.4:q,auth::a")

    def test_too_few_fields(self):
        with pytest.raises(ACLParseError):
            parse_acl("world:anyone")


class TestFormatACL:
    """ACL rendering."""

    def test_fixed_letter_order(self):
        """Letters always render as c, d, r, w, a regardless of input order."""
        assert format_perms(Perm.ALL) == "cdrwa"
        assert format_perms(Perm.READ | Perm.ADMIN | Perm.CREATE) == "cra"
        assert format_perms(0) == ""

    def test_entries(self):
        acl = [ACLEntry("world", "anyone", Perm.READ | Perm.WRITE),
               ACLEntry("ip", "127.0.0.1", Perm.ALL)]
        assert format_acl(acl) == ["world:anyone:rw", "ip:127.0.0.1:cdrwa"]

    def test_digest_round_trip(self):
        acl = parse_acl("digest:alice:hash123:rw")
        assert format_acl(acl) == ["digest:alice:hash123:rw"]

    @pytest.mark.parametrize("letters", ["r", "wa", "dcr", "arwdc", "cw"])
    def test_letter_set_survives_round_trip(self, letters):
        rendered = format_acl(parse_acl(f"world:anyone:{letters}"))[0]
        assert set(rendered.rsplit(":", 1)[1]) == set(letters)


class TestBuilders:
    """ACL construction helpers."""

    def test_world_acl_defaults_to_all(self):
        assert world_acl() == [ACLEntry("world", "anyone", Perm.ALL)]
        assert world_acl(Perm.READ)[0].perms == Perm.READ

    def test_digest_credential_matches_zookeeper_digest(self):
        # base64(sha1("super:secret"))
        assert digest_credential("super", "secret") == "super:lK75jTNcA+U9vtVEw5vB51mj/w4="

    def test_digest_acl(self):
        entry = digest_acl(Perm.READ, "super", "secret")
        assert entry.scheme == "digest"
        assert entry.id.startswith("super:")
        assert entry.perms == Perm.READ

    def test_build_digest_acl_one_entry_per_value(self):
        acl = build_digest_acl("alice", "pw", "31,1,99")
        assert [entry.perms for entry in acl] == [31, 1, 31]
        assert len({entry.id for entry in acl}) == 1

    @pytest.mark.parametrize("perms_text", ["31,rw", "31, 1", "1_0", ""])
    def test_build_digest_acl_rejects_non_numbers(self, perms_text):
        with pytest.raises(ACLParseError):
            build_digest_acl("alice", "pw", perms_text)
