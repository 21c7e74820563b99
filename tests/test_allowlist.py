import pytest

from dossierkit.errors import InvalidInputError
from dossierkit.policy.allowlist import AllowlistEntry


def make_entry(scheme="https", host="example.com", port=0, path_prefix=None):
    return AllowlistEntry(
        scheme=scheme,
        host=host,
        port=port,
        path_prefix=path_prefix,
        purpose="egress",
        policy_pack_id="pack",
        policy_pack_version="1",
    )


def test_canonicalize_lowercases_scheme_and_host():
    entry = make_entry(scheme="HTTPS", host="Example.COM").canonicalize()
    assert entry.scheme == "https"
    assert entry.host == "example.com"


def test_canonicalize_default_ports():
    assert make_entry(scheme="https").canonicalize().port == 443
    assert make_entry(scheme="http").canonicalize().port == 80
    assert make_entry(scheme="http", port=8080).canonicalize().port == 8080


def test_canonicalize_rejects_other_schemes():
    with pytest.raises(InvalidInputError):
        make_entry(scheme="ftp").canonicalize()


def test_canonicalize_normalises_path_prefix():
    entry = make_entry(path_prefix="api\\v1").canonicalize()
    assert entry.path_prefix == "/api/v1"


def test_canonicalize_rejects_parent_segments():
    with pytest.raises(InvalidInputError):
        make_entry(path_prefix="/api/../secret").canonicalize()


def test_canonicalize_punycodes_unicode_host():
    entry = make_entry(host="bücher.example").canonicalize()
    assert entry.host == "xn--bcher-kva.example"


def test_canonicalize_rejects_bad_host():
    with pytest.raises(InvalidInputError):
        make_entry(host="exa mple.com").canonicalize()


def test_canonicalize_is_idempotent():
    once = make_entry(scheme="HTTP", host="Example.com", path_prefix="x").canonicalize()
    assert once.canonicalize() == once


def test_matches_url_basic():
    entry = make_entry().canonicalize()
    assert entry.matches_url("https://example.com/anything")
    assert entry.matches_url("https://EXAMPLE.com:443/")


def test_matches_url_mismatches():
    entry = make_entry().canonicalize()
    assert not entry.matches_url("http://example.com/")
    assert not entry.matches_url("https://other.example.com/")
    assert not entry.matches_url("https://example.com:8443/")
    assert not entry.matches_url("not a url")


def test_matches_url_path_prefix():
    entry = make_entry(path_prefix="/api").canonicalize()
    assert entry.matches_url("https://example.com/api/items")
    assert not entry.matches_url("https://example.com/other")
    assert not entry.matches_url("https://example.com")


def test_matches_unicode_url_against_canonical_entry():
    entry = make_entry(host="bücher.example").canonicalize()
    assert entry.matches_url("https://bücher.example/")


def test_to_dict_omits_missing_path_prefix():
    data = make_entry().canonicalize().to_dict()
    assert "path_prefix" not in data
    assert data["port"] == 443
    assert data["policy_pack_id"] == "pack"


def test_to_dict_includes_path_prefix():
    data = make_entry(path_prefix="/api").canonicalize().to_dict()
    assert data["path_prefix"] == "/api"