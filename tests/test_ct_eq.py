from x509verify.utils.ct import ct_eq
from x509verify.hashes import digest


def test_ct_eq_basic():
    assert ct_eq(b'abc', b'abc') is True
    assert ct_eq(b'abc', b'abd') is False
    assert ct_eq(b'abc', b'abcd') is False
    assert ct_eq(bytearray(b'abc'), b'abc') is True


def test_md2_digest_vector():
    # RFC 1319 test suite
    assert digest("md2", b"abc").hex() == "da853b0d3f88d99b30283a69e6ded6bb"
    assert digest("sha256", b"abc").hex().startswith("ba7816bf")
