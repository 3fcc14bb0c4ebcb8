"""Certificate helpers.

Only the signature of a single certificate is in reach here: the issuer's key
checks ``signatureValue`` over the encoded ``tbsCertificate``. Chains,
validity periods and revocation are left to the caller.
"""
from __future__ import annotations

from typing import Union

from asn1crypto import pem, x509

from .errors import DecodeError
from .signature import VerifyInfo


def load_certificate(data: Union[bytes, bytearray, str, x509.Certificate]) -> x509.Certificate:
    if isinstance(data, x509.Certificate):
        return data
    try:
        if isinstance(data, str):
            data = data.encode("ascii")
        raw = bytes(data)
        if pem.detect(raw):
            type_name, _, raw = pem.unarmor(raw)
            if type_name != "CERTIFICATE":
                raise DecodeError(f"expected a CERTIFICATE PEM block, got {type_name}")
        cert = x509.Certificate.load(raw, strict=True)
        # parse eagerly so a broken certificate fails here and not mid-verify
        cert["tbs_certificate"]["subject_public_key_info"]
        cert["signature_algorithm"]["algorithm"]
    except (ValueError, TypeError) as e:
        raise DecodeError("malformed certificate") from e
    return cert


def verify_info_from_certificate(data: Union[bytes, bytearray, str, x509.Certificate]) -> VerifyInfo:
    """Message = DER tbsCertificate, signature = (signatureAlgorithm, signatureValue)."""
    cert = load_certificate(data)
    try:
        tbs = cert["tbs_certificate"].dump()
        sig_oid = cert["signature_algorithm"]["algorithm"]
        sig_value = cert["signature_value"].native
    except (ValueError, TypeError) as e:
        raise DecodeError("malformed certificate signature fields") from e
    return VerifyInfo.new(tbs, sig_oid, sig_value)


__all__ = ["load_certificate", "verify_info_from_certificate"]
