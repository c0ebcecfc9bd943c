# Copyright 2024 sheet-relay authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Web Tokens

Provides support for creating (encoding) and verifying (decoding) JWTs,
especially JWTs generated and consumed by Google infrastructure.

See `rfc7519`_ for more details on JWTs.

To encode a JWT use :func:`encode`::

    from sheet_relay import crypt
    from sheet_relay import jwt

    signer = crypt.RSASigner.from_string(private_key)
    payload = {'some': 'payload'}
    encoded = jwt.encode(signer, payload)

To decode a JWT and verify claims use :func:`decode`::

    claims = jwt.decode(encoded, certs=public_certs)

You can also skip verification::

    claims = jwt.decode(encoded, verify=False)

.. _rfc7519: https://tools.ietf.org/html/rfc7519
"""

from collections.abc import Mapping
import json
from typing import Any, List, Optional, Tuple, Union

from sheet_relay import _helpers
from sheet_relay import crypt
from sheet_relay import exceptions

_ALGORITHM = "RS256"
_JSON_SEPARATORS = (",", ":")


def _encode_segment(value: Mapping) -> bytes:
    return _helpers.unpadded_urlsafe_b64encode(
        json.dumps(value, separators=_JSON_SEPARATORS).encode("utf-8")
    )


def encode(
    signer: crypt.Signer,
    payload: Mapping[str, Any],
    header: Optional[Mapping[str, Any]] = None,
    key_id: Optional[str] = None,
) -> bytes:
    """Make a signed JWT.

    The header and payload are serialized as compact JSON, so identical
    inputs always produce identical signing input.

    Args:
        signer (sheet_relay.crypt.Signer): The signer used to sign the JWT.
        payload (Mapping[str, str]): The JWT payload.
        header (Mapping[str, str]): Additional JWT header payload.
        key_id (str): The key id to add to the JWT header. If the
            signer has a key id it will be used as the default. If this is
            specified it will override the signer's key id.

    Returns:
        bytes: The encoded JWT.
    """
    if key_id is None:
        key_id = signer.key_id

    full_header = {"alg": _ALGORITHM, "typ": "JWT"}
    full_header.update(header or {})

    if key_id is not None:
        full_header["kid"] = key_id

    segments = [_encode_segment(full_header), _encode_segment(payload)]

    signing_input = b".".join(segments)
    signature = signer.sign(signing_input)
    segments.append(_helpers.unpadded_urlsafe_b64encode(signature))

    return b".".join(segments)


def _decode_jwt_segment(encoded_section: bytes) -> Any:
    """Decodes a single JWT segment."""
    section_bytes = _helpers.padded_urlsafe_b64decode(encoded_section)
    try:
        return json.loads(section_bytes.decode("utf-8"))
    except ValueError as caught_exc:
        msg = "Can't parse segment: {}".format(
            encoded_section.decode("utf-8", errors="replace")
        )
        raise exceptions.CredentialError(msg) from caught_exc


def _unverified_decode(
    token: Union[str, bytes]
) -> Tuple[Mapping[str, Any], Mapping[str, Any], bytes, bytes]:
    """Decodes a token and does no verification.

    Args:
        token (Union[str, bytes]): The encoded JWT.

    Returns:
        Tuple[Mapping, Mapping, bytes, bytes]: The header, payload, signed
            section, and signature.

    Raises:
        sheet_relay.exceptions.CredentialError: if there are an incorrect
            amount of segments in the token or segments of the wrong type.
    """
    token = _helpers.to_bytes(token)

    if token.count(b".") != 2:
        raise exceptions.CredentialError(
            "Wrong number of segments in token: {}".format(
                token.decode("utf-8", errors="replace")
            )
        )

    encoded_header, encoded_payload, signature = token.split(b".")
    signed_section = encoded_header + b"." + encoded_payload
    signature = _helpers.padded_urlsafe_b64decode(signature)

    header = _decode_jwt_segment(encoded_header)
    payload = _decode_jwt_segment(encoded_payload)

    if not isinstance(header, Mapping):
        raise exceptions.CredentialError("Header segment should be a JSON object.")

    if not isinstance(payload, Mapping):
        raise exceptions.CredentialError("Payload segment should be a JSON object.")

    return header, payload, signed_section, signature


def decode_header(token: Union[str, bytes]) -> Mapping[str, Any]:
    """Return the decoded header of a token.

    No verification is done. This is useful to extract the key id from
    the header in order to acquire the appropriate certificate to verify
    the token.

    Args:
        token (Union[str, bytes]): the encoded JWT.

    Returns:
        Mapping: The decoded JWT header.
    """
    header, _, _, _ = _unverified_decode(token)
    return header


def _verify_iat_and_exp(
    payload: Mapping[str, Any], clock_skew_in_seconds: int = 0
) -> None:
    """Verifies the ``iat`` (Issued At) and ``exp`` (Expires) claims in a token
    payload.

    Args:
        payload (Mapping[str, str]): The JWT payload.
        clock_skew_in_seconds (int): The clock skew used for `iat` and `exp`
            validation.

    Raises:
        sheet_relay.exceptions.CredentialError: if any checks failed.
    """
    now = _helpers.datetime_to_secs(_helpers.utcnow())

    for key in ("iat", "exp"):
        if key not in payload:
            raise exceptions.CredentialError(
                "Token does not contain required claim {}".format(key)
            )

    iat = payload["iat"]
    earliest = iat - clock_skew_in_seconds
    if now < earliest:
        raise exceptions.CredentialError(
            "Token used too early, {} < {}. Check that your computer's clock "
            "is set correctly.".format(now, iat)
        )

    exp = payload["exp"]
    latest = exp + clock_skew_in_seconds
    if latest < now:
        raise exceptions.CredentialError("Token expired, {} < {}".format(latest, now))


def decode(
    token: Union[str, bytes],
    certs: Union[str, bytes, List[Union[str, bytes]], None] = None,
    verify: bool = True,
    audience: Optional[str] = None,
    clock_skew_in_seconds: int = 0,
) -> Mapping[str, Any]:
    """Decode and verify a JWT.

    Args:
        token (Union[str, bytes]): The encoded JWT.
        certs (Union[str, bytes, Sequence]): The certificate or public key
            used to validate the token signature. Required when ``verify`` is
            True.
        verify (bool): Whether to perform signature and claim validation.
            Verification is done by default.
        audience (str): The audience claim, 'aud', that this JWT should
            contain. If None then the JWT's 'aud' parameter is not verified.
        clock_skew_in_seconds (int): The clock skew used for `iat` and `exp`
            validation.

    Returns:
        Mapping[str, str]: The deserialized JSON payload in the JWT.

    Raises:
        sheet_relay.exceptions.CredentialError: if any verification checks
            failed.
    """
    header, payload, signed_section, signature = _unverified_decode(token)

    if not verify:
        return payload

    key_alg = header.get("alg")
    if key_alg != _ALGORITHM:
        raise exceptions.CredentialError("Unsupported algorithm: {}".format(key_alg))

    if not certs:
        raise exceptions.CredentialError("No certificates to verify the token with.")

    if not crypt.verify_signature(signed_section, signature, certs):
        raise exceptions.CredentialError("Could not verify token signature.")

    _verify_iat_and_exp(payload, clock_skew_in_seconds)

    if audience is not None:
        claim_audience = payload.get("aud")
        if claim_audience != audience:
            raise exceptions.CredentialError(
                "Token has wrong audience {}, expected {}".format(
                    claim_audience, audience
                )
            )

    return payload
