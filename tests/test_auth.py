"""Tests for session token handling"""

from datetime import timedelta

from jose import jwt

from integrations_api.auth import ALGORITHM, create_session_token, decode_session_token


def test_round_trip():
    assert decode_session_token(create_session_token(42)) == 42


def test_expired_token_is_rejected():
    assert decode_session_token(create_session_token(42, expires_delta=timedelta(seconds=-5))) is None


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "42"}, "some-other-key", algorithm=ALGORITHM)

    assert decode_session_token(token) is None


def test_token_without_numeric_subject_is_rejected():
    from integrations_api.config import SECRET_KEY

    token = jwt.encode({"sub": "firebase-uid"}, SECRET_KEY, algorithm=ALGORITHM)

    assert decode_session_token(token) is None
